from npu_status import i18n
from npu_status.dom import text_content
from npu_status.panel import render_initial
from npu_status.table import render_rows


def shout(message):
    return message.upper()


def test_fallback_returns_message_id():
    i18n.install(["xx_XX"])
    try:
        assert i18n._("Manual Refresh") == "Manual Refresh"
    finally:
        i18n.install()


def test_labels_go_through_translate(status_payload, flow_payload):
    surface = render_initial((status_payload, flow_payload), translate=shout)

    assert surface.root.find("h2").text == "AIROHA NPU STATUS"
    assert surface.refresh_button.text == "MANUAL REFRESH"
    assert [th.text for th in surface.root.iter("th")][:2] == ["INDEX", "STATE"]
    assert text_content(surface.summary) == "TOTAL: 3 | BOUND: 1 | UNBOUND: 1"
    assert text_content(surface.status) == "ACTIVE (en7581-npu)"
    # data values are not translated
    assert text_content(surface.version) == "7.5.2.1"


def test_placeholder_message_is_translated():
    assert render_rows([], translate=shout)[0].message == "NO PPE FLOW ENTRIES AVAILABLE"
