"""The NPU status panel.

``render_initial`` builds the whole panel once and returns a ``Surface``
holding references to every element a later cycle may touch.
``apply_update`` patches those elements in place and leaves the static
structure alone.
"""

from dataclasses import dataclass

from .dom import E, Element, inner_html, replace_children, set_text, text_content
from .formatter import format_byte_size, format_clock, format_memory_kib, format_packet_count
from .i18n import _
from .model import UNKNOWN, ViewModel, build_view_model
from .table import columns, render_rows, row_elements

ROOT_ID = "npu-panel"


@dataclass
class Surface:
    root: Element
    version: Element
    status: Element
    clock: Element
    memory: Element
    offload: Element
    summary: Element
    table_body: Element
    refresh_button: Element


# ── per-field text ───────────────────────────────────────────────────────────

def _version_text(vm, translate):
    v = vm.status.firmware_version
    return translate("Not available") if v == UNKNOWN else v


def _status_badge(vm, translate):
    s = vm.status
    if s.loaded:
        text = translate("Active")
        if s.device_name:
            text += f" ({s.device_name})"
        return E("span", {"class": "label label-success"}, text)
    return E("span", {"class": "label label-danger"}, translate("Inactive"))


def _clock_text(vm, translate):
    clock = format_clock(vm.status.clock_hz) or translate("unknown")
    return f"{clock} / {vm.status.core_count} {translate('cores')}"


def _memory_text(vm, translate):
    regions = len(vm.status.memory_regions)
    return f"{format_memory_kib(vm.total_memory_kib)} ({regions} {translate('memory regions')})"


def _offload_text(vm, translate):
    return (f"{format_packet_count(vm.status.offload_packets)} {translate('packets')}"
            f" / {format_byte_size(vm.status.offload_bytes)}")


def _summary_text(vm, translate):
    return (f"{translate('Total:')} {vm.total}"
            f" | {translate('Bound:')} {vm.bound}"
            f" | {translate('Unbound:')} {vm.unbound}")


def _as_view_model(data):
    if isinstance(data, ViewModel):
        return data
    status, flows = data
    return build_view_model(status, flows)


# ── render / patch ───────────────────────────────────────────────────────────

def _info_row(label, cell):
    return E("tr", {"class": "tr"}, [
        E("td", {"class": "td", "width": "33%"}, E("strong", {}, label)),
        cell,
    ])


def render_initial(data, translate=_):
    """Build the full panel from a ``load()`` result (or a ready ViewModel)."""
    vm = _as_view_model(data)

    version = E("td", {"class": "td", "id": "npu-version"}, _version_text(vm, translate))
    status = E("td", {"class": "td", "id": "npu-status"}, _status_badge(vm, translate))
    clock = E("td", {"class": "td", "id": "npu-clock"}, _clock_text(vm, translate))
    memory = E("td", {"class": "td", "id": "npu-memory"}, _memory_text(vm, translate))
    offload = E("td", {"class": "td", "id": "npu-offload"}, _offload_text(vm, translate))
    summary = E("div", {"class": "cbi-section-descr", "id": "ppe-summary"}, _summary_text(vm, translate))
    refresh_button = E("button", {"class": "btn btn-primary", "id": "npu-refresh", "type": "button"},
                       translate("Manual Refresh"))
    table_body = E("tbody", {"id": "ppe-entries"}, row_elements(render_rows(vm.entries, translate=translate)))

    root = E("div", {"class": "cbi-map", "id": ROOT_ID}, [
        E("h2", {}, translate("Airoha NPU Status")),
        E("div", {"style": "margin-bottom:10px;"}, refresh_button),
        E("div", {"class": "cbi-section"}, [
            E("h3", {}, translate("NPU Information")),
            E("table", {"class": "table table-striped"}, [
                _info_row(translate("NPU Firmware Version"), version),
                _info_row(translate("NPU Status"), status),
                _info_row(translate("NPU Clock / Cores"), clock),
                _info_row(translate("Reserved Memory"), memory),
                _info_row(translate("Offload Statistics"), offload),
            ]),
        ]),
        E("div", {"class": "cbi-section"}, [
            E("h3", {}, translate("PPE Flow Offload Entries")),
            summary,
            E("div", {"style": "overflow-x:auto;"}, [
                E("table", {"class": "table table-striped", "id": "ppe-entries-table"}, [
                    E("thead", {}, E("tr", {"class": "tr cbi-section-table-titles"},
                                     [E("th", {"class": "th"}, title) for title in columns(translate)])),
                    table_body,
                ]),
            ]),
        ]),
    ])

    return Surface(
        root=root,
        version=version,
        status=status,
        clock=clock,
        memory=memory,
        offload=offload,
        summary=summary,
        table_body=table_body,
        refresh_button=refresh_button,
    )


def apply_update(surface, data, translate=_):
    """Patch ``surface`` with a later ``load()`` result. Returns the ViewModel."""
    vm = _as_view_model(data)

    set_text(surface.version, _version_text(vm, translate))

    badge = _status_badge(vm, translate)
    current = surface.status[0] if len(surface.status) else None
    if current is None or current.get("class") != badge.get("class") \
            or text_content(current) != text_content(badge):
        replace_children(surface.status, [badge])

    set_text(surface.clock, _clock_text(vm, translate))
    set_text(surface.memory, _memory_text(vm, translate))
    set_text(surface.offload, _offload_text(vm, translate))
    set_text(surface.summary, _summary_text(vm, translate))

    replace_children(surface.table_body, row_elements(render_rows(vm.entries, translate=translate)))
    return vm


def set_busy(surface, busy, translate=_):
    button = surface.refresh_button
    if busy:
        button.set("disabled", "disabled")
        set_text(button, translate("Refreshing..."))
    else:
        button.attrib.pop("disabled", None)
        set_text(button, translate("Manual Refresh"))


def fragments(surface):
    """Inner HTML of every patchable element, keyed by element id."""
    return {
        el.get("id"): inner_html(el)
        for el in (surface.version, surface.status, surface.clock, surface.memory,
                   surface.offload, surface.summary, surface.table_body)
    }
