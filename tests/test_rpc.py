import json
import urllib.error

import pytest

from npu_status.rpc import UbusClient, UbusError


class FakeResponse:
    def __init__(self, payload):
        self._body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture()
def urlopen(monkeypatch):
    requests = []
    replies = []

    def fake(req, timeout=None):
        requests.append((req, timeout))
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return FakeResponse(reply)

    monkeypatch.setattr("urllib.request.urlopen", fake)
    fake.requests = requests
    fake.replies = replies
    return fake


def test_call_builds_jsonrpc_request(urlopen):
    urlopen.replies.append({"jsonrpc": "2.0", "id": 1, "result": [0, {"npu_loaded": True}]})
    client = UbusClient(url="http://router/ubus", session="abc", timeout=3)

    assert client.call("luci.airoha_npu", "getStatus") == {"npu_loaded": True}

    req, timeout = urlopen.requests[0]
    assert req.full_url == "http://router/ubus"
    assert req.get_method() == "POST"
    assert timeout == 3
    body = json.loads(req.data)
    assert body["method"] == "call"
    assert body["params"] == ["abc", "luci.airoha_npu", "getStatus", {}]


def test_declare_returns_zero_arg_fetch(urlopen):
    urlopen.replies.append({"result": [0, {"entries": []}]})
    fetch = UbusClient(url="http://router/ubus").declare("luci.airoha_npu", "getPpeEntries")
    assert fetch() == {"entries": []}
    assert fetch.__name__ == "luci.airoha_npu.getPpeEntries"


def test_status_only_reply_is_empty(urlopen):
    urlopen.replies.append({"result": [0]})
    assert UbusClient(url="http://x/ubus").call("o", "m") == {}


@pytest.mark.parametrize("reply", [
    {"result": [6]},                                            # permission denied
    {"error": {"code": -32002, "message": "Access denied"}},
    {"result": []},
    {"id": 1},
    ["not", "a", "dict"],
    b"<html>502 Bad Gateway</html>",
    urllib.error.URLError("connection refused"),
    TimeoutError("timed out"),
])
def test_failures_raise_ubus_error(urlopen, reply):
    urlopen.replies.append(reply)
    with pytest.raises(UbusError):
        UbusClient(url="http://x/ubus").call("luci.airoha_npu", "getStatus")
