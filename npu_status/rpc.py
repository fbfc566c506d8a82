"""Minimal ubus JSON-RPC client (rpcd's ``/ubus`` HTTP endpoint)."""

import itertools
import json
import logging
import urllib.request

from . import config

logger = logging.getLogger(__name__)

UBUS_STATUS_OK = 0


class UbusError(RuntimeError):
    pass


class UbusClient:
    def __init__(self, url=None, session=None, timeout=None):
        self.url = url or config.UBUS_URL
        self.session = session or config.UBUS_SESSION
        self.timeout = config.RPC_TIMEOUT if timeout is None else timeout
        self._ids = itertools.count(1)

    def call(self, obj, method, params=None):
        """ubus call <obj> <method> <params> -> reply dict."""
        body = json.dumps({
            "jsonrpc": "2.0",
            "id":      next(self._ids),
            "method":  "call",
            "params":  [self.session, obj, method, params or {}],
        }).encode()
        req = urllib.request.Request(
            self.url, data=body, headers={"Content-Type": "application/json"}, method="POST"
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                reply = json.loads(resp.read())
        except (OSError, ValueError) as e:  # URLError and timeouts are OSErrors
            raise UbusError(f"{obj}.{method}: {e}") from e

        if not isinstance(reply, dict):
            raise UbusError(f"{obj}.{method}: malformed reply")
        if "error" in reply:
            err = reply["error"]
            message = err.get("message", err) if isinstance(err, dict) else err
            raise UbusError(f"{obj}.{method}: {message}")

        result = reply.get("result")
        if not isinstance(result, list) or not result:
            raise UbusError(f"{obj}.{method}: missing result")
        if result[0] != UBUS_STATUS_OK:
            raise UbusError(f"{obj}.{method}: ubus status {result[0]}")

        logger.debug("ubus %s.%s ok", obj, method)
        return result[1] if len(result) > 1 else {}

    def declare(self, obj, method):
        """Bind ``obj.method`` into a zero-argument fetch callable."""
        def fetch():
            return self.call(obj, method)
        fetch.__name__ = f"{obj}.{method}"
        return fetch
