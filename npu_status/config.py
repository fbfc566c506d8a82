"""Runtime settings, overridable through NPU_STATUS_* environment variables."""

import os


def _int_env(name, default):
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name, default):
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return float(raw)
    except ValueError:
        return default


# ─── Web server ──────────────────────────────────────────────────────────────

HOST = os.getenv("NPU_STATUS_HOST", "0.0.0.0")
PORT = _int_env("NPU_STATUS_PORT", 8765)

# ─── Backend (ubus over HTTP) ────────────────────────────────────────────────

UBUS_URL = os.getenv("NPU_STATUS_UBUS_URL", "http://127.0.0.1/ubus")
UBUS_SESSION = os.getenv("NPU_STATUS_UBUS_SESSION", "0" * 32)   # anonymous session
UBUS_OBJECT = os.getenv("NPU_STATUS_UBUS_OBJECT", "luci.airoha_npu")
RPC_TIMEOUT = _float_env("NPU_STATUS_RPC_TIMEOUT", 5.0)

# ─── Presentation ────────────────────────────────────────────────────────────

POLL_INTERVAL = _int_env("NPU_STATUS_POLL_INTERVAL", 10)   # seconds between poll ticks
MAX_ROWS = 200                                              # flow rows shown in the table
LANG = os.getenv("NPU_STATUS_LANG") or None
