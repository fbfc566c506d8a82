"""Airoha NPU status dashboard

Run:  python3 -m npu_status [--port 8765] [--ubus-url http://<router>/ubus]
Then: http://<host>:8765
"""

import argparse
import json
import logging
import time

from flask import Flask, Response, jsonify
from markupsafe import escape

from . import config, i18n
from .i18n import _
from .logging_config import setup_logging
from .rpc import UbusClient
from .sync import SyncEngine

logger = logging.getLogger(__name__)

# ─── Flask app ───────────────────────────────────────────────────────────────


def create_app(engine):
    app = Flask(__name__)

    @app.route("/")
    def index():
        return Response(page_html(engine.html(), engine.interval), mimetype="text/html")

    @app.route("/api/panel")
    def api_panel():
        return jsonify(engine.fragments())

    @app.route("/api/status")
    def api_status():
        vm = engine.view_model()
        return jsonify(vm.to_dict() if vm is not None else {})

    @app.route("/api/refresh", methods=["POST"])
    def api_refresh():
        engine.refresh()
        return jsonify(engine.fragments())

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "ts": time.time(), "mounted": engine.surface is not None})

    return app


# ─── Page shell ──────────────────────────────────────────────────────────────

def page_html(panel, interval):
    return PAGE_HTML % {
        "panel":    panel,
        "lang":     escape(config.LANG or "en"),
        "title":    escape(_("Airoha NPU Status")),
        "busy":     json.dumps(_("Refreshing...")),
        "idle":     json.dumps(_("Manual Refresh")),
        "interval": int(interval * 1000),
    }


PAGE_HTML = r"""<!DOCTYPE html>
<html lang="%(lang)s">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>%(title)s</title>
<style>
:root {
  --bg:     #09101f;
  --card:   #0f1829;
  --border: #1e2d45;
  --text:   #e8eef8;
  --muted:  #5a7090;
  --label:  #8da8c8;
  --green:  #3dd68c;
  --yellow: #f5c542;
  --red:    #f26b6b;
  --blue:   #5ca8ff;
}

* { box-sizing: border-box; }

body {
  background: var(--bg);
  color: var(--text);
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", system-ui, sans-serif;
  font-size: 14px;
  margin: 0;
  padding: 16px;
}

h2 { color: var(--blue); font-size: 18px; margin: 0 0 12px; }
h3 { color: var(--label); font-size: 12px; text-transform: uppercase; letter-spacing: 0.08em; }

.cbi-section {
  background: var(--card);
  border: 1px solid var(--border);
  border-radius: 12px;
  padding: 12px 16px;
  margin-bottom: 12px;
}
.cbi-section-descr { color: var(--muted); margin-bottom: 8px; }

.table { width: 100%%; border-collapse: collapse; font-size: 12px; }
.table td, .table th { padding: 5px 6px; border-bottom: 1px solid rgba(255,255,255,0.04); text-align: left; }
.table th { color: var(--label); }
.table td { font-family: "SF Mono", "Fira Code", ui-monospace, monospace; }

.label { padding: 1px 8px; border-radius: 10px; font-size: 11px; font-weight: 600; }
.label-success { background: rgba(61,214,140,0.12);  color: var(--green); }
.label-warning { background: rgba(245,197,66,0.12);  color: var(--yellow); }
.label-danger  { background: rgba(242,107,107,0.12); color: var(--red); }
.label-default { background: rgba(255,255,255,0.06); color: var(--muted); }

.btn {
  background: #3a6ddb;
  color: #fff;
  border: none;
  border-radius: 6px;
  padding: 6px 14px;
  cursor: pointer;
}
.btn[disabled] { opacity: 0.5; cursor: default; }
</style>
</head>
<body>

<div id="panel">%(panel)s</div>

<script>
const shown = {};

// patch only the elements whose server-side markup changed
function patch(frags) {
  for (const [id, html] of Object.entries(frags)) {
    if (shown[id] === html) continue;
    const el = document.getElementById(id);
    if (el) el.innerHTML = html;
    shown[id] = html;
  }
}

async function load(url, opts) {
  try {
    const res = await fetch(url, opts);
    if (!res.ok) throw new Error(res.status);
    patch(await res.json());
  } catch (e) {
    console.warn("Panel fetch error:", e);
  }
}

const btn = document.getElementById("npu-refresh");
if (btn) btn.addEventListener("click", async () => {
  if (btn.disabled) return;
  btn.disabled = true;
  btn.textContent = %(busy)s;
  await load("/api/refresh", { method: "POST" });
  btn.disabled = false;
  btn.textContent = %(idle)s;
});

load("/api/panel");
setInterval(() => load("/api/panel"), %(interval)d);
</script>
</body>
</html>
"""

# ─── Entry point ─────────────────────────────────────────────────────────────


def main(argv=None):
    ap = argparse.ArgumentParser(description="Airoha NPU status dashboard")
    ap.add_argument("--host", default=config.HOST)
    ap.add_argument("--port", type=int, default=config.PORT)
    ap.add_argument("--ubus-url", default=config.UBUS_URL)
    ap.add_argument("--interval", type=int, default=config.POLL_INTERVAL,
                    help="seconds between poll ticks")
    ap.add_argument("--lang", default=config.LANG)
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    setup_logging("npu_status", args.log_level)
    if args.lang:
        i18n.install([args.lang])

    engine = SyncEngine.from_ubus(UbusClient(url=args.ubus_url), interval=args.interval).start()
    app = create_app(engine)

    logger.info("NPU status dashboard -> http://%s:%s/", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
