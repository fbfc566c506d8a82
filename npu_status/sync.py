"""Keeps the panel in sync with the backend.

Three triggers drive a cycle of fetch -> normalize -> patch: the initial
mount, the manual refresh button and the poll thread.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from . import config
from .dom import to_html
from .i18n import _
from .model import build_view_model
from .panel import apply_update, fragments, render_initial, set_busy

logger = logging.getLogger(__name__)


def status_placeholder():
    return {}


def flows_placeholder():
    return {"entries": []}


def _guarded(fetch, placeholder):
    def run():
        try:
            return fetch()
        except Exception as e:
            logger.warning("Failed to get %s: %s", getattr(fetch, "__name__", "data"), e)
            return placeholder()
    return run


class SyncEngine:
    def __init__(self, fetch_status, fetch_flows, interval=None, translate=_):
        self.fetch_status = fetch_status
        self.fetch_flows = fetch_flows
        self.interval = config.POLL_INTERVAL if interval is None else interval
        self.translate = translate
        self.surface = None
        self._vm = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = None
        self._executor = None

    @classmethod
    def from_ubus(cls, client, obj=None, **kwargs):
        obj = obj or config.UBUS_OBJECT
        return cls(client.declare(obj, "getStatus"), client.declare(obj, "getPpeEntries"), **kwargs)

    # ── fetch ────────────────────────────────────────────────────────────────

    def load(self):
        """Fetch status and flow entries together. Never raises."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="npu-fetch")
            executor = self._executor
        status = executor.submit(_guarded(self.fetch_status, status_placeholder))
        flows = executor.submit(_guarded(self.fetch_flows, flows_placeholder))
        return status.result(), flows.result()

    # ── triggers ─────────────────────────────────────────────────────────────

    def mount(self):
        vm = build_view_model(*self.load())
        with self._lock:
            self.surface = render_initial(vm, translate=self.translate)
            self._vm = vm
        return self.surface

    def _cycle(self):
        vm = build_view_model(*self.load())
        with self._lock:
            apply_update(self.surface, vm, translate=self.translate)
            self._vm = vm
        logger.debug("panel updated: %d entries (%d bound, %d unbound)",
                     vm.total, vm.bound, vm.unbound)
        return vm

    def refresh(self):
        """Manual refresh: the button stays disabled for one cycle."""
        if self.surface is None:
            self.mount()
            return self._vm
        with self._lock:
            set_busy(self.surface, True, translate=self.translate)
        try:
            return self._cycle()
        finally:
            with self._lock:
                set_busy(self.surface, False, translate=self.translate)

    def tick(self):
        try:
            self._cycle()
        except Exception:
            logger.exception("poll tick failed")

    # ── scheduler ────────────────────────────────────────────────────────────

    def start(self):
        if self.surface is None:
            self.mount()
        if self._thread is not None and self._thread.is_alive():
            return self
        self._stop.clear()

        def loop():
            while not self._stop.wait(self.interval):
                self.tick()

        self._thread = threading.Thread(target=loop, name="npu-poll", daemon=True)
        self._thread.start()
        logger.info("polling every %ss", self.interval)
        return self

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval + 1)
            self._thread = None
            logger.info("polling stopped")
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    # ── snapshots for the web layer ──────────────────────────────────────────

    def html(self):
        with self._lock:
            return to_html(self.surface.root) if self.surface is not None else ""

    def fragments(self):
        with self._lock:
            return fragments(self.surface) if self.surface is not None else {}

    def view_model(self):
        with self._lock:
            return self._vm
