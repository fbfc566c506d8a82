"""Normalization of the raw ubus payloads into a shape-safe view model.

The backend sends loosely-typed JSON. Everything optional is resolved here, so
the table renderer and panel never see ``None`` or a non-list where a list is
expected.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TypedDict

from .formatter import as_number, total_memory_kib

UNKNOWN = "unknown"
ETH_ABSENT = "00:00:00:00:00:00->00:00:00:00:00:00"

# ─── Raw payload shapes ──────────────────────────────────────────────────────


class MemoryRegionPayload(TypedDict, total=False):
    size: str


class StatusPayload(TypedDict, total=False):
    npu_version: str
    npu_loaded: bool
    npu_device: str
    npu_clock: int
    npu_cores: int
    memory_regions: List[MemoryRegionPayload]
    offload_packets: int
    offload_bytes: int


class FlowEntryPayload(TypedDict, total=False):
    index: int
    state: str
    type: str
    orig: str
    new_flow: str
    eth: str
    packets: int
    bytes: int


class FlowPayload(TypedDict, total=False):
    entries: List[FlowEntryPayload]


# ─── Normalized view model ───────────────────────────────────────────────────


class FlowState(Enum):
    BOUND = "BND"
    UNBOUND = "UNB"
    OTHER = "other"

    @classmethod
    def classify(cls, tag):
        if tag == cls.BOUND.value:
            return cls.BOUND
        if tag == cls.UNBOUND.value:
            return cls.UNBOUND
        return cls.OTHER


@dataclass(frozen=True)
class MemoryRegion:
    size: str


@dataclass(frozen=True)
class StatusView:
    firmware_version: str = UNKNOWN
    loaded: bool = False
    device_name: str = ""
    clock_hz: float = 0
    core_count: int = 0
    memory_regions: List[MemoryRegion] = field(default_factory=list)
    offload_packets: float = 0
    offload_bytes: float = 0


@dataclass(frozen=True)
class FlowEntry:
    index: str = ""
    state: FlowState = FlowState.OTHER
    state_tag: str = ""
    type: str = ""
    original_flow: str = ""
    new_flow: str = ""
    ethernet_pair: str = ""
    packets: float = 0
    bytes: float = 0


@dataclass(frozen=True)
class ViewModel:
    status: StatusView
    entries: List[FlowEntry]
    total_memory_kib: float
    total: int
    bound: int
    unbound: int
    other: int

    def to_dict(self):
        return {
            "status": {
                "firmware_version": self.status.firmware_version,
                "loaded":           self.status.loaded,
                "device_name":      self.status.device_name,
                "clock_hz":         self.status.clock_hz,
                "core_count":       self.status.core_count,
                "memory_regions":   [r.size for r in self.status.memory_regions],
                "offload_packets":  self.status.offload_packets,
                "offload_bytes":    self.status.offload_bytes,
            },
            "total_memory_kib": self.total_memory_kib,
            "counts": {
                "total":   self.total,
                "bound":   self.bound,
                "unbound": self.unbound,
                "other":   self.other,
            },
            "entries": [
                {
                    "index":         e.index,
                    "state":         e.state.name.lower(),
                    "state_tag":     e.state_tag,
                    "type":          e.type,
                    "original_flow": e.original_flow,
                    "new_flow":      e.new_flow,
                    "ethernet_pair": e.ethernet_pair,
                    "packets":       e.packets,
                    "bytes":         e.bytes,
                }
                for e in self.entries
            ],
        }


# ── coercion helpers ─────────────────────────────────────────────────────────

def _text(value, default=""):
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value).strip()
    return text or default


def _as_dict(value):
    return value if isinstance(value, dict) else {}


def _as_list(value):
    return value if isinstance(value, list) else []


def normalize_status(payload: Optional[StatusPayload]) -> StatusView:
    raw = _as_dict(payload)
    regions = [
        MemoryRegion(size=_text(_as_dict(r).get("size")))
        for r in _as_list(raw.get("memory_regions"))
    ]
    return StatusView(
        firmware_version=_text(raw.get("npu_version"), UNKNOWN),
        loaded=bool(raw.get("npu_loaded")),
        device_name=_text(raw.get("npu_device")),
        clock_hz=as_number(raw.get("npu_clock")),
        core_count=int(as_number(raw.get("npu_cores"))),
        memory_regions=regions,
        offload_packets=as_number(raw.get("offload_packets")),
        offload_bytes=as_number(raw.get("offload_bytes")),
    )


def normalize_entry(payload: Optional[FlowEntryPayload]) -> FlowEntry:
    raw = _as_dict(payload)
    tag = _text(raw.get("state"))
    eth = _text(raw.get("eth"))
    return FlowEntry(
        index=_text(raw.get("index")),
        state=FlowState.classify(tag),
        state_tag=tag,
        type=_text(raw.get("type")),
        original_flow=_text(raw.get("orig")),
        new_flow=_text(raw.get("new_flow")),
        ethernet_pair="" if eth == ETH_ABSENT else eth,
        packets=as_number(raw.get("packets")),
        bytes=as_number(raw.get("bytes")),
    )


def build_view_model(status_payload: Optional[StatusPayload],
                     flow_payload: Optional[FlowPayload]) -> ViewModel:
    """Build the view model for one fetch cycle.

    Either payload may be the failure placeholder (``{}`` and
    ``{"entries": []}``) or an arbitrary malformed value.
    """
    status = normalize_status(status_payload)
    entries = [normalize_entry(e) for e in _as_list(_as_dict(flow_payload).get("entries"))]

    bound = sum(1 for e in entries if e.state is FlowState.BOUND)
    unbound = sum(1 for e in entries if e.state is FlowState.UNBOUND)

    return ViewModel(
        status=status,
        entries=entries,
        total_memory_kib=total_memory_kib(status.memory_regions),
        total=len(entries),
        bound=bound,
        unbound=unbound,
        other=len(entries) - bound - unbound,
    )
