"""Display formatting for NPU telemetry.

All functions here are total: malformed or missing input degrades to the
zero/placeholder output instead of raising.
"""

import math
import re

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")

PACKET_SUFFIXES = (
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "K"),
)

# unit -> multiplier to KiB
SIZE_UNITS_KIB = {
    "B":   1 / 1024,
    "KB":  1,
    "KIB": 1,
    "MB":  1024,
    "MIB": 1024,
    "GB":  1024 * 1024,
    "GIB": 1024 * 1024,
}

_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(KiB|MiB|GiB|KB|MB|GB|B)", re.IGNORECASE)


def as_number(value):
    """Coerce a backend scalar to int/float; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:   # json decodes integers of any size
            return 0
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            n = float(value.strip())
        except ValueError:
            return 0
        if not math.isfinite(n):
            return 0
        return int(n) if n.is_integer() else n
    return 0


# ─── Counters ────────────────────────────────────────────────────────────────

def format_byte_size(n):
    n = as_number(n)
    if n <= 0:
        return "0 B"
    # floor(log1024(n)) clamped to the unit list, without float log error at exact powers
    i = 0
    while i < len(BYTE_UNITS) - 1 and n >= 1024 ** (i + 1):
        i += 1
    return f"{n / 1024 ** i:.2f} {BYTE_UNITS[i]}"


def format_packet_count(n):
    n = as_number(n)
    if n <= 0:
        return "0"
    for threshold, suffix in PACKET_SUFFIXES:
        if n >= threshold:
            return f"{n / threshold:.2f}{suffix}"
    return str(int(n))


# ─── Memory regions ──────────────────────────────────────────────────────────

def parse_size_kib(text):
    """'512 KiB' -> 512.0, '1 MiB' -> 1024.0; unparseable -> 0.0"""
    if not isinstance(text, str):
        return 0.0
    m = _SIZE_RE.search(text)
    if not m:
        return 0.0
    return float(m.group(1)) * SIZE_UNITS_KIB[m.group(2).upper()]


def _region_size(region):
    if isinstance(region, dict):
        return region.get("size")
    return getattr(region, "size", None)


def total_memory_kib(regions):
    if not isinstance(regions, (list, tuple)):
        return 0.0
    return sum(parse_size_kib(_region_size(r)) for r in regions)


def format_memory_kib(kib):
    if kib >= 1024:
        return f"{kib / 1024:.1f} MiB"
    return f"{kib:.0f} KiB"


def format_total_memory(regions):
    return format_memory_kib(total_memory_kib(regions))


# ─── Clock ───────────────────────────────────────────────────────────────────

def format_clock(hz):
    """Clock in Hz -> '<n> MHz', or None when the clock is unknown."""
    hz = as_number(hz)
    if hz <= 0:
        return None
    return f"{hz / 1_000_000:.0f} MHz"
