import json

import pytest

from npu_status.formatter import (
    format_byte_size,
    format_clock,
    format_packet_count,
    format_total_memory,
    parse_size_kib,
)


@pytest.mark.parametrize("value, expected", [
    (0, "0 B"),
    (None, "0 B"),
    (512, "512.00 B"),
    (1536, "1.50 KB"),
    (1048576, "1.00 MB"),
    (1024 ** 3, "1.00 GB"),
    (5 * 1024 ** 4, "5.00 TB"),
    (3 * 1024 ** 5, "3072.00 TB"),   # clamped to the largest unit
])
def test_format_byte_size(value, expected):
    assert format_byte_size(value) == expected


@pytest.mark.parametrize("value, expected", [
    (0, "0"),
    (None, "0"),
    (999, "999"),
    (1500, "1.50K"),
    (2_500_000, "2.50M"),
    (1_000_000_000, "1.00G"),
])
def test_format_packet_count(value, expected):
    assert format_packet_count(value) == expected


@pytest.mark.parametrize("value", [
    "garbage", [], {}, True, -5, float("nan"),
    10 ** 400, json.loads("1" + "0" * 400), "1" + "0" * 400,
])
def test_counters_never_fail_on_bad_input(value):
    assert format_byte_size(value) == "0 B"
    assert format_packet_count(value) == "0"


def test_numeric_strings_are_accepted():
    assert format_byte_size("1536") == "1.50 KB"
    assert format_packet_count("1500") == "1.50K"


def test_total_memory_mixed_units():
    assert format_total_memory([{"size": "512 KiB"}, {"size": "1 MiB"}]) == "1.5 MiB"


def test_total_memory_below_one_mib_is_whole_kib():
    assert format_total_memory([{"size": "256 KiB"}, {"size": "2048 B"}]) == "258 KiB"


def test_total_memory_unparseable_contributes_zero():
    assert format_total_memory([{"size": "garbage"}]) == "0 KiB"
    assert format_total_memory([{"size": "garbage"}, {"size": "1 MiB"}]) == "1.0 MiB"


def test_total_memory_bad_shapes():
    assert format_total_memory([]) == "0 KiB"
    assert format_total_memory(None) == "0 KiB"
    assert format_total_memory([{}, {"size": 512}, "1 MiB"]) == "0 KiB"


@pytest.mark.parametrize("text, kib", [
    ("512 KiB", 512),
    ("512 kb", 512),
    ("512KiB", 512),
    ("1 MiB", 1024),
    ("1.5 MB", 1536),
    ("1 gib", 1024 * 1024),
    ("2048 B", 2),
    ("reserved-memory: 64 MiB @ 0x80000000", 64 * 1024),
    ("", 0),
    ("MiB", 0),
])
def test_parse_size_kib(text, kib):
    assert parse_size_kib(text) == pytest.approx(kib)


def test_format_clock():
    assert format_clock(800_000_000) == "800 MHz"
    assert format_clock(0) is None
    assert format_clock(None) is None
