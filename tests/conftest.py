import pytest


def make_entries(count, states=("BND", "UNB", "FIN")):
    return [
        {
            "index": i,
            "state": states[i % len(states)],
            "type": "IPv4 5T",
            "orig": f"10.0.0.{i % 250}:{1000 + i}->1.1.1.1:443",
            "new_flow": f"100.64.0.1:{2000 + i}->1.1.1.1:443",
            "eth": "aa:bb:cc:00:00:01->aa:bb:cc:00:00:02",
            "packets": i * 10,
            "bytes": i * 1500,
        }
        for i in range(count)
    ]


@pytest.fixture()
def status_payload():
    return {
        "npu_version": "7.5.2.1",
        "npu_loaded": True,
        "npu_device": "en7581-npu",
        "npu_clock": 800_000_000,
        "npu_cores": 8,
        "memory_regions": [{"size": "512 KiB"}, {"size": "1 MiB"}],
        "offload_packets": 2_500_000,
        "offload_bytes": 1_048_576,
    }


@pytest.fixture()
def flow_payload():
    return {"entries": make_entries(3)}
