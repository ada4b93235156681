"""Shared fixtures: fake /proc and /sys trees for the counter readers."""

from pathlib import Path

import pytest

from minimon.config import MonitorConfig

PROC_STAT = (
    "cpu  4705 356 584 3699 23 23 0 0 0 0\n"
    "cpu0 1393 138 165 1834 12 11 0 0 0 0\n"
    "intr 114930548 113199788 3 0 5 263 0 4 [... lots more numbers ...]\n"
)

PROC_MEMINFO = (
    "MemTotal:       16000000 kB\n"
    "MemFree:         2000000 kB\n"
    "MemAvailable:    4000000 kB\n"
    "Buffers:          500000 kB\n"
    "Cached:          1500000 kB\n"
    "HugePages_Total:       0\n"
)

PROC_UPTIME = "3661.52 7000.11\n"

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast"
    "|bytes    packets errs drop fifo colls carrier compressed\n"
)


def net_dev_line(name: str, rx_bytes: int, tx_bytes: int) -> str:
    """Build one /proc/net/dev interface line with the given byte counters."""
    return f"{name:>6}: {rx_bytes} 10 0 0 0 0 0 0 {tx_bytes} 5 0 0 0 0 0 0\n"


def write_net_dev(path: Path, counters: dict[str, tuple[int, int]]) -> None:
    """Write a /proc/net/dev table for ``{name: (rx_bytes, tx_bytes)}``."""
    body = "".join(net_dev_line(name, rx, tx) for name, (rx, tx) in counters.items())
    path.write_text(NET_DEV_HEADER + body)


def write_cpu_stat(path: Path, fields: tuple[int, ...]) -> None:
    """Write a /proc/stat whose aggregate line carries ``fields``."""
    path.write_text("cpu  " + " ".join(str(v) for v in fields) + " 0 0\n")


@pytest.fixture
def fake_root(tmp_path: Path) -> Path:
    """A directory holding populated ``proc`` and empty ``sys`` trees."""
    proc = tmp_path / "proc"
    (proc / "net").mkdir(parents=True)
    (proc / "stat").write_text(PROC_STAT)
    (proc / "meminfo").write_text(PROC_MEMINFO)
    (proc / "uptime").write_text(PROC_UPTIME)
    write_net_dev(proc / "net" / "dev", {"lo": (5000, 5000), "eth0": (1000, 500)})
    (tmp_path / "sys" / "class" / "thermal").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def fake_config(fake_root: Path) -> MonitorConfig:
    """MonitorConfig reading from the fake trees."""
    return MonitorConfig(
        proc_root=fake_root / "proc",
        sys_root=fake_root / "sys",
        disk_path=str(fake_root),
    )


@pytest.fixture
def thermal_zone(fake_root: Path):
    """Factory creating ``thermal_zone<N>/temp`` files with the given content."""

    def _make(zone: int, content: str) -> Path:
        zone_dir = fake_root / "sys" / "class" / "thermal" / f"thermal_zone{zone}"
        zone_dir.mkdir(parents=True, exist_ok=True)
        temp_path = zone_dir / "temp"
        temp_path.write_text(content)
        return temp_path

    return _make
