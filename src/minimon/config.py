"""Data-source locations and fixed settings for minimon."""

from dataclasses import dataclass
from pathlib import Path

POLL_INTERVAL = 1.0  # seconds between ticks
WARMUP_DELAY = 0.5  # pause after the baseline network snapshot
THERMAL_ZONE_COUNT = 10
LOOPBACK_INTERFACE = "lo"
BAR_WIDTH = 35
UNKNOWN = "Unknown"


@dataclass(slots=True, frozen=True)
class MonitorConfig:
    """
    Where the monitor reads its counters from.

    The roots only differ from the real kernel interfaces in tests, which
    point them at fake trees.
    """

    proc_root: Path = Path("/proc")
    sys_root: Path = Path("/sys")
    disk_path: str = "/"

    @property
    def stat_path(self) -> Path:
        return self.proc_root / "stat"

    @property
    def meminfo_path(self) -> Path:
        return self.proc_root / "meminfo"

    @property
    def uptime_path(self) -> Path:
        return self.proc_root / "uptime"

    @property
    def net_dev_path(self) -> Path:
        return self.proc_root / "net" / "dev"

    @property
    def thermal_root(self) -> Path:
        return self.sys_root / "class" / "thermal"
