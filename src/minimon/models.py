"""Data models for minimon."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CpuTimes:
    """Cumulative CPU jiffies from the aggregate line of /proc/stat."""

    idle_time: int  # idle + iowait
    non_idle_time: int  # user + nice + system + irq + softirq + steal

    @property
    def total_time(self) -> int:
        return self.idle_time + self.non_idle_time


@dataclass(slots=True, frozen=True)
class NetCounters:
    """Byte counters of one network interface."""

    received_bytes: int
    transmitted_bytes: int


# Interface name -> counters
NetworkSnapshot = dict[str, NetCounters]


@dataclass(slots=True, frozen=True)
class NetworkRates:
    """Aggregate throughput over all non-loopback interfaces."""

    received_per_sec: float
    transmitted_per_sec: float


@dataclass(slots=True, frozen=True)
class DisplayFrame:
    """Everything drawn during one tick. None means the metric is unavailable."""

    hostname: str
    username: str
    uptime: str
    temperature: float | None  # Celsius
    download_rate: str | None
    upload_rate: str | None
    cpu_percent: float | None
    ram_percent: float | None
    disk_percent: float | None
