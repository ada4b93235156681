"""System monitoring engine for minimon."""

import logging

from minimon.config import LOOPBACK_INTERFACE, POLL_INTERVAL, UNKNOWN, MonitorConfig
from minimon.formatting import format_rate, format_uptime
from minimon.models import DisplayFrame, NetCounters, NetworkRates, NetworkSnapshot
from minimon.readers import (
    CpuSampler,
    read_disk_percent,
    read_hostname,
    read_memory_percent,
    read_network_stats,
    read_temperature,
    read_uptime,
    read_username,
)

logger = logging.getLogger(__name__)

_NO_TRAFFIC = NetCounters(received_bytes=0, transmitted_bytes=0)


def counter_delta(previous: int, current: int) -> int:
    """Growth of a monotonic counter; a counter that went backwards counts as 0."""
    return current - previous if current >= previous else 0


def compute_network_rates(
    previous: NetworkSnapshot,
    current: NetworkSnapshot,
    interval: float = POLL_INTERVAL,
) -> NetworkRates:
    """
    Sum per-interface throughput between two snapshots.

    The loopback interface is ignored. An interface missing from the previous
    snapshot is treated as starting from zero.
    """
    received = transmitted = 0
    for name, counters in current.items():
        if name == LOOPBACK_INTERFACE:
            continue
        before = previous.get(name, _NO_TRAFFIC)
        received += counter_delta(before.received_bytes, counters.received_bytes)
        transmitted += counter_delta(before.transmitted_bytes, counters.transmitted_bytes)
    return NetworkRates(
        received_per_sec=received / interval,
        transmitted_per_sec=transmitted / interval,
    )


class SystemMonitor:
    """
    Collects one DisplayFrame per tick.

    Owns the only state that survives between ticks: the CPU sampler's
    baseline and the previous network snapshot.
    """

    def __init__(self, config: MonitorConfig | None = None) -> None:
        """
        Initialize the SystemMonitor.

        Args:
            config: Data-source locations. Defaults to the live kernel interfaces.
        """
        self._config = config or MonitorConfig()
        self._cpu = CpuSampler(self._config.stat_path)
        self._previous_network: NetworkSnapshot | None = None

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def previous_network(self) -> NetworkSnapshot | None:
        """The network snapshot the next rates are computed against."""
        return self._previous_network

    def prime(self) -> None:
        """Take the baseline network snapshot before the first tick."""
        self._previous_network = read_network_stats(self._config.net_dev_path)

    def sample(self) -> DisplayFrame:
        """Read every counter and assemble the frame for this tick."""
        cpu_percent = self._cpu.sample()
        ram_percent = read_memory_percent(self._config.meminfo_path)
        uptime = read_uptime(self._config.uptime_path)
        disk_percent = read_disk_percent(self._config.disk_path)
        temperature = read_temperature(self._config.thermal_root)
        rates = self._advance_network()

        return DisplayFrame(
            hostname=read_hostname(),
            username=read_username(),
            uptime=format_uptime(uptime) if uptime is not None else UNKNOWN,
            temperature=temperature,
            download_rate=format_rate(rates.received_per_sec) if rates is not None else None,
            upload_rate=format_rate(rates.transmitted_per_sec) if rates is not None else None,
            cpu_percent=cpu_percent,
            ram_percent=ram_percent,
            disk_percent=disk_percent,
        )

    def _advance_network(self) -> NetworkRates | None:
        """Compute rates against the previous snapshot, then make the current one previous."""
        current = read_network_stats(self._config.net_dev_path)
        previous, self._previous_network = self._previous_network, current
        if previous is None or current is None:
            logger.debug("Skipping network rates: no snapshot to compare against")
            return None
        return compute_network_rates(previous, current)
