"""Readers for the kernel counters shown by minimon.

Every reader makes a single best-effort attempt and returns None when its
source is missing or unparsable, so callers can tell "no data" apart from a
genuine zero reading.
"""

import logging
import os
import socket
from pathlib import Path

import psutil

from minimon.config import THERMAL_ZONE_COUNT, UNKNOWN
from minimon.models import CpuTimes, NetCounters, NetworkSnapshot

logger = logging.getLogger(__name__)

CPU_FIELD_COUNT = 8


def parse_cpu_times(line: str) -> CpuTimes:
    """
    Parse the aggregate ``cpu`` line of /proc/stat.

    Raises:
        ValueError: If the line is not the aggregate line or has fewer than
            eight numeric fields.
    """
    fields = line.split()
    if len(fields) < CPU_FIELD_COUNT + 1 or fields[0] != "cpu":
        raise ValueError(f"not an aggregate cpu line: {line!r}")
    user, nice, system, idle, iowait, irq, softirq, steal = (
        int(value) for value in fields[1 : CPU_FIELD_COUNT + 1]
    )
    return CpuTimes(
        idle_time=idle + iowait,
        non_idle_time=user + nice + system + irq + softirq + steal,
    )


class CpuSampler:
    """
    Computes CPU usage from successive /proc/stat readings.

    Usage is a delta between two readings, so the sampler keeps the previous
    one as its baseline. The first successful sample only records the baseline
    and reports 0.0.
    """

    def __init__(self, stat_path: Path) -> None:
        self._stat_path = stat_path
        self._baseline: CpuTimes | None = None

    @property
    def has_baseline(self) -> bool:
        return self._baseline is not None

    def sample(self) -> float | None:
        """Return CPU usage in percent since the previous sample, or None."""
        try:
            with self._stat_path.open() as f:
                times = parse_cpu_times(f.readline())
        except (OSError, ValueError) as exc:
            logger.debug("CPU counters unavailable: %s", exc)
            return None

        previous, self._baseline = self._baseline, times
        if previous is None:
            return 0.0

        total_delta = times.total_time - previous.total_time
        idle_delta = times.idle_time - previous.idle_time
        # Zero between very fast polls, negative after a counter reset
        if total_delta <= 0:
            return 0.0

        usage = 100.0 * (total_delta - idle_delta) / total_delta
        return min(max(usage, 0.0), 100.0)


def read_memory_percent(meminfo_path: Path) -> float | None:
    """Return used memory (MemTotal - MemAvailable) as a percentage of MemTotal."""
    values: dict[str, int] = {}
    try:
        with meminfo_path.open() as f:
            for line in f:
                key, _, rest = line.partition(":")
                if key in ("MemTotal", "MemAvailable"):
                    values[key] = int(rest.split()[0])
                    if len(values) == 2:
                        break
    except (OSError, ValueError, IndexError) as exc:
        logger.debug("Memory info unavailable: %s", exc)
        return None

    mem_total = values.get("MemTotal", 0)
    if mem_total == 0:
        return None
    mem_available = values.get("MemAvailable", 0)
    return (mem_total - mem_available) * 100.0 / mem_total


def read_uptime(uptime_path: Path) -> float | None:
    """Return seconds since boot."""
    try:
        return float(uptime_path.read_text().split()[0])
    except (OSError, ValueError, IndexError) as exc:
        logger.debug("Uptime unavailable: %s", exc)
        return None


def read_disk_percent(path: str | os.PathLike[str] = "/") -> float | None:
    """
    Return the used share of the filesystem holding ``path``.

    Space reserved for the superuser counts as used.
    """
    try:
        stats = os.statvfs(path)
    except OSError as exc:
        logger.debug("Filesystem stats for %s unavailable: %s", path, exc)
        return None

    total_space = stats.f_blocks * stats.f_frsize
    available_space = stats.f_bavail * stats.f_frsize
    if total_space == 0:
        return None
    return (total_space - available_space) * 100.0 / total_space


def read_temperature(
    thermal_root: Path, zone_count: int = THERMAL_ZONE_COUNT
) -> float | None:
    """
    Return the temperature of the first readable thermal zone in Celsius.

    Zones are probed in index order. Readings above 1000 are millidegrees.
    None means the host exposes no usable thermal zone.
    """
    for zone in range(zone_count):
        temp_path = thermal_root / f"thermal_zone{zone}" / "temp"
        try:
            raw = int(temp_path.read_text().strip())
        except (OSError, ValueError):
            continue
        if raw > 1000:
            return raw / 1000.0
        return float(raw)
    return None


def parse_net_dev_header(header: str) -> tuple[int, int]:
    """
    Locate the byte counters from the column header line of /proc/net/dev.

    The header looks like ``" face |bytes packets ...|bytes packets ..."``.
    Returns the field indexes (after the interface name) of received bytes
    and transmitted bytes.

    Raises:
        ValueError: If the header does not have receive and transmit
            sections with a ``bytes`` column each.
    """
    sections = header.split("|")
    if len(sections) != 3:
        raise ValueError(f"expected 3 header sections, got {len(sections)}: {header!r}")
    receive_columns = sections[1].split()
    transmit_columns = sections[2].split()
    if "bytes" not in receive_columns or "bytes" not in transmit_columns:
        raise ValueError(f"no bytes column in header: {header!r}")
    return (
        receive_columns.index("bytes"),
        len(receive_columns) + transmit_columns.index("bytes"),
    )


def read_network_stats(net_dev_path: Path) -> NetworkSnapshot | None:
    """
    Return byte counters for every interface listed in /proc/net/dev.

    Lines that cannot be parsed are skipped. An unreadable file or an
    unrecognised column layout yields None.
    """
    try:
        with net_dev_path.open() as f:
            f.readline()  # "Inter-|   Receive ...|  Transmit"
            rx_index, tx_index = parse_net_dev_header(f.readline())
            lines = f.readlines()
    except OSError as exc:
        logger.debug("Network statistics unavailable: %s", exc)
        return None
    except ValueError as exc:
        logger.warning("Unrecognised layout in %s: %s", net_dev_path, exc)
        return None

    stats: NetworkSnapshot = {}
    for line in lines:
        name, separator, data = line.partition(":")
        name = name.strip()
        if not separator or not name:
            continue
        fields = data.split()
        try:
            stats[name] = NetCounters(
                received_bytes=int(fields[rx_index]),
                transmitted_bytes=int(fields[tx_index]),
            )
        except (ValueError, IndexError):
            logger.debug("Skipping malformed network line: %r", line)
            continue
    return stats


def read_hostname() -> str:
    try:
        return socket.gethostname() or UNKNOWN
    except OSError:
        return UNKNOWN


def read_username() -> str:
    """
    Return the login name of the user running the monitor.

    psutil reports the bare uid when it has no passwd entry; that counts as
    a failed lookup.
    """
    try:
        process = psutil.Process()
        username = process.username()
        if not username or username == str(process.uids().real):
            return UNKNOWN
        return username
    except psutil.Error:
        return UNKNOWN
