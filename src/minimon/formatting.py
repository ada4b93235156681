"""Human-readable formatting of byte counts, durations and usage bars."""

from minimon.config import BAR_WIDTH

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: float) -> str:
    """Format a byte count with two decimals, e.g. ``1536 -> "1.50 KB"``."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(BYTE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {BYTE_UNITS[unit_index]}"


def format_rate(bytes_per_sec: float) -> str:
    return f"{format_bytes(int(bytes_per_sec))}/s"


def format_uptime(seconds: float) -> str:
    """
    Format an uptime as ``"2d 5h 30m"``, ``"5h 30m"`` or ``"30m 12s"``.

    The most significant non-zero unit picks the format; seconds only appear
    when the uptime is under an hour.
    """
    total_seconds = int(seconds)
    days = total_seconds // 86400
    hours = (total_seconds % 86400) // 3600
    minutes = (total_seconds % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {total_seconds % 60}s"


def format_bar(percent: float, width: int = BAR_WIDTH) -> str:
    """Render a usage bar such as ``"│████      │  42.00%"``."""
    percent = min(max(percent, 0.0), 100.0)
    filled = int(percent / 100.0 * width)
    return f"│{'█' * filled}{' ' * (width - filled)}│ {percent:6.2f}%"
