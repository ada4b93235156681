"""minimon - Main Textual application."""

import argparse
import logging
import sys
from enum import Enum
from importlib.metadata import PackageNotFoundError, version

from rich.text import Text
from textual.app import App, ComposeResult
from textual.logging import TextualHandler
from textual.widgets import Static

from minimon.config import POLL_INTERVAL, WARMUP_DELAY, MonitorConfig
from minimon.formatting import format_bar
from minimon.models import DisplayFrame
from minimon.monitor import SystemMonitor

logger = logging.getLogger(__name__)

TITLE_LINE = "Mini System Monitor"
SEPARATOR_LINE = "─" * 48


class LoopState(Enum):
    """Lifecycle of the display loop."""

    INITIALIZING = "initializing"
    POLLING = "polling"
    TERMINATED = "terminated"


class MonitorPanel(Static):
    """Bordered box showing the latest DisplayFrame."""

    DEFAULT_CSS = """
    MonitorPanel {
        width: 70;
        height: 14;
        border: solid $primary;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        """Initialize MonitorPanel."""
        super().__init__("Loading system info...", **kwargs)
        self._display_frame: DisplayFrame | None = None

    @property
    def display_frame(self) -> DisplayFrame | None:
        return self._display_frame

    def update_frame(self, frame: DisplayFrame) -> None:
        """Redraw the panel from a new frame."""
        self._display_frame = frame
        # Plain Text: host and user names may contain markup brackets
        self.update(Text("\n".join(self.frame_lines())))

    def frame_lines(self) -> list[str]:
        """Build the text lines for the current frame."""
        frame = self._display_frame
        if frame is None:
            return ["Loading system info..."]

        lines = [
            TITLE_LINE,
            SEPARATOR_LINE,
            f"Host: {frame.hostname}",
            f"User: {frame.username}",
            f"Uptime: {frame.uptime}",
        ]
        if frame.temperature is not None:
            lines.append(f"Temperature: {frame.temperature:.1f}°C")
        else:
            lines.append("Temperature: Not available")
        if frame.download_rate is not None and frame.upload_rate is not None:
            lines.append(f"Network: ↓ {frame.download_rate}  ↑ {frame.upload_rate}")

        lines.append("")
        # Unavailable metrics are left out for this tick
        for label, percent in (
            ("CPU  ", frame.cpu_percent),
            ("RAM  ", frame.ram_percent),
            ("Disk ", frame.disk_percent),
        ):
            if percent is not None:
                lines.append(f"{label} {format_bar(percent)}")
        return lines


class MonitorApp(App):
    """Main minimon application."""

    TITLE = "minimon"
    SUB_TITLE = "Mini System Monitor"

    CSS = """
    Screen {
        padding: 1 2;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("Q", "quit", "Quit"),
    ]

    def __init__(self, config: MonitorConfig | None = None) -> None:
        """Initialize the MonitorApp."""
        super().__init__()
        self._monitor = SystemMonitor(config)
        self.loop_state = LoopState.INITIALIZING

    @property
    def monitor(self) -> SystemMonitor:
        return self._monitor

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield MonitorPanel(id="monitor-panel")

    def on_mount(self) -> None:
        """Take the network baseline, then start polling after a short pause."""
        self._monitor.prime()
        self.set_timer(WARMUP_DELAY, self._start_polling)

    def _start_polling(self) -> None:
        if self.loop_state is not LoopState.INITIALIZING:
            return
        self.loop_state = LoopState.POLLING
        self.poll_metrics()
        if self.loop_state is LoopState.POLLING:
            self.set_interval(POLL_INTERVAL, self.poll_metrics)

    def poll_metrics(self) -> None:
        """Collect one frame and draw it. Any fault ends the app with status 1."""
        if self.loop_state is not LoopState.POLLING:
            return
        try:
            frame = self._monitor.sample()
            self.query_one("#monitor-panel", MonitorPanel).update_frame(frame)
        except Exception as exc:
            logger.exception("Polling failed")
            self._terminate(return_code=1, message=f"Error: {exc}")

    def _terminate(self, return_code: int = 0, message: str | None = None) -> None:
        self.loop_state = LoopState.TERMINATED
        self.exit(
            return_code=return_code,
            message=Text(message) if message is not None else None,
        )

    def action_quit(self) -> None:
        """Handle quit action."""
        self._terminate()


def _package_version() -> str:
    try:
        return version("minimon")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minimon",
        description="Terminal dashboard for CPU, memory, disk, network and temperature.",
    )
    parser.add_argument(
        "--disk-path",
        default="/",
        help="mount point whose disk usage is shown (default: /)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log debug messages to the Textual devtools console",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def configure_logging(debug: bool = False) -> None:
    """Send log records to the Textual console; the terminal itself belongs to the UI."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        handlers=[TextualHandler()],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for minimon application."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    app = MonitorApp(MonitorConfig(disk_path=args.disk_path))
    app.run()

    return_code = app.return_code or 0
    if return_code == 0:
        print("System monitor stopped.")
    return return_code


if __name__ == "__main__":
    sys.exit(main())
