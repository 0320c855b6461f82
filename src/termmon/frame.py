"""Frame building: lays the dashboard out onto a fresh grid.

One ``FrameBuilder.build`` call produces one complete frame: the metric
block anchored near the top-left corner, the status block anchored near
the bottom, and the border around both.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Literal, Protocol, Union

from termmon.colors import ColorStateMachine
from termmon.components.border import BorderRenderer
from termmon.components.text_group import PositionedTextGroup
from termmon.grid import Grid, TerminalSize
from termmon.utils import sanitize

UNKNOWN: Literal["unknown"] = "unknown"

PingValue = Union[int, Literal["unknown"]]


class MetricsSource(Protocol):
    """Synchronous accessors returning the latest known metric values."""

    def get_hostname(self) -> str: ...

    def get_os_release(self) -> str: ...

    def get_os_uptime_seconds(self) -> int: ...

    def get_disk_usage_summary(self) -> str: ...

    def get_cpu_summary(self) -> str: ...

    def get_total_memory_bytes(self) -> int: ...

    def get_process_rss_bytes(self) -> int: ...

    def get_pid(self) -> int: ...

    def get_runtime_version(self) -> str: ...

    def get_last_ping_millis(self) -> PingValue: ...


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

_BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num_bytes: float) -> str:
    """Scale *num_bytes* to a binary unit with two decimals."""
    if num_bytes == 0:
        return "0 Bytes"
    value = float(num_bytes)
    i = 0
    while abs(value) >= 1024 and i < len(_BYTE_UNITS) - 1:
        value /= 1024
        i += 1
    return f"{value:.2f} {_BYTE_UNITS[i]}"


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_seconds(seconds: float) -> str:
    """Format an uptime as ``D days, H hours, M minutes, S seconds``."""
    remaining = int(seconds)
    days, remaining = divmod(remaining, 86400)
    hours, remaining = divmod(remaining, 3600)
    minutes, secs = divmod(remaining, 60)
    return ", ".join([
        _plural(days, "day"),
        _plural(hours, "hour"),
        _plural(minutes, "minute"),
        _plural(secs, "second"),
    ])


def format_cpu(processor_count: int, speed_mhz: float | None) -> str:
    if processor_count <= 0:
        return "CPU: Unknown"
    ghz = (speed_mhz or 0.0) / 1000
    return f"CPU: {processor_count} processors @ {ghz:.2f} GHz"


def format_ping(value: PingValue) -> str:
    return f"Ping: {value} ms"


def iso_timestamp(now: datetime) -> str:
    """Return *now* as an ISO-8601 UTC timestamp with millisecond precision."""
    utc = now.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# FrameBuilder
# ---------------------------------------------------------------------------


class FrameBuilder:
    """Composes one dashboard frame per call to :meth:`build`."""

    TOP_ANCHOR = (1, 2)
    BOTTOM_MARGIN = 2
    STATE_HINT = "Change State: [space]"

    def __init__(
        self,
        colors: ColorStateMachine,
        border: BorderRenderer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.colors = colors
        self.border = border or BorderRenderer()
        self.clock = clock

    def metric_lines(self, metrics: MetricsSource) -> list[str]:
        """Metric lines from the anchor row downwards.

        Collaborator strings are sanitized so no metric value can make a
        grid write raise.
        """
        lines = [
            f"Host Name: {metrics.get_hostname()}",
            f"OS: {metrics.get_os_release()}",
            f"OS Uptime: {format_seconds(metrics.get_os_uptime_seconds())}",
            metrics.get_disk_usage_summary(),
            metrics.get_cpu_summary(),
            f"Device Memory: {format_bytes(metrics.get_total_memory_bytes())}",
            f"Process Memory Usage: {format_bytes(metrics.get_process_rss_bytes())}",
            f"Process PID: {metrics.get_pid()}",
            f"Python Version: {metrics.get_runtime_version()}",
            format_ping(metrics.get_last_ping_millis()),
        ]
        return [sanitize(line) or UNKNOWN for line in lines]

    def status_lines(self) -> list[str]:
        """Status lines from the anchor row upwards."""
        return [
            f"Date Time: {iso_timestamp(self.clock())}",
            self.colors.hint(),
            self.STATE_HINT,
        ]

    def build(self, size: TerminalSize, metrics: MetricsSource) -> Grid:
        grid = Grid.for_size(size)

        top = PositionedTextGroup(*self.TOP_ANCHOR)
        for offset, line in enumerate(self.metric_lines(metrics)):
            top.add_fragment(offset, 0, line)

        bottom = PositionedTextGroup(size.rows - self.BOTTOM_MARGIN, 2)
        for offset, line in enumerate(self.status_lines()):
            bottom.add_fragment(-offset, 0, line)

        bottom.render(grid)
        top.render(grid)
        self.border.draw(grid, size)
        return grid
