"""termmon: full-screen terminal system monitor with double-buffered rendering."""

from termmon.colors import ColorMode, ColorStateMachine
from termmon.components import BorderRenderer, PositionedTextGroup
from termmon.config import Config
from termmon.frame import (
    FrameBuilder,
    MetricsSource,
    format_bytes,
    format_cpu,
    format_seconds,
)
from termmon.grid import (
    Cell,
    Grid,
    InvalidCharacter,
    InvalidText,
    RenderError,
    TerminalSize,
)
from termmon.keys import Key, matches_key, split_keys
from termmon.scheduler import DoubleBufferScheduler, SchedulerState

__all__ = [
    # Grid
    "Cell",
    "Grid",
    "InvalidCharacter",
    "InvalidText",
    "RenderError",
    "TerminalSize",
    # Components
    "BorderRenderer",
    "PositionedTextGroup",
    # Colors
    "ColorMode",
    "ColorStateMachine",
    # Frames
    "FrameBuilder",
    "MetricsSource",
    "format_bytes",
    "format_cpu",
    "format_seconds",
    # Scheduling
    "DoubleBufferScheduler",
    "SchedulerState",
    # Keys
    "Key",
    "matches_key",
    "split_keys",
    # Config
    "Config",
]
