"""Fixed-rate double-buffered rendering.

``DoubleBufferScheduler`` owns two buffer slots.  On every timer tick it
flushes the displayed frame (or the pending one, before the first
promotion), promotes the pending frame, and asks the ``FrameBuilder`` for
the next pending frame.  The tick rate is independent of how often the
underlying metric values change.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

from termmon.grid import Grid, RenderError
from termmon.terminal import CLEAR_SCROLLBACK, CURSOR_HOME, get_terminal_size

if TYPE_CHECKING:
    from termmon.colors import ColorStateMachine
    from termmon.frame import FrameBuilder, MetricsSource
    from termmon.terminal import Terminal

logger = logging.getLogger(__name__)

HEIGHT_NOTICE = "Please increase height of terminal"


class SchedulerState(Enum):
    IDLE = "idle"
    FLUSHING = "flushing"
    BUILD_REQUESTED = "build_requested"


class DoubleBufferScheduler:
    """Flush / promote / rebuild loop driven by an event-loop timer.

    Everything runs on the event loop thread: the timer callback, keyboard
    handlers mutating the color state, and the metric probes publishing
    their results.  No locking is needed between them.
    """

    def __init__(
        self,
        terminal: Terminal,
        builder: FrameBuilder,
        metrics: MetricsSource,
        colors: ColorStateMachine,
        refresh_interval: float = 0.01,
        min_rows: int = 15,
    ) -> None:
        self.terminal = terminal
        self.builder = builder
        self.metrics = metrics
        self.colors = colors
        self.refresh_interval = refresh_interval
        self.min_rows = min_rows

        # Buffer pair
        self.displayed: Grid | None = None
        self.pending: Grid | None = None

        self.state: SchedulerState = SchedulerState.IDLE
        self.too_small: bool = False

        # Metrics
        self.frames_built: int = 0
        self.frames_flushed: int = 0
        self.frames_failed: int = 0

        # Timer
        self._timer_handle: asyncio.TimerHandle | None = None
        self._next_deadline: float = 0.0
        self._running: bool = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Arm the periodic timer on the running event loop."""
        if self._running:
            return
        self._running = True
        loop = asyncio.get_running_loop()
        self._next_deadline = loop.time() + self.refresh_interval
        self._timer_handle = loop.call_at(self._next_deadline, self._on_timer)
        logger.info("render loop started at %.1f Hz", 1.0 / self.refresh_interval)

    def stop(self) -> None:
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None
        if self._running:
            logger.info(
                "render loop stopped: built=%d flushed=%d failed=%d",
                self.frames_built,
                self.frames_flushed,
                self.frames_failed,
            )
        self._running = False

    def _on_timer(self) -> None:
        if not self._running:
            return
        try:
            self.tick()
        finally:
            if self._running:
                self._schedule_next()

    def _schedule_next(self) -> None:
        loop = asyncio.get_running_loop()
        now = loop.time()
        self._next_deadline += self.refresh_interval
        # Skip missed ticks instead of bursting to catch up
        if self._next_deadline <= now:
            self._next_deadline = now + self.refresh_interval
        self._timer_handle = loop.call_at(self._next_deadline, self._on_timer)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Run one flush / promote / rebuild cycle."""
        screen = self.displayed if self.displayed is not None else self.pending
        if screen is not None:
            self.state = SchedulerState.FLUSHING
            self.flush(screen)
            self.displayed = self.pending

        self.state = SchedulerState.BUILD_REQUESTED
        self.request_frame()
        self.state = SchedulerState.IDLE

    def flush(self, screen: Grid) -> None:
        """Write *screen* to the terminal in a single write.

        Order matters: home the cursor and clear first, then the color
        prefixes, then the grid text, so the clear never wipes the frame.
        """
        foreground, background = self.colors.current_prefixes()
        self.terminal.write(
            CURSOR_HOME
            + CLEAR_SCROLLBACK
            + foreground
            + background
            + screen.to_string()
        )
        self.frames_flushed += 1

    def request_frame(self) -> None:
        """Build the next pending frame, or show the height notice."""
        size = get_terminal_size(self.terminal)

        if size.rows <= self.min_rows:
            if not self.too_small:
                logger.info(
                    "terminal height %d below minimum %d; rendering suspended",
                    size.rows,
                    self.min_rows + 1,
                )
            self.too_small = True
            self.terminal.clear_screen()
            self.terminal.write(HEIGHT_NOTICE)
            self.pending = None
            return

        if self.too_small:
            logger.info("terminal height %d restored; rendering resumed", size.rows)
            self.too_small = False

        try:
            frame = self.builder.build(size, self.metrics)
        except RenderError:
            self.frames_failed += 1
            logger.exception("frame build aborted at %dx%d", size.rows, size.columns)
            return

        self.pending = frame
        self.frames_built += 1
