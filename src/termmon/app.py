"""Monitor application: wires terminal, metrics, colors and the render loop."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Protocol

from termmon.colors import RESET, ColorStateMachine
from termmon.config import Config
from termmon.frame import FrameBuilder, MetricsSource, utc_now
from termmon.keys import Key, matches_key, split_keys
from termmon.scheduler import DoubleBufferScheduler
from termmon.terminal import Terminal

logger = logging.getLogger(__name__)

QUIT_KEYS = (Key.ctrl("c"), "k")


class BackgroundMetrics(MetricsSource, Protocol):
    """A metrics source that refreshes itself while the monitor runs."""

    def start(
        self,
        system_interval: float = 1.0,
        disk_interval: float = 5.0,
        ping_interval: float = 1.0,
    ) -> None: ...

    async def stop(self) -> None: ...


class Monitor:
    """Full-screen dashboard bound to one terminal."""

    def __init__(
        self,
        terminal: Terminal,
        metrics: BackgroundMetrics,
        config: Config | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.terminal = terminal
        self.metrics = metrics
        self.config = config or Config()
        self.colors = ColorStateMachine()
        self.builder = FrameBuilder(self.colors, clock=clock)
        self.scheduler = DoubleBufferScheduler(
            terminal,
            self.builder,
            metrics,
            self.colors,
            refresh_interval=self.config.refresh_interval,
            min_rows=self.config.min_rows,
        )
        self.exit_code: int | None = None
        self._done: asyncio.Event | None = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        """Dispatch each key in a raw input chunk."""
        for key in split_keys(data):
            if any(matches_key(key, quit_key) for quit_key in QUIT_KEYS):
                self.request_exit(0)
                return
            if matches_key(key, Key.space):
                mode = self.colors.advance()
                logger.debug("color mode -> %s", mode.value)
                continue
            if self.colors.select(key):
                logger.debug("selected %s color %r", self.colors.mode.value, key)

    def handle_resize(self) -> None:
        """Rebuild the pending frame for the new size right away."""
        self.scheduler.request_frame()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def request_exit(self, code: int = 0) -> None:
        if self.exit_code is None:
            self.exit_code = code
        if self._done is not None:
            self._done.set()

    async def run(self) -> int:
        """Run until a quit key is pressed; return the exit code."""
        self._done = asyncio.Event()
        if self.exit_code is not None:
            self._done.set()

        self.terminal.start(self.handle_input, self.handle_resize)
        try:
            self.terminal.clear_screen()
            self.terminal.hide_cursor()
            self.terminal.set_title(self.config.title)

            self.metrics.start(
                system_interval=self.config.system_interval,
                disk_interval=self.config.disk_interval,
                ping_interval=self.config.ping_interval,
            )
            self.scheduler.start()
            await self._done.wait()
        finally:
            self.scheduler.stop()
            await self.metrics.stop()
            self.terminal.write(RESET)
            self.terminal.clear_screen()
            self.terminal.show_cursor()
            self.terminal.stop()

        return self.exit_code or 0
