"""Host metrics with background refresh.

``MetricsProvider`` satisfies the ``MetricsSource`` protocol consumed by the
frame builder.  Accessors never block: they return the value most recently
published by one of three background probes running on the event loop:

* system -- uptime, CPU summary, memory figures (every second)
* disk   -- usage of one mount point (``psutil.disk_usage`` in an executor)
* ping   -- round-trip time of an HTTP request to a reachability host

Probe failures are reduced to sentinel values before they are published.
"""

from __future__ import annotations

import asyncio
import logging
import os
import platform
import socket
import time
from typing import Any, Awaitable, Callable

import httpx
import psutil

from termmon.frame import UNKNOWN, PingValue, format_bytes, format_cpu

logger = logging.getLogger(__name__)


def default_disk_path() -> str:
    if platform.system() == "Windows":
        return os.path.splitdrive(os.getcwd())[0] + "\\"
    return "/"


def _disk_label(path: str) -> str:
    drive = os.path.splitdrive(path)[0]
    return drive or path


def format_disk_usage(path: str, free: int, total: int) -> str:
    used_percent = (total - free) / total * 100 if total > 0 else 0.0
    return (
        f"Disk {_disk_label(path)} {format_bytes(free)} free of "
        f"{format_bytes(total)} ({used_percent:.2f}%)"
    )


class MetricsProvider:
    """Latest-known host metrics, refreshed by background tasks."""

    def __init__(
        self,
        disk_path: str | None = None,
        ping_host: str = "google.com",
        ping_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
        disk_usage: Callable[[str], Any] = psutil.disk_usage,
    ) -> None:
        self.disk_path = disk_path or default_disk_path()
        self.ping_host = ping_host
        self.ping_timeout = ping_timeout
        self._transport = transport
        self._disk_usage = disk_usage
        self._process = psutil.Process()
        self._tasks: list[asyncio.Task[None]] = []

        # Static facts
        self._hostname = socket.gethostname()
        self._os_release = f"{platform.system()} {platform.release()}".strip()
        self._pid = os.getpid()
        self._runtime_version = platform.python_version()
        self._boot_time = psutil.boot_time()

        # Published values
        self._uptime_seconds = 0
        self._cpu_summary = "CPU: Unknown"
        self._total_memory = 0
        self._process_rss = 0
        self._disk_summary = format_disk_usage(self.disk_path, 0, 0)
        self._ping: PingValue = 0

        self.refresh_system()

    # ------------------------------------------------------------------
    # MetricsSource accessors
    # ------------------------------------------------------------------

    def get_hostname(self) -> str:
        return self._hostname

    def get_os_release(self) -> str:
        return self._os_release

    def get_os_uptime_seconds(self) -> int:
        return self._uptime_seconds

    def get_disk_usage_summary(self) -> str:
        return self._disk_summary

    def get_cpu_summary(self) -> str:
        return self._cpu_summary

    def get_total_memory_bytes(self) -> int:
        return self._total_memory

    def get_process_rss_bytes(self) -> int:
        return self._process_rss

    def get_pid(self) -> int:
        return self._pid

    def get_runtime_version(self) -> str:
        return self._runtime_version

    def get_last_ping_millis(self) -> PingValue:
        return self._ping

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------

    def refresh_system(self) -> None:
        """Sample uptime, CPU and memory figures."""
        self._uptime_seconds = max(int(time.time() - self._boot_time), 0)

        try:
            freq = psutil.cpu_freq()
        except (OSError, NotImplementedError, psutil.Error):
            freq = None
        self._cpu_summary = format_cpu(
            psutil.cpu_count() or 0,
            freq.current if freq else None,
        )

        self._total_memory = psutil.virtual_memory().total
        try:
            self._process_rss = self._process.memory_info().rss
        except psutil.Error:
            logger.debug("process memory unavailable", exc_info=True)

    async def probe_system(self) -> None:
        self.refresh_system()

    async def probe_disk(self) -> None:
        """Sample disk usage off the event loop and publish the summary."""
        loop = asyncio.get_running_loop()
        try:
            usage = await loop.run_in_executor(None, self._disk_usage, self.disk_path)
        except OSError:
            logger.debug("disk usage unavailable for %s", self.disk_path, exc_info=True)
            self._disk_summary = format_disk_usage(self.disk_path, 0, 0)
            return
        self._disk_summary = format_disk_usage(self.disk_path, usage.free, usage.total)

    async def probe_ping(self, client: httpx.AsyncClient) -> None:
        """Time one request to the ping host; ``"unknown"`` on failure."""
        start = time.perf_counter()
        try:
            await client.get(f"http://{self.ping_host}")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("ping %s failed: %s", self.ping_host, exc)
            self._ping = UNKNOWN
            return
        self._ping = int((time.perf_counter() - start) * 1000)

    # ------------------------------------------------------------------
    # Background tasks
    # ------------------------------------------------------------------

    def start(
        self,
        system_interval: float = 1.0,
        disk_interval: float = 5.0,
        ping_interval: float = 1.0,
    ) -> None:
        """Spawn the probe loops on the running event loop."""
        if self._tasks:
            return
        self._tasks = [
            self._spawn("system", self.probe_system, system_interval),
            self._spawn("disk", self.probe_disk, disk_interval),
            asyncio.get_running_loop().create_task(
                self._ping_loop(ping_interval), name="termmon-probe-ping"
            ),
        ]
        for task in self._tasks:
            task.add_done_callback(_log_task_failure)

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _spawn(
        self,
        name: str,
        probe: Callable[[], Awaitable[None]],
        interval: float,
    ) -> asyncio.Task[None]:
        return asyncio.get_running_loop().create_task(
            _every(interval, probe), name=f"termmon-probe-{name}"
        )

    async def _ping_loop(self, interval: float) -> None:
        async with httpx.AsyncClient(
            timeout=self.ping_timeout,
            transport=self._transport,
        ) as client:
            await _every(interval, lambda: self.probe_ping(client))


async def _every(interval: float, probe: Callable[[], Awaitable[None]]) -> None:
    while True:
        await probe()
        await asyncio.sleep(interval)


def _log_task_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("metric probe %s died", task.get_name(), exc_info=exc)
