"""Deterministic metric sources for frame and scheduler tests."""

from __future__ import annotations

from datetime import datetime, timezone

FIXED_NOW = datetime(2024, 3, 5, 7, 8, 9, 123000, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


class StaticMetrics:
    """A ``MetricsSource`` returning fixed values."""

    def __init__(self, **overrides: object) -> None:
        self.values: dict[str, object] = {
            "hostname": "box",
            "os_release": "Linux 6.1.0",
            "uptime": 90061,
            "disk": "Disk / 1.00 GB free of 2.00 GB (50.00%)",
            "cpu": "CPU: 8 processors @ 3.20 GHz",
            "total_memory": 1536,
            "rss": 1024,
            "pid": 4242,
            "runtime": "3.12.1",
            "ping": 17,
        }
        self.values.update(overrides)
        self.started = False
        self.stopped = False

    def get_hostname(self) -> str:
        return self.values["hostname"]  # type: ignore[return-value]

    def get_os_release(self) -> str:
        return self.values["os_release"]  # type: ignore[return-value]

    def get_os_uptime_seconds(self) -> int:
        return self.values["uptime"]  # type: ignore[return-value]

    def get_disk_usage_summary(self) -> str:
        return self.values["disk"]  # type: ignore[return-value]

    def get_cpu_summary(self) -> str:
        return self.values["cpu"]  # type: ignore[return-value]

    def get_total_memory_bytes(self) -> int:
        return self.values["total_memory"]  # type: ignore[return-value]

    def get_process_rss_bytes(self) -> int:
        return self.values["rss"]  # type: ignore[return-value]

    def get_pid(self) -> int:
        return self.values["pid"]  # type: ignore[return-value]

    def get_runtime_version(self) -> str:
        return self.values["runtime"]  # type: ignore[return-value]

    def get_last_ping_millis(self) -> int | str:
        return self.values["ping"]  # type: ignore[return-value]

    # BackgroundMetrics lifecycle

    def start(
        self,
        system_interval: float = 1.0,
        disk_interval: float = 5.0,
        ping_interval: float = 1.0,
    ) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True
