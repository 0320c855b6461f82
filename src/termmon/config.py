"""Configuration for the monitor, with ``TERMMON_*`` environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, TypeVar

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".termmon"

_T = TypeVar("_T")


def _default_log_file() -> str:
    return str(Path.home() / CONFIG_DIR_NAME / "termmon.log")


@dataclass
class Config:
    """Monitor configuration."""

    refresh_ms: int = 10
    min_rows: int = 15
    ping_host: str = "google.com"
    ping_interval: float = 1.0
    ping_timeout: float = 5.0
    disk_interval: float = 5.0
    system_interval: float = 1.0
    disk_path: str | None = None
    title: str = "Skibidi Moniter"
    log_file: str = field(default_factory=_default_log_file)

    @property
    def refresh_interval(self) -> float:
        return max(self.refresh_ms, 1) / 1000.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from defaults overridden by ``TERMMON_*`` variables.

        Unparseable or non-positive numeric values are ignored.
        """
        env = os.environ if environ is None else environ
        config = cls()

        config.refresh_ms = _env_value(env, "TERMMON_REFRESH_MS", int, config.refresh_ms)
        config.min_rows = _env_value(env, "TERMMON_MIN_ROWS", int, config.min_rows)
        config.ping_interval = _env_value(env, "TERMMON_PING_INTERVAL", float, config.ping_interval)
        config.ping_timeout = _env_value(env, "TERMMON_PING_TIMEOUT", float, config.ping_timeout)
        config.disk_interval = _env_value(env, "TERMMON_DISK_INTERVAL", float, config.disk_interval)

        if env.get("TERMMON_PING_HOST"):
            config.ping_host = env["TERMMON_PING_HOST"]
        if env.get("TERMMON_DISK_PATH"):
            config.disk_path = env["TERMMON_DISK_PATH"]
        if env.get("TERMMON_TITLE"):
            config.title = env["TERMMON_TITLE"]
        if env.get("TERMMON_LOG_FILE"):
            config.log_file = env["TERMMON_LOG_FILE"]

        return config


def _env_value(
    env: Mapping[str, str],
    name: str,
    parse: Callable[[str], _T],
    default: _T,
) -> _T:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = parse(raw)
    except ValueError:
        logger.warning("ignoring invalid %s=%r", name, raw)
        return default
    if value <= 0:  # type: ignore[operator]
        logger.warning("ignoring non-positive %s=%r", name, raw)
        return default
    return value
