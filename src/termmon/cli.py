"""Entry point for the termmon CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from termmon.config import Config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termmon",
        description="Full-screen terminal system monitor",
    )
    parser.add_argument("--refresh-ms", type=int, help="Frame period in milliseconds (default: 10)")
    parser.add_argument("--min-rows", type=int, help="Smallest terminal height that is rendered, exclusive (default: 15)")
    parser.add_argument("--ping-host", help="Host used for the latency probe (default: google.com)")
    parser.add_argument("--disk-path", help="Mount point reported in the disk line")
    parser.add_argument("--title", help="Terminal window title")
    parser.add_argument("--log-file", help="Log file path (default: ~/.termmon/termmon.log)")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Environment-derived config with CLI flags taking precedence."""
    config = Config.from_env()
    if args.refresh_ms is not None and args.refresh_ms > 0:
        config.refresh_ms = args.refresh_ms
    if args.min_rows is not None and args.min_rows > 0:
        config.min_rows = args.min_rows
    if args.ping_host:
        config.ping_host = args.ping_host
    if args.disk_path:
        config.disk_path = args.disk_path
    if args.title:
        config.title = args.title
    if args.log_file:
        config.log_file = args.log_file
    return config


def configure_logging(log_file: str, level: str) -> None:
    # stdout belongs to the dashboard
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


async def _run(config: Config) -> int:
    from termmon.app import Monitor
    from termmon.metrics import MetricsProvider
    from termmon.terminal import ProcessTerminal

    metrics = MetricsProvider(
        disk_path=config.disk_path,
        ping_host=config.ping_host,
        ping_timeout=config.ping_timeout,
    )
    monitor = Monitor(ProcessTerminal(), metrics, config)
    return await monitor.run()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = build_config(args)
    configure_logging(config.log_file, args.log_level)

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print("Error: termmon needs an interactive terminal", file=sys.stderr)
        sys.exit(1)

    logging.getLogger(__name__).info("starting with %s", config)
    sys.exit(asyncio.run(_run(config)))


if __name__ == "__main__":
    main()
