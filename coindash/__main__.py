"""Entry point: python -m coindash"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from coindash.config import DashboardConfig


def setup_logging(level: str = "INFO", log_file: str | None = None) -> TextIO | None:
    """Configure structured logging.

    The TUI owns the terminal, so records go to ``log_file`` when one is set.
    Returns the opened log file; the caller closes it on shutdown.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    stream = None
    if log_file:
        stream = Path(log_file).open("a", encoding="utf-8")
        factory = structlog.WriteLoggerFactory(file=stream)
    else:
        factory = structlog.PrintLoggerFactory(file=sys.stderr)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=factory,
    )
    return stream


async def main() -> int:
    from coindash.config import DashboardConfig

    config = DashboardConfig()  # type: ignore[call-arg]
    log_stream = setup_logging(config.log_level, config.log_file)
    try:
        return await _run(config)
    finally:
        if log_stream is not None:
            structlog.reset_defaults()
            log_stream.close()


async def _run(config: DashboardConfig) -> int:
    from coindash.clients.base import build_provider
    from coindash.dashboard.app import CoinDashApp
    from coindash.errors import PriceDataError

    log = structlog.get_logger()
    log.info(
        "Starting coindash",
        fixture=config.use_fixture,
        coins=config.coins_list,
        start=config.start_date,
        end=config.end_date,
    )

    provider = build_provider(config)
    await provider.connect()
    try:
        try:
            coins = await provider.fetch_coins()
        except PriceDataError as e:
            log.error("coins.unavailable", error=str(e))
            print("Error fetching coins:", e)
            return 1

        app = CoinDashApp(config, provider, coins)
        await app.run_async()
        if app.return_code:
            log.error("dashboard.failed", return_code=app.return_code)
            print("Error running program: dashboard exited with code", app.return_code)
            return 1
        return 0
    finally:
        await provider.close()
        log.info("coindash shutdown complete")


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
