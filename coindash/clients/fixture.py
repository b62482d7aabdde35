"""Offline price source backed by JSON fixture files."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import structlog

from coindash.clients.base import PriceProvider, parse_price_points
from coindash.config import DashboardConfig
from coindash.constants import FIXTURE_COINS_FILE, FIXTURE_PRICES_FILE
from coindash.errors import DataUnavailable
from coindash.types import CoinRow, PricePoint, format_price
from coindash.utils.time import resolve_range

logger = structlog.get_logger()


class FixturePriceProvider(PriceProvider):
    """Serves the coin list and one recorded price history from disk.

    Every coin gets the same series; it is filtered to the requested range.
    """

    def __init__(self, config: DashboardConfig) -> None:
        self._dir = Path(config.fixture_dir)

    async def connect(self) -> None:
        logger.info("Fixture provider ready", path=str(self._dir))

    async def _load(self, name: str) -> Any:
        path = self._dir / name
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            logger.error("fixture.read_failed", path=str(path), error=str(e))
            raise DataUnavailable(f"cannot read fixture {path}: {e}") from e
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("fixture.decode_failed", path=str(path), error=str(e))
            raise DataUnavailable(f"cannot decode fixture {path}: {e}") from e

    async def fetch_coins(self) -> list[CoinRow]:
        data = await self._load(FIXTURE_COINS_FILE)
        if not isinstance(data, list):
            raise DataUnavailable(f"{FIXTURE_COINS_FILE} must hold a list of coins")
        try:
            return [
                CoinRow(
                    name=str(c["name"]),
                    symbol=str(c["symbol"]),
                    price=format_price(float(c["price"])),
                )
                for c in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailable(f"malformed coin in {FIXTURE_COINS_FILE}: {e}") from e

    async def fetch_price_series(
        self, coin_id: str, start_date: str, end_date: str
    ) -> list[PricePoint]:
        start, end = resolve_range(start_date, end_date)
        data = await self._load(FIXTURE_PRICES_FILE)
        points = parse_price_points(data, DataUnavailable)
        lo, hi = int(start), int(end)
        return [p for p in points if lo <= p.timestamp <= hi]
