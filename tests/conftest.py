"""Shared fixtures: coin rows, config and an in-memory price provider."""

from __future__ import annotations

from pathlib import Path

import pytest

from coindash.clients.base import PriceProvider
from coindash.config import DashboardConfig
from coindash.errors import NetworkError
from coindash.types import CoinRow, PricePoint

FIXTURE_DIR = Path(__file__).parent.parent / "coindash" / "fixtures"


class StubProvider(PriceProvider):
    """Provider returning canned data, or raising ``error`` when set."""

    def __init__(
        self,
        coins: list[CoinRow] | None = None,
        points: list[PricePoint] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.coins = coins or []
        self.points = points if points is not None else []
        self.error = error
        self.calls: list[tuple[str, str, str]] = []
        self.closed = False

    async def close(self) -> None:
        self.closed = True

    async def fetch_coins(self) -> list[CoinRow]:
        if self.error:
            raise self.error
        return list(self.coins)

    async def fetch_price_series(
        self, coin_id: str, start_date: str, end_date: str
    ) -> list[PricePoint]:
        self.calls.append((coin_id, start_date, end_date))
        if self.error:
            raise self.error
        return list(self.points)


@pytest.fixture
def coins() -> list[CoinRow]:
    return [
        CoinRow("Bitcoin", "BTC", "60000.00"),
        CoinRow("Ethereum", "ETH", "4000.00"),
    ]


@pytest.fixture
def points() -> list[PricePoint]:
    # 01-01-2025 .. 01-03-2025, daily
    return [
        PricePoint(1735689600, 59000.0),
        PricePoint(1735776000, 59500.0),
        PricePoint(1735862400, 60000.0),
    ]


@pytest.fixture
def config() -> DashboardConfig:
    return DashboardConfig(
        use_fixture=True,
        fixture_dir=FIXTURE_DIR,
        chart_width=20,
        chart_height=4,
        chart_box_width=40,
        log_file="",
    )


@pytest.fixture
def stub_provider(coins, points) -> StubProvider:
    return StubProvider(coins=coins, points=points)


@pytest.fixture
def failing_provider(coins) -> StubProvider:
    return StubProvider(coins=coins, error=NetworkError("connection refused"))
