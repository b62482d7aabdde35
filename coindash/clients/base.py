"""Abstract base class for price data sources."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import structlog

from coindash.errors import NotFound, PriceDataError
from coindash.types import PricePoint

if TYPE_CHECKING:
    from coindash.config import DashboardConfig
    from coindash.types import CoinRow

logger = structlog.get_logger(__name__)


class PriceProvider(ABC):
    """Base class every price source inherits from.

    Subclasses implement ``fetch_coins()`` and ``fetch_price_series()``;
    ``fetch_current_price()`` is derived from the series.  Every call is a
    single attempt: failures surface as ``PriceDataError`` subclasses and
    are never retried here.
    """

    async def connect(self) -> None:
        """Acquire resources (HTTP session). Default: nothing to do."""

    async def close(self) -> None:
        """Release resources. Default: nothing to do."""

    @abstractmethod
    async def fetch_coins(self) -> list[CoinRow]:
        """Return the coin list with current prices."""

    @abstractmethod
    async def fetch_price_series(
        self, coin_id: str, start_date: str, end_date: str
    ) -> list[PricePoint]:
        """Return every price point in the date range, order as received."""

    async def fetch_current_price(
        self, coin_id: str, start_date: str, end_date: str
    ) -> float:
        """Return the last price point in the date range."""
        points = await self.fetch_price_series(coin_id, start_date, end_date)
        if not points:
            raise NotFound(f"no prices found for coin {coin_id}")
        return points[-1].value


def parse_price_points(
    data: Any, error_cls: type[PriceDataError]
) -> list[PricePoint]:
    """Parse ``{"prices": [[timestamp_ms, price], ...]}`` into PricePoints."""
    if not isinstance(data, dict) or not isinstance(data.get("prices"), list):
        raise error_cls("response has no 'prices' list")
    points = []
    try:
        for ts_ms, price in data["prices"]:
            point = PricePoint(timestamp=int(ts_ms) // 1000, value=float(price))
            if not math.isfinite(point.value):
                raise ValueError(f"non-finite price {price!r}")
            points.append(point)
    except (TypeError, ValueError, OverflowError) as e:
        raise error_cls(f"malformed price point: {e}") from e
    return points


def build_provider(config: DashboardConfig) -> PriceProvider:
    """Pick the price source once, at startup."""
    if config.use_fixture:
        from coindash.clients.fixture import FixturePriceProvider

        logger.info("provider.selected", provider="fixture", path=str(config.fixture_dir))
        return FixturePriceProvider(config)

    from coindash.clients.coingecko import CoinGeckoClient

    logger.info("provider.selected", provider="coingecko", url=config.api_host)
    return CoinGeckoClient(config)
