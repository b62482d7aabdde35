"""Shared data types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoinRow:
    """One display record of the coin table."""
    name: str
    symbol: str
    price: str  # Already formatted, e.g. "60000.00"

    @property
    def coin_id(self) -> str:
        """Provider identifier used to re-query prices ("Bitcoin" -> "bitcoin")."""
        return self.name.lower()

    def cells(self) -> tuple[str, str, str]:
        return (self.name, self.symbol, self.price)


@dataclass
class Column:
    """Table column; width is resized at runtime."""
    title: str
    width: int


@dataclass(frozen=True)
class PricePoint:
    """A single (timestamp, price) sample. Timestamp is epoch seconds."""
    timestamp: int
    value: float


def format_price(value: float) -> str:
    """Format a price the way the coin table displays it."""
    return f"{value:.2f}"
