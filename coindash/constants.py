"""Constants for the coin dashboard."""

from enum import StrEnum

# API Base URLs
COINGECKO_HOST = "https://api.coingecko.com/api/v3/coins"

# Query defaults
DEFAULT_VS_CURRENCY = "usd"
DEFAULT_COINS = "bitcoin,ethereum"
DEFAULT_START_DATE = "01-01-2025"
DEFAULT_END_DATE = "05-05-2025"
DATE_FORMAT = "%m-%d-%Y"  # MM-DD-YYYY

# Fixture files (inside the coindash/fixtures package directory)
FIXTURE_COINS_FILE = "coins.json"
FIXTURE_PRICES_FILE = "btc.json"

# Table geometry
DEFAULT_TABLE_HEIGHT = 10
MIN_TABLE_HEIGHT = 5
HEIGHT_INCREMENT = 5
MIN_COL_WIDTH = 5
WIDTH_INCREMENT = 5
DEFAULT_COLUMNS: tuple[tuple[str, int], ...] = (
    ("Name", 10),
    ("Symbol", 6),
    ("Price", 8),
)

# Defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "coindash.log"
ELLIPSIS = "..."
BACK_HINT = "Press ESC to go back"


class Page(StrEnum):
    """The three mutually exclusive dashboard pages."""
    LIST = "list"
    DETAIL = "detail"
    CHART = "chart"
