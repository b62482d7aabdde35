"""Dashboard configuration using Pydantic Settings — loads from .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from coindash.constants import (
    COINGECKO_HOST,
    DEFAULT_COINS,
    DEFAULT_COLUMNS,
    DEFAULT_END_DATE,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_START_DATE,
    DEFAULT_TABLE_HEIGHT,
    HEIGHT_INCREMENT,
    MIN_COL_WIDTH,
    MIN_TABLE_HEIGHT,
    WIDTH_INCREMENT,
)
from coindash.errors import ParseError
from coindash.types import Column
from coindash.utils.time import parse_date

FIXTURE_DIR = Path(__file__).parent / "fixtures"


class DashboardConfig(BaseSettings):
    """Central configuration for the coin dashboard.

    All values can be set via environment variables with COINDASH_ prefix.
    E.g., COINDASH_USE_FIXTURE=false, COINDASH_COINS=bitcoin,solana.
    """

    # === Data source ===
    use_fixture: bool = True  # Offline by default
    api_host: str = COINGECKO_HOST
    request_timeout_sec: float = 10.0
    coins: str = DEFAULT_COINS  # Comma-separated CoinGecko ids
    fixture_dir: Path = FIXTURE_DIR

    # === Price range (MM-DD-YYYY) ===
    start_date: str = DEFAULT_START_DATE
    end_date: str = DEFAULT_END_DATE

    # === Table geometry ===
    table_height: int = DEFAULT_TABLE_HEIGHT
    min_height: int = Field(default=MIN_TABLE_HEIGHT, ge=1)
    height_increment: int = Field(default=HEIGHT_INCREMENT, ge=1)
    min_col_width: int = Field(default=MIN_COL_WIDTH, ge=1)
    width_increment: int = Field(default=WIDTH_INCREMENT, ge=1)
    name_width: int = DEFAULT_COLUMNS[0][1]
    symbol_width: int = DEFAULT_COLUMNS[1][1]
    price_width: int = DEFAULT_COLUMNS[2][1]

    # === Style ===
    list_border: str = "solid"
    detail_border: str = "round"
    chart_border: str = "round"
    border_color: str = "#585858"
    header_color: str = "#585858"
    selected_fg: str = "#ffffaf"
    selected_bg: str = "#5f00ff"
    chart_color: str = "#ff0000"
    list_box_width: int = 50
    detail_box_width: int = 50
    chart_box_width: int = 170
    chart_width: int = Field(default=150, ge=2)
    chart_height: int = Field(default=25, ge=2)

    # === Logging ===
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = DEFAULT_LOG_FILE

    model_config = {
        "env_file": ".env",
        "env_prefix": "COINDASH_",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @field_validator("start_date", "end_date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        try:
            parse_date(value)
        except ParseError as e:
            raise ValueError(str(e)) from e
        return value

    @model_validator(mode="after")
    def _clamp_geometry(self) -> "DashboardConfig":
        """Starting geometry never violates the resize minimums."""
        self.table_height = max(self.table_height, self.min_height)
        self.name_width = max(self.name_width, self.min_col_width)
        self.symbol_width = max(self.symbol_width, self.min_col_width)
        self.price_width = max(self.price_width, self.min_col_width)
        return self

    @property
    def coins_list(self) -> list[str]:
        """Parsed list of coin ids to show."""
        return [x.strip().lower() for x in self.coins.split(",") if x.strip()]

    def build_columns(self) -> list[Column]:
        """Fresh column list with the configured starting widths."""
        widths = (self.name_width, self.symbol_width, self.price_width)
        return [Column(title, width) for (title, _), width in zip(DEFAULT_COLUMNS, widths)]
