"""Navigation state machine for the dashboard pages.

``NavigationState`` holds everything the widgets render from: the active
page, the selected row, table geometry and the load state of on-demand
fetches.  ``apply_key`` interprets one key press; ``apply_result`` folds a
finished fetch back in.  Neither touches the terminal or the network, the
app performs the returned effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from coindash.constants import Page
from coindash.types import CoinRow, Column, PricePoint

if TYPE_CHECKING:
    from coindash.config import DashboardConfig


@dataclass
class Pending:
    """Fetch in flight."""
    request_id: int


@dataclass
class Ready:
    """Fetch finished with data."""
    request_id: int
    data: Any


@dataclass
class Failed:
    """Fetch finished with an error description."""
    request_id: int
    error: str


LoadState = Pending | Ready | Failed


class FetchKind(StrEnum):
    PRICE = "price"    # Detail page: current price
    SERIES = "series"  # Chart page: price history


class Effect(StrEnum):
    """What the app must do after a key press."""
    NONE = "none"
    QUIT = "quit"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    RELAYOUT = "relayout"
    REDRAW = "redraw"
    FETCH = "fetch"


@dataclass(frozen=True)
class FetchRequest:
    kind: FetchKind
    request_id: int
    coin: CoinRow


@dataclass(frozen=True)
class KeyResult:
    effect: Effect
    request: FetchRequest | None = None


NO_EFFECT = KeyResult(Effect.NONE)

QUIT_KEYS = frozenset({"q", "ctrl+c", "ctrl+d"})
FORWARD_KEYS = frozenset({"enter", "right"})
BACK_KEYS = frozenset({"escape", "esc", "left"})

# Direct per-column resize: key -> (column index, direction)
COLUMN_KEYS: dict[str, tuple[int, int]] = {
    "1": (0, 1),
    "2": (1, 1),
    "3": (2, 1),
    "!": (0, -1),
    "exclamation_mark": (0, -1),
    "@": (1, -1),
    "at": (1, -1),
    "#": (2, -1),
    "number_sign": (2, -1),
}


@dataclass
class NavigationState:
    """Page, selection and table geometry for one dashboard session."""

    rows: list[CoinRow] = field(default_factory=list)
    columns: list[Column] = field(default_factory=list)
    height: int = 10
    min_height: int = 5
    height_increment: int = 5
    min_col_width: int = 5
    width_increment: int = 5

    page: Page = Page.LIST
    selected_row: int = 0

    # On-demand fetches
    price: LoadState | None = None
    series: LoadState | None = None
    # Chart buffer: rebuilt on every entry to the chart page, never cached
    chart: list[PricePoint] | None = None

    _last_request_id: int = 0

    @classmethod
    def from_config(cls, config: DashboardConfig, rows: list[CoinRow]) -> NavigationState:
        return cls(
            rows=list(rows),
            columns=config.build_columns(),
            height=config.table_height,
            min_height=config.min_height,
            height_increment=config.height_increment,
            min_col_width=config.min_col_width,
            width_increment=config.width_increment,
        )

    @property
    def selected_coin(self) -> CoinRow | None:
        """Row under the selection, or None when it is out of bounds."""
        if 0 <= self.selected_row < len(self.rows):
            return self.rows[self.selected_row]
        return None

    def _next_request_id(self) -> int:
        self._last_request_id += 1
        return self._last_request_id

    # ------------------------------------------------------------------
    # Page transitions
    # ------------------------------------------------------------------

    def forward(self, cursor: int) -> KeyResult:
        """enter / right: List -> Detail -> Chart."""
        if self.page == Page.LIST:
            self.page = Page.DETAIL
            self.selected_row = cursor
            return self._request(FetchKind.PRICE)
        if self.page == Page.DETAIL:
            self.page = Page.CHART
            self.chart = None
            return self._request(FetchKind.SERIES)
        return NO_EFFECT

    def back(self) -> KeyResult:
        """esc / left: Chart -> Detail -> List."""
        if self.page == Page.DETAIL:
            self.page = Page.LIST
            self.price = None
            return KeyResult(Effect.REDRAW)
        if self.page == Page.CHART:
            self.page = Page.DETAIL
            self.series = None
            self.chart = None
            return KeyResult(Effect.REDRAW)
        return NO_EFFECT

    def _request(self, kind: FetchKind) -> KeyResult:
        coin = self.selected_coin
        if coin is None:
            if kind is FetchKind.PRICE:
                self.price = None
            else:
                self.series = None
            return KeyResult(Effect.REDRAW)

        request = FetchRequest(kind=kind, request_id=self._next_request_id(), coin=coin)
        if kind is FetchKind.PRICE:
            self.price = Pending(request.request_id)
        else:
            self.series = Pending(request.request_id)
        return KeyResult(Effect.FETCH, request)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def shrink_height(self) -> None:
        """shift+up: fewer visible rows, never below min_height."""
        self.height = max(self.min_height, self.height - self.height_increment)

    def grow_height(self) -> None:
        """shift+down: more visible rows."""
        self.height = max(self.min_height, self.height + self.height_increment)

    def shrink_columns(self) -> None:
        """shift+left: narrow the first column still above the minimum."""
        for col in self.columns:
            if col.width > self.min_col_width:
                col.width -= 1
                break

    def grow_columns(self) -> None:
        """shift+right: widen the narrowest column (first one on ties)."""
        if not self.columns:
            return
        narrowest = min(self.columns, key=lambda c: c.width)
        narrowest.width += 1

    def resize_column(self, index: int, direction: int) -> None:
        """Widen or narrow one column by width_increment."""
        if not 0 <= index < len(self.columns):
            return
        col = self.columns[index]
        col.width = max(self.min_col_width, col.width + direction * self.width_increment)


def apply_key(state: NavigationState, key: str, cursor: int = 0) -> KeyResult:
    """Interpret a key press against the current page.

    ``cursor`` is the table widget's cursor row, read when leaving the list.
    """
    if key in QUIT_KEYS:
        return KeyResult(Effect.QUIT)
    if key in FORWARD_KEYS:
        return state.forward(cursor)
    if key in BACK_KEYS:
        return state.back()
    if key in ("up", "down"):
        if state.page != Page.LIST:
            return NO_EFFECT
        return KeyResult(Effect.CURSOR_UP if key == "up" else Effect.CURSOR_DOWN)

    if key == "shift+up":
        state.shrink_height()
    elif key == "shift+down":
        state.grow_height()
    elif key == "shift+left":
        state.shrink_columns()
    elif key == "shift+right":
        state.grow_columns()
    elif key in COLUMN_KEYS:
        index, direction = COLUMN_KEYS[key]
        state.resize_column(index, direction)
    else:
        return NO_EFFECT
    return KeyResult(Effect.RELAYOUT)


def apply_result(
    state: NavigationState, request: FetchRequest, outcome: Ready | Failed
) -> bool:
    """Store a finished fetch; stale results (user navigated away) are dropped."""
    if request.kind is FetchKind.PRICE:
        current = state.price
    else:
        current = state.series
    if not isinstance(current, Pending) or current.request_id != request.request_id:
        return False

    if request.kind is FetchKind.PRICE:
        state.price = outcome
        return True

    state.series = outcome
    if isinstance(outcome, Ready) and outcome.data:
        state.chart = list(outcome.data)
    else:
        # Failed or empty series: no chart rather than a partial one
        state.chart = None
    return True
