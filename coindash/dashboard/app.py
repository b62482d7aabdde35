"""Main Textual TUI dashboard application."""

from __future__ import annotations

import asyncio

import structlog
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import ContentSwitcher

from coindash.clients.base import PriceProvider
from coindash.config import DashboardConfig
from coindash.dashboard.state import (
    Effect,
    Failed,
    FetchKind,
    FetchRequest,
    NavigationState,
    Ready,
    apply_key,
    apply_result,
)
from coindash.dashboard.widgets.coin_table import CoinTable
from coindash.dashboard.widgets.detail_panel import DetailPanel
from coindash.dashboard.widgets.price_chart import ChartPanel
from coindash.errors import PriceDataError
from coindash.types import CoinRow

logger = structlog.get_logger()

DASHBOARD_CSS = """
Screen {
    align: center middle;
}

ContentSwitcher {
    width: auto;
    height: auto;
}
"""


class FetchCompleted(Message):
    """A price or series fetch finished (successfully or not)."""

    def __init__(self, request: FetchRequest, outcome: Ready | Failed) -> None:
        super().__init__()
        self.request = request
        self.outcome = outcome


class CoinDashApp(App):
    """Crypto price table with detail and chart drill-down."""

    CSS = DASHBOARD_CSS
    TITLE = "coindash"

    BINDINGS = [
        Binding("q,ctrl+c,ctrl+d", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        config: DashboardConfig,
        provider: PriceProvider,
        coins: list[CoinRow],
        **kwargs,
    ) -> None:
        # Read by get_css_variables() during App.__init__
        self._config = config
        super().__init__(**kwargs)
        self.provider = provider
        self.state = NavigationState.from_config(config, coins)
        self._fetch_tasks: dict[FetchKind, asyncio.Task] = {}

    def get_css_variables(self) -> dict[str, str]:
        variables = super().get_css_variables()
        variables.update({
            "border-color": self._config.border_color,
            "header-color": self._config.header_color,
            "selected-fg": self._config.selected_fg,
            "selected-bg": self._config.selected_bg,
        })
        return variables

    def compose(self) -> ComposeResult:
        with ContentSwitcher(initial=self.state.page.value):
            yield CoinTable(id="list")
            yield DetailPanel(id="detail")
            yield ChartPanel(
                color=self._config.chart_color,
                width=self._config.chart_width,
                height=self._config.chart_height,
                id="chart",
            )

    def on_mount(self) -> None:
        """Apply configured box styles and draw the first frame."""
        cfg = self._config
        table = self.query_one(CoinTable)
        table.styles.border = (cfg.list_border, cfg.border_color)
        table.styles.width = cfg.list_box_width
        detail = self.query_one(DetailPanel)
        detail.styles.border = (cfg.detail_border, cfg.border_color)
        detail.styles.width = cfg.detail_box_width
        chart = self.query_one(ChartPanel)
        chart.styles.border = (cfg.chart_border, cfg.border_color)
        chart.styles.width = cfg.chart_box_width

        table.update_table(self.state)
        self._refresh_views()
        logger.info("dashboard.started", coins=len(self.state.rows))

    def on_key(self, event: events.Key) -> None:
        """Route every key through the navigation state machine."""
        table = self.query_one(CoinTable)
        result = apply_key(self.state, event.key, cursor=table.cursor_row)
        if result.effect is Effect.NONE:
            return
        event.stop()
        logger.debug("key.handled", key=event.key, effect=result.effect, page=self.state.page)

        if result.effect is Effect.QUIT:
            self.exit()
            return
        if result.effect is Effect.CURSOR_UP:
            table.action_cursor_up()
        elif result.effect is Effect.CURSOR_DOWN:
            table.action_cursor_down()
        elif result.effect is Effect.RELAYOUT:
            table.update_table(self.state)
        elif result.effect is Effect.FETCH and result.request is not None:
            self._start_fetch(result.request)
        self._refresh_views()

    def _start_fetch(self, request: FetchRequest) -> None:
        """Run a fetch in the background; a newer fetch of the same kind replaces it."""
        previous = self._fetch_tasks.pop(request.kind, None)
        if previous and not previous.done():
            previous.cancel()
        self._fetch_tasks[request.kind] = asyncio.create_task(self._fetch(request))

    async def _fetch(self, request: FetchRequest) -> None:
        coin_id = request.coin.coin_id
        start, end = self._config.start_date, self._config.end_date
        try:
            if request.kind is FetchKind.PRICE:
                data = await self.provider.fetch_current_price(coin_id, start, end)
            else:
                data = await self.provider.fetch_price_series(coin_id, start, end)
            outcome: Ready | Failed = Ready(request.request_id, data)
        except PriceDataError as e:
            logger.warning("fetch.failed", kind=request.kind, coin=coin_id, error=str(e))
            outcome = Failed(request.request_id, str(e))
        except Exception as e:
            logger.exception("fetch.crashed", kind=request.kind, coin=coin_id)
            outcome = Failed(request.request_id, str(e) or type(e).__name__)
        self.post_message(FetchCompleted(request, outcome))

    def on_fetch_completed(self, message: FetchCompleted) -> None:
        if apply_result(self.state, message.request, message.outcome):
            self._refresh_views()
        else:
            logger.debug("fetch.stale", kind=message.request.kind, request_id=message.request.request_id)

    def _refresh_views(self) -> None:
        """Show the active page and redraw it from current state."""
        try:
            self.query_one(ContentSwitcher).current = self.state.page.value
            self.query_one(DetailPanel).update_detail(self.state)
            self.query_one(ChartPanel).update_chart(self.state)
        except NoMatches:
            pass

    async def action_quit(self) -> None:
        """Quit the application."""
        for task in self._fetch_tasks.values():
            task.cancel()
        self.exit()
