"""End-to-end key handling through the Textual app."""

from __future__ import annotations

from collections.abc import Callable

from textual.widgets import ContentSwitcher

from coindash.constants import Page
from coindash.dashboard.app import CoinDashApp
from coindash.dashboard.state import Failed, Ready
from coindash.dashboard.widgets.coin_table import CoinTable
from coindash.dashboard.widgets.detail_panel import detail_text
from coindash.dashboard.widgets.price_chart import chart_text


async def _wait_for(pilot, condition: Callable[[], bool], attempts: int = 50) -> None:
    """Let background fetches finish and their messages get processed."""
    for _ in range(attempts):
        if condition():
            return
        await pilot.pause(0.01)
    raise AssertionError("condition not met")


class TestNavigation:
    async def test_starts_on_list(self, config, coins, stub_provider) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test():
            assert app.state.page == Page.LIST
            assert app.query_one(ContentSwitcher).current == "list"
            assert app.query_one(CoinTable).row_count == 2

    async def test_down_enter_opens_detail_for_second_coin(self, config, coins, stub_provider) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("down", "enter")
            await _wait_for(pilot, lambda: isinstance(app.state.price, Ready))

            assert app.state.page == Page.DETAIL
            assert app.state.selected_row == 1
            assert app.state.price.data == 60000.0
            assert app.query_one(ContentSwitcher).current == "detail"
            assert stub_provider.calls[0] == ("ethereum", config.start_date, config.end_date)

    async def test_chart_round_trip_discards_buffer(self, config, coins, stub_provider, points) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("enter", "right")
            await _wait_for(pilot, lambda: app.state.chart is not None)
            assert app.state.page == Page.CHART
            assert app.state.chart == points

            await pilot.press("left")
            assert app.state.page == Page.DETAIL
            assert app.state.chart is None
            assert chart_text(app.state).startswith("No chart data available")

            await pilot.press("escape")
            assert app.state.page == Page.LIST
            assert app.query_one(ContentSwitcher).current == "list"

    async def test_fetch_failure_is_recovered_inline(self, config, coins, failing_provider) -> None:
        app = CoinDashApp(config, failing_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await _wait_for(pilot, lambda: isinstance(app.state.price, Failed))

            assert app.state.price.error == "connection refused"
            await pilot.press("escape")
            assert app.state.page == Page.LIST

    async def test_unexpected_provider_error_still_settles(self, config, coins, failing_provider) -> None:
        failing_provider.error = OverflowError("cannot convert float infinity to integer")
        app = CoinDashApp(config, failing_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("enter")
            await _wait_for(pilot, lambda: isinstance(app.state.price, Failed))

            assert "infinity" in app.state.price.error
            assert "Error fetching price for Bitcoin" in detail_text(app.state)

    async def test_quit(self, config, coins, stub_provider) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("q")
        assert app.return_code == 0


class TestGeometry:
    async def test_resize_keys_update_table(self, config, coins, stub_provider) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("shift+right", "shift+down")

            assert [c.width for c in app.state.columns] == [10, 7, 8]
            assert app.state.height == 15
            table = app.query_one(CoinTable)
            assert [col.width for col in table.columns.values()] == [10, 7, 8]

    async def test_cursor_survives_relayout(self, config, coins, stub_provider) -> None:
        app = CoinDashApp(config, stub_provider, coins)
        async with app.run_test() as pilot:
            await pilot.press("down", "shift+left")
            assert app.query_one(CoinTable).cursor_row == 1
            assert app.state.columns[0].width == 9
