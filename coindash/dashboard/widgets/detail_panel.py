"""Single-coin detail panel: name, symbol and current price."""

from __future__ import annotations

from rich.markup import escape
from textual.widget import Widget
from textual.widgets import Static

from coindash.constants import BACK_HINT
from coindash.dashboard.state import Failed, NavigationState, Pending, Ready


def detail_text(state: NavigationState) -> str:
    """Markup for the detail page in its current load state."""
    coin = state.selected_coin
    if coin is None:
        return f"No coin selected\n\n{BACK_HINT}"

    name = escape(coin.name)
    if isinstance(state.price, Ready):
        return (
            "[bold]Detailed Information[/]\n\n"
            f"Name: {name}\n"
            f"Symbol: {escape(coin.symbol)}\n"
            f"Price: ${state.price.data:.2f}\n\n"
            f"{BACK_HINT}"
        )
    if isinstance(state.price, Failed):
        return (
            f"[red]Error fetching price for {name}: {escape(state.price.error)}[/]\n\n"
            f"{BACK_HINT}"
        )
    if isinstance(state.price, Pending):
        return f"[dim]Fetching price for {name}...[/]\n\n{BACK_HINT}"
    return f"Name: {name}\nSymbol: {escape(coin.symbol)}\n\n{BACK_HINT}"


class DetailPanel(Widget):
    """Bordered box with the selected coin's details."""

    DEFAULT_CSS = """
    DetailPanel {
        height: auto;
        padding: 1 2;
        border: round $border-color;
    }
    """

    def compose(self):
        yield Static(id="detail-content")

    def update_detail(self, state: NavigationState) -> None:
        """Redraw the detail text."""
        self.query_one("#detail-content", Static).update(detail_text(state))
