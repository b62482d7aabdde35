"""Coin list table: a DataTable whose geometry follows NavigationState."""

from __future__ import annotations

from textual.widgets import DataTable

from coindash.dashboard.formatter import format_rows
from coindash.dashboard.state import NavigationState


class CoinTable(DataTable):
    """Scrollable coin list.

    Not focusable: the app interprets every key and delegates cursor
    movement here, so the table never swallows navigation keys.
    """

    can_focus = False

    DEFAULT_CSS = """
    CoinTable {
        box-sizing: content-box;
        height: auto;
        padding: 0 1;
        border: solid $border-color;
    }

    CoinTable > .datatable--header {
        color: $header-color;
        text-style: none;
    }

    CoinTable > .datatable--cursor {
        color: $selected-fg;
        background: $selected-bg;
        text-style: none;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=False, **kwargs)

    def update_table(self, state: NavigationState) -> None:
        """Rebuild columns and rows from the state's widths and height."""
        cursor = self.cursor_row
        self.clear(columns=True)
        for col in state.columns:
            self.add_column(col.title, width=col.width, key=col.title)
        self.add_rows(format_rows([row.cells() for row in state.rows], state.columns))
        # One extra line for the header
        self.styles.height = state.height + 1
        if state.rows:
            self.move_cursor(row=min(cursor, len(state.rows) - 1), animate=False)
