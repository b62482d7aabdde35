"""Braille time-series price chart."""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape
from textual.widget import Widget
from textual.widgets import Static

from coindash.constants import BACK_HINT
from coindash.dashboard.state import NavigationState, Pending
from coindash.types import PricePoint
from coindash.utils.time import date_label

BRAILLE_BASE = 0x2800
# Dot bit for (x, y) inside a 2x4 braille cell
BRAILLE_DOTS = (
    (0x01, 0x02, 0x04, 0x40),
    (0x08, 0x10, 0x20, 0x80),
)


def _plot_pixels(
    points: Sequence[PricePoint], px_width: int, px_height: int
) -> set[tuple[int, int]]:
    """Scale points onto a pixel grid and join neighbours with line segments."""
    t0 = points[0].timestamp
    t1 = points[-1].timestamp
    lo = min(p.value for p in points)
    hi = max(p.value for p in points)

    coords = []
    for i, p in enumerate(points):
        if t1 != t0:
            fx = (p.timestamp - t0) / (t1 - t0)
        else:
            fx = i / max(len(points) - 1, 1)
        fy = (hi - p.value) / (hi - lo) if hi != lo else 0.5
        x = max(0, min(round(fx * (px_width - 1)), px_width - 1))
        y = max(0, min(round(fy * (px_height - 1)), px_height - 1))
        coords.append((x, y))

    pixels = {coords[0]}
    for (x1, y1), (x2, y2) in zip(coords, coords[1:]):
        steps = max(abs(x2 - x1), abs(y2 - y1), 1)
        for s in range(steps + 1):
            pixels.add((
                round(x1 + (x2 - x1) * s / steps),
                round(y1 + (y2 - y1) * s / steps),
            ))
    return pixels


def braille_chart(points: Sequence[PricePoint], width: int = 60, height: int = 10) -> list[str]:
    """Draw points as ``height`` lines of ``width`` braille cells plus axes."""
    if not points:
        return []

    px_width, px_height = width * 2, height * 4
    grid = [[0] * width for _ in range(height)]
    for x, y in _plot_pixels(points, px_width, px_height):
        grid[y // 4][x // 2] |= BRAILLE_DOTS[x % 2][y % 4]

    hi = max(p.value for p in points)
    lo = min(p.value for p in points)
    hi_label = f"{hi:,.2f}"
    lo_label = f"{lo:,.2f}"
    pad = max(len(hi_label), len(lo_label))

    lines = []
    for row_idx, row in enumerate(grid):
        if row_idx == 0:
            label = f"{hi_label:>{pad}} ┤"
        elif row_idx == height - 1:
            label = f"{lo_label:>{pad}} ┤"
        else:
            label = " " * (pad + 1) + "│"
        cells = "".join(chr(BRAILLE_BASE + bits) if bits else " " for bits in row)
        lines.append(label + cells)

    lines.append(" " * (pad + 1) + "└" + "─" * width)
    first = date_label(points[0].timestamp)
    last = date_label(points[-1].timestamp)
    gap = max(width - len(first) - len(last), 1)
    lines.append(" " * (pad + 2) + first + " " * gap + last)
    return lines


def chart_text(
    state: NavigationState, color: str = "red", width: int = 60, height: int = 10
) -> str:
    """Markup for the chart page in its current load state."""
    coin = state.selected_coin
    if coin is None:
        return f"No coin selected\n\n{BACK_HINT}"
    if isinstance(state.series, Pending):
        return f"[dim]Fetching price history for {escape(coin.name)}...[/]\n\n{BACK_HINT}"
    if not state.chart:
        return f"No chart data available\n\n{BACK_HINT}"

    chart = "\n".join(braille_chart(state.chart, width=width, height=height))
    return f"[bold]{escape(coin.name)} Price Chart[/]\n\n[{color}]{chart}[/]"


class ChartPanel(Widget):
    """Wide bordered box holding the selected coin's price chart."""

    DEFAULT_CSS = """
    ChartPanel {
        height: auto;
        padding: 1 2;
        border: round $border-color;
    }
    """

    def __init__(self, color: str = "red", width: int = 60, height: int = 10, **kwargs) -> None:
        super().__init__(**kwargs)
        self._color = color
        self._chart_width = width
        self._chart_height = height

    def compose(self):
        yield Static(id="chart-content")

    def update_chart(self, state: NavigationState) -> None:
        """Redraw the chart from the state's chart buffer."""
        text = chart_text(state, self._color, self._chart_width, self._chart_height)
        self.query_one("#chart-content", Static).update(text)
