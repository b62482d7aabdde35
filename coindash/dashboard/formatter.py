"""Cell truncation for the coin table."""

from __future__ import annotations

from collections.abc import Sequence

from coindash.constants import ELLIPSIS
from coindash.types import Column


def truncate_cell(text: str, width: int) -> str:
    """Fit ``text`` into ``width`` characters.

    Widths of 3 or less are hard-cut (possibly mid-word); wider cells that
    overflow keep ``width - 3`` characters plus an ellipsis.  Short cells are
    returned unpadded.
    """
    if width <= len(ELLIPSIS):
        return text[:width]
    if len(text) <= width:
        return text
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def format_rows(
    rows: Sequence[Sequence[str]], columns: Sequence[Column]
) -> list[tuple[str, ...]]:
    """Truncate every cell to its column width; extra cells pass through."""
    formatted = []
    for row in rows:
        formatted.append(tuple(
            truncate_cell(cell, columns[j].width) if j < len(columns) else cell
            for j, cell in enumerate(row)
        ))
    return formatted
