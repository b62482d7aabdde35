"""Unit tests for cell truncation."""

from coindash.dashboard.formatter import format_rows, truncate_cell
from coindash.types import Column


class TestTruncateCell:
    """Tests for truncate_cell."""

    def test_width_three_hard_cuts(self) -> None:
        assert truncate_cell("Bitcoin", 3) == "Bit"

    def test_width_three_output_is_exactly_three(self) -> None:
        for text in ("abc", "abcd", "a much longer coin name"):
            assert len(truncate_cell(text, 3)) == 3

    def test_small_width_cuts_mid_word_without_ellipsis(self) -> None:
        assert truncate_cell("Ethereum", 2) == "Et"
        assert truncate_cell("Ethereum", 1) == "E"

    def test_overflow_gets_ellipsis_and_exact_width(self) -> None:
        result = truncate_cell("Ethereum Classic", 10)
        assert result == "Ethereu..."
        assert len(result) == 10

    def test_exact_fit_unchanged(self) -> None:
        assert truncate_cell("Litecoin", 8) == "Litecoin"

    def test_short_cell_not_padded(self) -> None:
        assert truncate_cell("BTC", 6) == "BTC"


class TestFormatRows:
    """Tests for format_rows."""

    def test_truncates_per_column(self) -> None:
        rows = [("Bitcoin Cash", "BCH", "450.25")]
        columns = [Column("Name", 10), Column("Symbol", 3), Column("Price", 5)]

        assert format_rows(rows, columns) == [("Bitcoin...", "BCH", "45...")]

    def test_extra_cells_pass_through(self) -> None:
        rows = [("Bitcoin", "BTC", "60000.00", "extra cell")]
        columns = [Column("Name", 10)]

        assert format_rows(rows, columns) == [("Bitcoin", "BTC", "60000.00", "extra cell")]

    def test_does_not_mutate_input(self) -> None:
        rows = [["Ethereum Classic", "ETC", "20.00"]]
        columns = [Column("Name", 6), Column("Symbol", 6), Column("Price", 8)]

        format_rows(rows, columns)
        assert rows == [["Ethereum Classic", "ETC", "20.00"]]

    def test_empty_rows(self) -> None:
        assert format_rows([], [Column("Name", 10)]) == []
