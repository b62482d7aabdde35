"""Unit tests for MM-DD-YYYY date helpers."""

from datetime import timezone

import pytest

from coindash.errors import ParseError
from coindash.utils.time import date_label, parse_date, resolve_range, to_unix_timestamp


class TestParseDate:
    def test_valid_date_is_utc_midnight(self) -> None:
        parsed = parse_date("01-01-2025")
        assert parsed.tzinfo == timezone.utc
        assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2025, 1, 1, 0)

    @pytest.mark.parametrize("value", ["13-45-2025", "2025-01-01", "", "01/01/2025"])
    def test_malformed_raises_parse_error(self, value: str) -> None:
        with pytest.raises(ParseError):
            parse_date(value)


class TestToUnixTimestamp:
    def test_known_timestamps(self) -> None:
        assert to_unix_timestamp("01-01-2025") == "1735689600"
        assert to_unix_timestamp("05-05-2025") == "1746403200"

    def test_malformed_date_yields_empty_string(self) -> None:
        assert to_unix_timestamp("13-45-2025") == ""


class TestResolveRange:
    def test_valid_range(self) -> None:
        assert resolve_range("01-01-2025", "05-05-2025") == ("1735689600", "1746403200")

    def test_malformed_start_raises(self) -> None:
        with pytest.raises(ParseError):
            resolve_range("13-45-2025", "05-05-2025")

    def test_malformed_end_raises(self) -> None:
        with pytest.raises(ParseError):
            resolve_range("01-01-2025", "not a date")


def test_date_label_round_trips_format() -> None:
    assert date_label(1735689600) == "01-01-2025"
