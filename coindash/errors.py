"""Price data error taxonomy.

Providers raise these instead of leaking transport or decoding exceptions,
so callers only have to handle ``PriceDataError``.
"""

from __future__ import annotations


class PriceDataError(Exception):
    """Base class for every price provider failure."""


class DataUnavailable(PriceDataError):
    """Fixture file or coin list response could not be read or parsed."""


class NetworkError(PriceDataError):
    """HTTP transport failure (connection, timeout, non-2xx status)."""


class DecodeError(PriceDataError):
    """Upstream response was not the expected JSON shape."""


class NotFound(PriceDataError):
    """Query resolved to an empty result set."""


class ParseError(PriceDataError):
    """Date string did not match MM-DD-YYYY."""
