"""
Utility functions for stock data formatting and filtering.

Provides helpers for:
- Timestamp parsing (ISO 8601 as written by the back end)
- Price formatting from integer cents
- Search query matching against entity names
- Local page slicing for endpoints that are not paginated server side
"""

from datetime import datetime
from typing import Sequence, TypeVar

T = TypeVar("T")


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp as written by the back end.

    A trailing ``Z`` is accepted. Anything unparsable yields None rather
    than failing the whole document.

    Args:
        value: Timestamp string, e.g. ``"2024-05-01T12:30:00Z"``.

    Returns:
        datetime object if parsing succeeds, None otherwise.
    """
    if value:
        value = value.strip()
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def format_cents(cents: int, symbol: str = "R$") -> str:
    """
    Format an integer amount of cents for display.

    Args:
        cents: Amount in the smallest currency unit.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string like 'R$ 1,234.56'.
    """
    return f"{symbol} {cents / 100:,.2f}"


def parse_price(text: str) -> int:
    """
    Convert a user typed decimal price into integer cents.

    Accepts either ``.`` or ``,`` as the decimal separator.

    Raises:
        ValueError: If the text is not a number.
    """
    normalized = text.strip().replace(",", ".")
    return round(float(normalized) * 100)


def matches_query(name: str, query: str) -> bool:
    """
    Check if a name matches the search query.

    Performs case-insensitive substring matching. An empty query matches
    everything.
    """
    normalized = query.strip().lower()
    if not normalized:
        return True
    return normalized in name.lower()


def page_slice(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """Return the items of a 1-indexed page."""
    page, page_size = max(page, 1), max(page_size, 1)
    start = (page - 1) * page_size
    return list(items[start : start + page_size])
