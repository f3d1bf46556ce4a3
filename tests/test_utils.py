"""Tests for formatting and filtering helpers."""

from __future__ import annotations

from datetime import timezone

import pytest

from stock_ui.utils import format_cents, matches_query, page_slice, parse_price, parse_timestamp


class TestParseTimestamp:
    def test_zulu_suffix(self) -> None:
        parsed = parse_timestamp("2024-05-01T12:30:00Z")
        assert parsed.tzinfo == timezone.utc
        assert (parsed.hour, parsed.minute) == (12, 30)

    @pytest.mark.parametrize("value", [None, "", "  ", "yesterday"])
    def test_unparsable_values(self, value) -> None:
        assert parse_timestamp(value) is None


class TestPrices:
    def test_format_cents(self) -> None:
        assert format_cents(123456) == "R$ 1,234.56"
        assert format_cents(5, symbol="$") == "$ 0.05"

    @pytest.mark.parametrize(("text", "cents"), [("12.5", 1250), ("0,99", 99), (" 3 ", 300)])
    def test_parse_price(self, text: str, cents: int) -> None:
        assert parse_price(text) == cents

    def test_parse_price_rejects_text(self) -> None:
        with pytest.raises(ValueError):
            parse_price("twelve")


class TestFiltering:
    def test_matches_query(self) -> None:
        assert matches_query("Parafuso Sextavado", "sexta")
        assert matches_query("Anything", "  ")
        assert not matches_query("Porca", "parafuso")

    def test_page_slice(self) -> None:
        items = list(range(25))
        assert page_slice(items, 3, 10) == [20, 21, 22, 23, 24]
        assert page_slice(items, 4, 10) == []
        assert page_slice(items, 0, 10) == items[:10]
