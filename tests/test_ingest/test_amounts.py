"""Tests for disclosed amount range estimation."""

from decimal import Decimal

import pytest

from marketdash.ingest.amounts import estimate_amount


class TestEstimateAmount:
    """Tests for estimate_amount."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("250,001 - 500,000", Decimal("375000.5")),
            ("$1,001 - $15,000", Decimal("8000.5")),
            ("$15,001-$50,000", Decimal("32500.5")),
            ("100 - 200", Decimal("150")),
            ("$1,000,001 - $5,000,000", Decimal("3000000.5")),
        ],
    )
    def test_range_midpoint(self, text: str, expected: Decimal) -> None:
        assert estimate_amount(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Over 1,000,000", Decimal("1250000")),
            ("Over $50,000,000", Decimal("62500000")),
            ("over 100", Decimal("125")),
        ],
    )
    def test_open_upper_bound(self, text: str, expected: Decimal) -> None:
        assert estimate_amount(text) == expected

    @pytest.mark.parametrize("text", ["None", "none", " NONE ", "$None"])
    def test_none_literal_is_absent(self, text: str) -> None:
        assert estimate_amount(text) is None

    @pytest.mark.parametrize(
        "text", ["", None, "Spouse/DC", "unknown", "$", "Over ,,,", "Over \u0661\u0662", "\u0661 - \u0662"]
    )
    def test_unrecognized_is_absent(self, text: str | None) -> None:
        assert estimate_amount(text) is None

    def test_result_is_never_zero_for_missing(self) -> None:
        assert estimate_amount("N/A") is None
