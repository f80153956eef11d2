"""
Tests for EstimationInput validation and purchase date parsing
"""

from datetime import date, datetime, timezone

import pytest

from shelfcast.models.estimation import (
    LATEST_PURCHASE_DATE,
    EstimateSource,
    EstimationInput,
    EstimationResult,
    InvalidEstimationInput,
    parse_purchase_date,
)


class TestParsePurchaseDate:

    @pytest.mark.parametrize("value, expected", [
        ("2024-01-01", date(2024, 1, 1)),
        (" 2024-02-29 ", date(2024, 2, 29)),
        ("2024-01-01T23:30:00", date(2024, 1, 1)),
        ("2024-01-01T23:30:00Z", date(2024, 1, 1)),
        ("2024-01-01T23:30:00-08:00", date(2024, 1, 1)),
        (date(2024, 3, 5), date(2024, 3, 5)),
        (datetime(2024, 3, 5, 22, 0, tzinfo=timezone.utc), date(2024, 3, 5)),
        ("9998-12-31", LATEST_PURCHASE_DATE),
    ])
    def test_valid(self, value, expected):
        assert parse_purchase_date(value) == expected

    @pytest.mark.parametrize("value", [
        "", "   ", "yesterday", "2023-02-29", None, 20240101,
        "9999-12-01", date(9999, 12, 31), datetime(9999, 1, 1, 12, 0),
    ])
    def test_invalid(self, value):
        with pytest.raises(InvalidEstimationInput):
            parse_purchase_date(value)


class TestEstimationInput:

    def test_string_date_is_normalized(self):
        item = EstimationInput(name="Milk", category="Dairy", purchased_at="2024-01-01")
        assert item.purchased_at == date(2024, 1, 1)

    def test_missing_category_becomes_empty(self):
        item = EstimationInput(name="Milk", category=None, purchased_at=date(2024, 1, 1))
        assert item.category == ""

    @pytest.mark.parametrize("name", ["", "  ", None])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidEstimationInput):
            EstimationInput(name=name, category="Dairy", purchased_at=date(2024, 1, 1))

    @pytest.mark.parametrize("category", [["Dairy"], 5, {"name": "Dairy"}])
    def test_non_string_category_rejected(self, category):
        with pytest.raises(InvalidEstimationInput):
            EstimationInput(name="Milk", category=category, purchased_at=date(2024, 1, 1))

    def test_far_future_purchase_rejected(self):
        with pytest.raises(InvalidEstimationInput):
            EstimationInput(name="Milk", category="Dairy", purchased_at="9999-12-01")

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            EstimationInput(name="Milk", category="Dairy", purchased_at="01/02/2024")


def test_result_to_dict():
    result = EstimationResult(date(2024, 12, 31), date(2024, 3, 31), EstimateSource.EXTERNAL)
    assert result.to_dict() == {
        "estimatedExpirationAt": "2024-12-31",
        "estimatedRestockAt": "2024-03-31",
        "source": "external",
    }
