"""Tests for product records and normalization."""

from datetime import datetime, timezone

import pytest

from agromarket.catalog.models import (
    Category,
    Priority,
    ProductRecord,
    coerce_non_negative,
    normalize_product,
)


class TestCoercion:
    """Tests for numeric coercion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12, 12.0),
            ("7.5", 7.5),
            (-3, 0.0),
            ("abc", 0.0),
            (None, 0.0),
            (float("nan"), 0.0),
            (True, 0.0),
        ],
    )
    def test_coerce_non_negative(self, value, expected) -> None:
        """Negative and non-numeric values become 0."""
        assert coerce_non_negative(value) == expected


class TestNormalizeProduct:
    """Tests for normalize_product."""

    def test_defaults(self) -> None:
        """Missing fields receive their defaults."""
        record = normalize_product({"name": "Yuca"})

        assert record.id
        assert record.description == ""
        assert record.category == Category.FRUIT
        assert record.priority == Priority.MEDIUM
        assert record.price == 0
        assert record.stock == 0
        assert record.unit == "kg"
        assert record.active is True
        assert record.created_at.tzinfo is not None
        assert record.updated_at is None

    def test_unknown_enums_fall_back(self) -> None:
        """Unrecognized category and priority use defaults."""
        record = normalize_product({"name": "Carne", "category": "meat", "priority": "urgent"})
        assert record.category == Category.FRUIT
        assert record.priority == Priority.MEDIUM

    def test_missing_name(self) -> None:
        """A record without a name gets a placeholder."""
        assert normalize_product({}).name == "Unnamed product"

    def test_negative_numbers_coerced(self) -> None:
        """Negative price and stock become 0."""
        record = normalize_product({"name": "Leche", "price": -5, "stock": "-1"})
        assert record.price == 0
        assert record.stock == 0

    def test_timestamps_parsed(self) -> None:
        """ISO timestamps are parsed as UTC datetimes."""
        record = normalize_product(
            {
                "name": "Leche",
                "created_at": "2026-03-01T10:00:00+00:00",
                "updated_at": "2026-03-02T10:00:00",
            }
        )
        assert record.created_at == datetime(2026, 3, 1, 10, tzinfo=timezone.utc)
        assert record.updated_at == datetime(2026, 3, 2, 10, tzinfo=timezone.utc)

    def test_camel_case_timestamps(self) -> None:
        """Timestamps written by the browser client keep their values."""
        record = normalize_product(
            {
                "id": 1700000000000,
                "name": "Mango",
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-02-01T00:00:00.000Z",
            }
        )
        assert record.id == "1700000000000"
        assert record.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert record.updated_at == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_snake_case_timestamps_win(self) -> None:
        """The stored key takes precedence over the camelCase one."""
        record = normalize_product(
            {
                "name": "Mango",
                "created_at": "2026-01-01T00:00:00+00:00",
                "createdAt": "2024-01-01T00:00:00Z",
            }
        )
        assert record.created_at.year == 2026

    def test_round_trip(self) -> None:
        """to_dict output normalizes back to an equal record."""
        record = normalize_product(
            {"name": "Papa", "category": "tuber", "priority": "low", "price": 2100, "stock": 4}
        )
        assert ProductRecord.from_dict(record.to_dict()) == record

    def test_records_are_immutable(self) -> None:
        """Records cannot be mutated in place."""
        record = normalize_product({"name": "Papa"})
        with pytest.raises(AttributeError):
            record.name = "Yuca"  # type: ignore[misc]

    def test_stock_value(self) -> None:
        """Stock value is price times stock."""
        record = normalize_product({"name": "Papa", "price": 3, "stock": 4})
        assert record.stock_value == 12
