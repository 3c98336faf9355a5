"""Tests for the catalog query engine."""

import pytest

from agromarket.catalog.models import ProductRecord
from agromarket.catalog.query import (
    CatalogQueryEngine,
    CatalogStats,
    FilterCriteria,
    filter_by_category,
    filter_by_priority,
    filter_by_status,
    search_products,
)
from factories import make_record


@pytest.fixture
def engine() -> CatalogQueryEngine:
    """Create query engine."""
    return CatalogQueryEngine()


@pytest.fixture
def catalog() -> list[ProductRecord]:
    """A mixed catalog across categories, priorities and statuses."""
    return [
        make_record(id="1", name="Tomate", category="vegetable", priority="high"),
        make_record(id="2", name="Mango", category="fruit", priority="medium", active=False),
        make_record(id="3", name="Arroz", description="Grano largo", category="grain", priority="low"),
        make_record(id="4", name="Queso", category="dairy", priority="high", active=False),
        make_record(id="5", name="Papa", description="Ideal para sopa", category="tuber", priority="medium"),
        make_record(id="6", name="Mandarina", category="fruit", priority="high"),
    ]


class TestFilter:
    """Tests for CatalogQueryEngine.filter."""

    def test_default_criteria_is_identity(self, engine, catalog) -> None:
        """All/all/all/"" returns the input unchanged."""
        assert engine.filter(catalog, FilterCriteria()) == catalog

    def test_empty_collection(self, engine) -> None:
        """Filtering nothing yields nothing."""
        assert engine.filter([], FilterCriteria(status="active")) == []

    def test_active_status_scenario(self, engine, records, tomato) -> None:
        """Only the active Tomate survives the active filter."""
        result = engine.filter(records, FilterCriteria(status="active"))
        assert result == [tomato]

    def test_inactive_status(self, engine, records, mango) -> None:
        """Inactive filter keeps unavailable records."""
        result = engine.filter(records, FilterCriteria(status="inactive"))
        assert result == [mango]

    def test_search_is_case_insensitive(self, engine, records, mango) -> None:
        """Mixed-case query matches by substring."""
        result = engine.filter(records, FilterCriteria(search="MAN"))
        assert result == [mango]

    def test_search_trims_whitespace(self, engine, records, mango) -> None:
        """Leading and trailing whitespace is ignored."""
        result = engine.filter(records, FilterCriteria(search="  mango  "))
        assert result == [mango]

    def test_whitespace_search_is_skipped(self, engine, records) -> None:
        """A blank query does not filter."""
        assert engine.filter(records, FilterCriteria(search="   ")) == records

    def test_search_matches_description(self, engine, catalog) -> None:
        """Description text is searched too."""
        result = engine.filter(catalog, FilterCriteria(search="sopa"))
        assert [r.id for r in result] == ["5"]

    def test_category_without_matches(self, engine, records) -> None:
        """Filtering by an absent category yields an empty sequence."""
        assert engine.filter(records, FilterCriteria(category="dairy")) == []

    def test_unknown_category_matches_nothing(self, engine, catalog) -> None:
        """Unrecognized category values match no records."""
        assert engine.filter(catalog, FilterCriteria(category="meat")) == []

    def test_unknown_priority_matches_nothing(self, engine, catalog) -> None:
        """Unrecognized priority values match no records."""
        assert engine.filter(catalog, FilterCriteria(priority="urgent")) == []

    def test_unknown_status_matches_nothing(self, engine, catalog) -> None:
        """Unrecognized status values match no records."""
        assert engine.filter(catalog, FilterCriteria(status="archived")) == []

    def test_predicates_compose_as_and(self, engine, catalog) -> None:
        """Every criterion must hold."""
        criteria = FilterCriteria(status="active", category="fruit", priority="high", search="man")
        result = engine.filter(catalog, criteria)
        assert [r.id for r in result] == ["6"]

    def test_order_is_preserved(self, engine, catalog) -> None:
        """Surviving records keep their input order."""
        result = engine.filter(catalog, FilterCriteria(priority="high"))
        assert [r.id for r in result] == ["1", "4", "6"]

    def test_filter_is_idempotent(self, engine, catalog) -> None:
        """Filtering twice equals filtering once."""
        criteria = FilterCriteria(status="active", search="a")
        once = engine.filter(catalog, criteria)
        assert engine.filter(once, criteria) == once

    @pytest.mark.parametrize(
        "criteria",
        [
            FilterCriteria(status="active"),
            FilterCriteria(category="fruit"),
            FilterCriteria(priority="low"),
            FilterCriteria(search="o"),
            FilterCriteria(status="inactive", category="dairy"),
        ],
    )
    def test_filter_never_adds_records(self, engine, catalog, criteria) -> None:
        """Filtered output is never longer than the input."""
        assert len(engine.filter(catalog, criteria)) <= len(catalog)

    def test_input_is_not_mutated(self, engine, catalog) -> None:
        """The input collection is left untouched."""
        before = list(catalog)
        engine.filter(catalog, FilterCriteria(status="active"))
        assert catalog == before

    def test_accepts_tuple_snapshot(self, engine, catalog) -> None:
        """Snapshots passed as tuples are filtered the same way."""
        result = engine.filter(tuple(catalog), FilterCriteria(category="fruit"))
        assert [r.id for r in result] == ["2", "6"]


class TestPredicates:
    """Tests for the individual predicate functions."""

    def test_filter_by_status_all(self, catalog) -> None:
        """Status "all" keeps everything."""
        assert filter_by_status(catalog, "all") == catalog

    def test_filter_by_category(self, catalog) -> None:
        """Category predicate compares category values."""
        assert [r.id for r in filter_by_category(catalog, "grain")] == ["3"]

    def test_filter_by_priority(self, catalog) -> None:
        """Priority predicate compares priority values."""
        assert [r.id for r in filter_by_priority(catalog, "low")] == ["3"]

    def test_search_none_query(self, catalog) -> None:
        """A missing query keeps everything."""
        assert search_products(catalog, None) == catalog


class TestAggregate:
    """Tests for CatalogQueryEngine.aggregate."""

    def test_empty_collection(self, engine) -> None:
        """Empty input yields zeroed statistics."""
        stats = engine.aggregate([])
        assert stats == CatalogStats(
            total=0, active=0, inactive=0, by_category={}, total_value=0
        )

    def test_total_value_scenario(self, engine, records) -> None:
        """Total value is the sum of price times stock."""
        assert engine.aggregate(records).total_value == 35

    def test_counts(self, engine, catalog) -> None:
        """Active and inactive counts add up to the total."""
        stats = engine.aggregate(catalog)
        assert stats.total == 6
        assert stats.active == 4
        assert stats.inactive == 2
        assert stats.active + stats.inactive == stats.total

    def test_by_category(self, engine, catalog) -> None:
        """Only present categories appear, counts sum to the total."""
        stats = engine.aggregate(catalog)
        assert stats.by_category == {
            "vegetable": 1,
            "fruit": 2,
            "grain": 1,
            "dairy": 1,
            "tuber": 1,
        }
        assert sum(stats.by_category.values()) == stats.total

    def test_total_value_keeps_fractions(self, engine) -> None:
        """Fractional values are not truncated."""
        stats = engine.aggregate([make_record(price=2.5, stock=3)])
        assert stats.total_value == pytest.approx(7.5)

    def test_stats_to_dict(self, engine, records) -> None:
        """Stats serialize to a plain dictionary."""
        assert engine.aggregate(records).to_dict() == {
            "total": 2,
            "active": 1,
            "inactive": 1,
            "by_category": {"vegetable": 1, "fruit": 1},
            "total_value": 35,
        }


class TestQuery:
    """Tests for CatalogQueryEngine.query."""

    def test_stats_ignore_filters(self, engine, records) -> None:
        """Aggregation covers the unfiltered collection."""
        view = engine.query(records, FilterCriteria(category="dairy"))
        assert view.items == []
        assert view.total == 0
        assert view.stats == engine.aggregate(records)

    def test_default_criteria(self, engine, records) -> None:
        """Missing criteria means no filtering."""
        view = engine.query(records)
        assert view.items == records
        assert view.stats.total == 2
