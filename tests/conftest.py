"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from agromarket.catalog.models import ProductRecord
from agromarket.catalog.persistence import InMemoryPersistence
from agromarket.catalog.store import CatalogStore
from agromarket.infrastructure.config import Settings
from agromarket.main import create_app
from factories import FakeClock, make_record


@pytest.fixture
def tomato() -> ProductRecord:
    """Active vegetable worth 2 x 10."""
    return make_record(id="tomato")


@pytest.fixture
def mango() -> ProductRecord:
    """Inactive fruit worth 3 x 5."""
    return make_record(
        id="mango",
        name="Mango",
        description="Mango Tommy del Tolima",
        category="fruit",
        priority="medium",
        price=3,
        stock=5,
        active=False,
    )


@pytest.fixture
def records(tomato: ProductRecord, mango: ProductRecord) -> list[ProductRecord]:
    """The two-record scenario collection."""
    return [tomato, mango]


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock."""
    return FakeClock()


@pytest.fixture
def persistence() -> InMemoryPersistence:
    """Empty in-memory persistence."""
    return InMemoryPersistence()


@pytest.fixture
def store(persistence: InMemoryPersistence, clock: FakeClock) -> CatalogStore:
    """Empty catalog store."""
    return CatalogStore(persistence, max_items=10, clock=clock)


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory app with demo marketplace data."""
    return Settings(storage_path=None, seed_demo_data=True, max_items=50, log_level="WARNING")


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create test client with a fresh application."""
    app = create_app(settings, persistence=InMemoryPersistence())
    with TestClient(app) as client:
        yield client
