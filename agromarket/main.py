"""AgroMarket API main application module.

Builds the FastAPI application, wires the catalog store, query engine and
marketplace onto application state, and configures middleware and routers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agromarket.api import health_router, marketplace_router, products_router
from agromarket.api.middleware import setup_middleware
from agromarket.catalog.persistence import (
    CatalogPersistence,
    InMemoryPersistence,
    JsonFilePersistence,
)
from agromarket.catalog.query import CatalogQueryEngine
from agromarket.catalog.store import CatalogStore
from agromarket.domain.marketplace import MarketplaceSystem, seed_demo_marketplace
from agromarket.infrastructure.config import Settings, settings as default_settings
from agromarket.infrastructure.logging import configure_logging

logger = structlog.get_logger()


def build_persistence(settings: Settings) -> CatalogPersistence:
    """Pick the persistence adapter from settings.

    Args:
        settings: Application settings.

    Returns:
        JSON file persistence when a storage path is configured,
        in-memory persistence otherwise.
    """
    if settings.storage_path:
        return JsonFilePersistence(settings.storage_path, key=settings.storage_key)
    return InMemoryPersistence()


def create_app(
    settings: Settings | None = None,
    persistence: CatalogPersistence | None = None,
) -> FastAPI:
    """Create the AgroMarket application.

    Args:
        settings: Application settings, defaults to environment settings.
        persistence: Catalog persistence port, defaults to the one
            derived from settings.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Handle application startup and shutdown events."""
        configure_logging(settings.log_level)
        logger.info(
            "Starting AgroMarket API",
            version=settings.api_version,
            storage_path=settings.storage_path,
        )

        app.state.catalog_store = CatalogStore(
            persistence or build_persistence(settings),
            max_items=settings.max_items,
        )
        app.state.query_engine = CatalogQueryEngine()
        marketplace = MarketplaceSystem(
            name=settings.system_name,
            version=settings.api_version,
            max_items=settings.max_items,
        )
        if settings.seed_demo_data:
            seed_demo_marketplace(marketplace)
        app.state.marketplace = marketplace

        logger.info(
            "Catalog ready",
            product_count=len(app.state.catalog_store),
            marketplace_items=len(marketplace.all_items()),
        )

        yield

        logger.info("Shutting down AgroMarket API")

    app = FastAPI(
        title="AgroMarket API",
        description="Catalog manager for direct sales of agricultural products",
        version=settings.api_version,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_middleware(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router)
    app.include_router(marketplace_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run("agromarket.main:app", host="0.0.0.0", port=8000)
