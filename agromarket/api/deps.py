"""Request dependencies.

The catalog store and marketplace live on `app.state`; routes receive them
through these providers.
"""

from fastapi import HTTPException, Request

from agromarket.catalog.query import CatalogQueryEngine
from agromarket.catalog.store import CatalogStore
from agromarket.domain.exceptions import DomainError
from agromarket.domain.marketplace import MarketplaceSystem


def get_catalog_store(request: Request) -> CatalogStore:
    """Get catalog store dependency."""
    return request.app.state.catalog_store


def get_query_engine(request: Request) -> CatalogQueryEngine:
    """Get query engine dependency."""
    return request.app.state.query_engine


def get_marketplace(request: Request) -> MarketplaceSystem:
    """Get marketplace system dependency."""
    return request.app.state.marketplace


def domain_http_error(
    exc: DomainError,
    status_code: int,
    error_code: str,
) -> HTTPException:
    """Wrap a domain error in an HTTPException with the error envelope.

    Args:
        exc: Domain error raised by the store or marketplace.
        status_code: HTTP status to respond with.
        error_code: Machine-readable error code.

    Returns:
        HTTPException ready to raise.
    """
    return HTTPException(
        status_code=status_code,
        detail={
            "error_code": error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )

