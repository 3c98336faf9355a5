"""Catalog product endpoints.

Provides product CRUD, availability toggling, filtered listing and catalog
statistics.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Response, status

from agromarket.api.deps import domain_http_error, get_catalog_store, get_query_engine
from agromarket.api.schemas import (
    CatalogStatsSchema,
    CategorySchema,
    ClearUnavailableResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductListResponse,
    ProductSchema,
    ProductUpdateRequest,
)
from agromarket.catalog.models import CATEGORY_LABELS
from agromarket.catalog.query import CatalogQueryEngine, FilterCriteria
from agromarket.catalog.store import CatalogStore
from agromarket.domain.exceptions import (
    CatalogFullError,
    ProductNotFoundError,
    ProductValidationError,
)

logger = structlog.get_logger()

router = APIRouter(tags=["Products"])

Store = Annotated[CatalogStore, Depends(get_catalog_store)]
Engine = Annotated[CatalogQueryEngine, Depends(get_query_engine)]


def _not_found(exc: ProductNotFoundError):
    return domain_http_error(exc, status.HTTP_404_NOT_FOUND, "PRODUCT_NOT_FOUND")


def _invalid(exc: ProductValidationError):
    return domain_http_error(exc, 422, "VALIDATION_ERROR")


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    store: Store,
    engine: Engine,
    status_filter: Annotated[str, Query(alias="status")] = "all",
    category: Annotated[str, Query()] = "all",
    priority: Annotated[str, Query()] = "all",
    search: Annotated[str, Query()] = "",
) -> ProductListResponse:
    """List products matching the filters.

    Unknown filter values match nothing. Statistics always cover the
    whole catalog.

    Args:
        status_filter: "all", "active" or "inactive".
        category: "all" or a category value.
        priority: "all" or a priority value.
        search: Text searched in name and description.

    Returns:
        Filtered products with catalog statistics.
    """
    criteria = FilterCriteria(
        status=status_filter,
        category=category,
        priority=priority,
        search=search,
    )
    view = engine.query(store.snapshot(), criteria)

    return ProductListResponse(
        items=[ProductSchema.from_record(r) for r in view.items],
        total=view.total,
        stats=CatalogStatsSchema.from_stats(view.stats),
    )


@router.post(
    "/products",
    response_model=ProductSchema,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_product(request: ProductCreateRequest, store: Store) -> ProductSchema:
    """Create a product.

    Raises:
        HTTPException: If the name is blank or the catalog is full.
    """
    try:
        record = store.create(request.model_dump())
    except ProductValidationError as e:
        raise _invalid(e)
    except CatalogFullError as e:
        logger.warning("Product rejected", reason=e.message)
        raise domain_http_error(e, status.HTTP_409_CONFLICT, "CATALOG_FULL")
    return ProductSchema.from_record(record)


@router.post("/products/clear-unavailable", response_model=ClearUnavailableResponse)
async def clear_unavailable(store: Store) -> ClearUnavailableResponse:
    """Delete every unavailable product."""
    return ClearUnavailableResponse(removed=store.clear_unavailable())


@router.get(
    "/products/{product_id}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(product_id: str, store: Store) -> ProductSchema:
    """Get product details by ID.

    Raises:
        HTTPException: If product not found.
    """
    record = store.get(product_id)
    if record is None:
        raise _not_found(ProductNotFoundError(product_id))
    return ProductSchema.from_record(record)


@router.patch(
    "/products/{product_id}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    store: Store,
) -> ProductSchema:
    """Merge the given fields into a product.

    Raises:
        HTTPException: If product not found or the name is blanked.
    """
    try:
        record = store.update(product_id, request.model_dump(exclude_unset=True))
    except ProductNotFoundError as e:
        raise _not_found(e)
    except ProductValidationError as e:
        raise _invalid(e)
    return ProductSchema.from_record(record)


@router.post(
    "/products/{product_id}/toggle",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
)
async def toggle_product(product_id: str, store: Store) -> ProductSchema:
    """Flip product availability."""
    try:
        record = store.toggle_availability(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)
    return ProductSchema.from_record(record)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(product_id: str, store: Store) -> Response:
    """Delete a product."""
    try:
        store.delete(product_id)
    except ProductNotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=CatalogStatsSchema)
async def get_stats(store: Store, engine: Engine) -> CatalogStatsSchema:
    """Statistics over the whole catalog."""
    return CatalogStatsSchema.from_stats(engine.aggregate(store.snapshot()))


@router.get("/categories", response_model=list[CategorySchema])
async def list_categories(store: Store, engine: Engine) -> list[CategorySchema]:
    """All categories with their labels and product counts."""
    counts = engine.aggregate(store.snapshot()).by_category
    return [
        CategorySchema(value=category, label=label, product_count=counts.get(category.value, 0))
        for category, label in CATEGORY_LABELS.items()
    ]
