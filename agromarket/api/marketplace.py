"""Marketplace endpoints.

Items published by farmers, user registration and marketplace statistics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from agromarket.api.deps import domain_http_error, get_marketplace
from agromarket.api.schemas import (
    ErrorResponse,
    ItemCreateRequest,
    ItemSchema,
    MarketplaceStatsSchema,
    UserCreateRequest,
    UserSchema,
)
from agromarket.domain.exceptions import (
    CatalogFullError,
    DuplicateEmailError,
    InvalidEmailError,
    InvalidItemNameError,
    InvalidLocationError,
    ItemNotFoundError,
    RoleMismatchError,
    UserNotFoundError,
)
from agromarket.domain.items import (
    FruitDetails,
    GrainDetails,
    ItemDetails,
    ItemKind,
    MarketItem,
    VegetableDetails,
)
from agromarket.domain.marketplace import MarketplaceSystem
from agromarket.domain.people import FarmerRole, UserAccount

router = APIRouter(prefix="/marketplace", tags=["Marketplace"])

Marketplace = Annotated[MarketplaceSystem, Depends(get_marketplace)]


def _details_for(request: ItemCreateRequest) -> ItemDetails:
    match request.kind:
        case ItemKind.FRUIT:
            return FruitDetails(sweet_level=request.sweet_level, season=request.season)
        case ItemKind.VEGETABLE:
            return VegetableDetails(organic=request.organic, weight=request.weight)
        case ItemKind.GRAIN:
            return GrainDetails(quantity=request.quantity, quality=request.quality)


def _find_or_404(system: MarketplaceSystem, item_id: str) -> MarketItem:
    item = system.find_item(item_id)
    if item is None:
        raise domain_http_error(
            ItemNotFoundError(item_id), status.HTTP_404_NOT_FOUND, "ITEM_NOT_FOUND"
        )
    return item


# ============================================================================
# Items
# ============================================================================


@router.get("/items", response_model=list[ItemSchema])
async def list_items(
    system: Marketplace,
    search: Annotated[str, Query()] = "",
    kind: Annotated[ItemKind | None, Query()] = None,
    active: Annotated[bool | None, Query()] = None,
) -> list[ItemSchema]:
    """List items, optionally searched by name and filtered by kind/status."""
    items = system.search_by_name(search)
    if kind is not None:
        items = [i for i in items if i.kind == kind]
    if active is not None:
        items = [i for i in items if i.active == active]
    return [ItemSchema(**i.info()) for i in items]


@router.post(
    "/items",
    response_model=ItemSchema,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def create_item(request: ItemCreateRequest, system: Marketplace) -> ItemSchema:
    """Publish a new item, optionally on behalf of a farmer.

    Raises:
        HTTPException: If the publisher is unknown or not a farmer, the
            name or location is blank, or the marketplace is full.
    """
    publisher = None
    if request.publisher_id is not None:
        publisher = system.find_user(request.publisher_id)
        if publisher is None:
            raise domain_http_error(
                UserNotFoundError(request.publisher_id),
                status.HTTP_404_NOT_FOUND,
                "USER_NOT_FOUND",
            )
        if not isinstance(publisher.role, FarmerRole):
            raise domain_http_error(
                RoleMismatchError(publisher.id, publisher.role_name, "publish products"),
                status.HTTP_409_CONFLICT,
                "ROLE_MISMATCH",
            )

    try:
        item = MarketItem.create(request.name, request.location, _details_for(request))
        system.add_item(item)
    except (InvalidItemNameError, InvalidLocationError) as e:
        raise domain_http_error(e, 422, "VALIDATION_ERROR")
    except CatalogFullError as e:
        raise domain_http_error(e, status.HTTP_409_CONFLICT, "CATALOG_FULL")

    if publisher is not None:
        publisher.publish_product(item.id)
    return ItemSchema(**item.info())


@router.get(
    "/items/{item_id}",
    response_model=ItemSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(item_id: str, system: Marketplace) -> ItemSchema:
    """Get item details by ID."""
    return ItemSchema(**_find_or_404(system, item_id).info())


@router.delete(
    "/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_item(item_id: str, system: Marketplace) -> Response:
    """Remove an item."""
    try:
        system.remove_item(item_id)
    except ItemNotFoundError as e:
        raise domain_http_error(e, status.HTTP_404_NOT_FOUND, "ITEM_NOT_FOUND")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/items/{item_id}/activate",
    response_model=ItemSchema,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def activate_item(item_id: str, system: Marketplace) -> ItemSchema:
    """List an inactive item."""
    item = _find_or_404(system, item_id)
    if not item.activate():
        raise _state_conflict(item_id, "Item is already active")
    return ItemSchema(**item.info())


@router.post(
    "/items/{item_id}/deactivate",
    response_model=ItemSchema,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def deactivate_item(item_id: str, system: Marketplace) -> ItemSchema:
    """Unlist an active item."""
    item = _find_or_404(system, item_id)
    if not item.deactivate():
        raise _state_conflict(item_id, "Item is already inactive")
    return ItemSchema(**item.info())


def _state_conflict(item_id: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "error_code": "INVALID_STATE",
            "message": message,
            "details": {"item_id": item_id},
        },
    )


@router.get("/stats", response_model=MarketplaceStatsSchema)
async def marketplace_stats(system: Marketplace) -> MarketplaceStatsSchema:
    """Counts over items and users."""
    return MarketplaceStatsSchema.from_stats(system.get_stats())


# ============================================================================
# Users
# ============================================================================


@router.post(
    "/users",
    response_model=UserSchema,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def register_user(request: UserCreateRequest, system: Marketplace) -> UserSchema:
    """Register a farmer or a buyer.

    Raises:
        HTTPException: If the email is malformed or already registered.
    """
    try:
        if request.role == "farmer":
            account = UserAccount.farmer(request.name, request.email, request.farm_name or "")
        else:
            account = UserAccount.buyer(request.name, request.email, request.address or "")
    except InvalidEmailError as e:
        raise domain_http_error(e, 422, "VALIDATION_ERROR")

    try:
        system.add_user(account)
    except DuplicateEmailError as e:
        raise domain_http_error(e, status.HTTP_409_CONFLICT, "EMAIL_TAKEN")
    return UserSchema(**account.info())


@router.get("/users", response_model=list[UserSchema])
async def list_users(
    system: Marketplace,
    email: Annotated[str | None, Query()] = None,
) -> list[UserSchema]:
    """List users, or look one up by email."""
    if email is not None:
        account = system.find_user_by_email(email)
        accounts = [account] if account else []
    else:
        accounts = system.all_users()
    return [UserSchema(**a.info()) for a in accounts]
