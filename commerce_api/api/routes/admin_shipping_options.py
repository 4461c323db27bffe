"""Admin Shipping Options - CRUD, with delete guarded against active orders.

Invariants:
    - Every route requires an authenticated admin user (session or API token)
    - Mutations run as exactly one service call inside atomic()
    - DELETE answers {id, object: "shipping-option", deleted: true}; a repeated
      DELETE is a 404 because the row no longer exists
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.api.dependencies import require_user, validated_body
from commerce_api.infrastructure.database import atomic, get_db
from commerce_api.schemas.shipping_option import (
    AdminPostShippingOptionsOptionReq,
    AdminPostShippingOptionsReq,
    ShippingOptionDeleteResponse,
    ShippingOptionListResponse,
    ShippingOptionOut,
    ShippingOptionResponse,
)
from commerce_api.services import ServiceContainer, get_services

router = APIRouter(
    prefix="/admin/shipping-options", tags=["shipping-options"],
    dependencies=[Depends(require_user)],
)


@router.get("", response_model=ShippingOptionListResponse)
async def list_shipping_options(
    region_id: str | None = Query(None),
    is_return: bool | None = Query(None),
    admin_only: bool | None = Query(None),
    offset: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """List shipping options."""
    options, count = await services.shipping_option_service.with_transaction(
        db,
    ).list_and_count(
        region_id=region_id, is_return=is_return, admin_only=admin_only,
        offset=offset, limit=limit,
    )
    return ShippingOptionListResponse(
        shipping_options=[ShippingOptionOut.model_validate(o) for o in options],
        count=count,
    )


@router.get("/{id}", response_model=ShippingOptionResponse)
async def get_shipping_option(
    id: str,
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Retrieve a Shipping Option."""
    option = await services.shipping_option_service.with_transaction(db).retrieve(id)
    return ShippingOptionResponse(shipping_option=ShippingOptionOut.model_validate(option))


@router.post("", response_model=ShippingOptionResponse)
async def create_shipping_option(
    body: AdminPostShippingOptionsReq = Depends(
        validated_body(AdminPostShippingOptionsReq),
    ),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Create a Shipping Option."""
    async with atomic(db):
        option = await services.shipping_option_service.with_transaction(db).create(
            body.model_dump(mode="json", exclude_none=True),
        )
    return ShippingOptionResponse(shipping_option=ShippingOptionOut.model_validate(option))


@router.post("/{id}", response_model=ShippingOptionResponse)
async def update_shipping_option(
    id: str,
    body: AdminPostShippingOptionsOptionReq = Depends(
        validated_body(AdminPostShippingOptionsOptionReq),
    ),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Update a Shipping Option."""
    async with atomic(db):
        option = await services.shipping_option_service.with_transaction(db).update(
            id, body.model_dump(mode="json", exclude_none=True),
        )
    return ShippingOptionResponse(shipping_option=ShippingOptionOut.model_validate(option))


@router.delete("/{id}", response_model=ShippingOptionDeleteResponse)
async def delete_shipping_option(
    id: str,
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Delete a Shipping Option."""
    async with atomic(db):
        await services.shipping_option_service.with_transaction(db).delete(id)
    return ShippingOptionDeleteResponse(id=id)
