"""Store Customers - account registration; the new customer is logged in."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.api.dependencies import CUSTOMER_SESSION_KEY, validated_body
from commerce_api.infrastructure.database import atomic, get_db
from commerce_api.schemas.auth import CustomerOut, CustomerResponse, StorePostCustomersReq
from commerce_api.services import ServiceContainer, get_services

router = APIRouter(prefix="/store/customers", tags=["customers"])


@router.post("", response_model=CustomerResponse)
async def create_customer(
    request: Request,
    body: StorePostCustomersReq = Depends(validated_body(StorePostCustomersReq)),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Register a customer account."""
    async with atomic(db):
        customer = await services.customer_service.with_transaction(db).create(
            body.model_dump(exclude_none=True),
        )
    request.session[CUSTOMER_SESSION_KEY] = customer.id
    return CustomerResponse(customer=CustomerOut.model_validate(customer))
