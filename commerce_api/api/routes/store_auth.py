"""Store Auth - customer session lifecycle and account-existence lookup.

Invariants:
    - GET "" requires a session; without one it fails with 401 before any query
    - GET "/{email}" never errors on unknown emails: {exists: false}
    - DELETE "" always succeeds, session or not
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.api.dependencies import (
    CUSTOMER_SESSION_KEY, require_customer, validated_body,
)
from commerce_api.core.errors import NotFoundError, UnauthorizedError
from commerce_api.infrastructure.database import get_db
from commerce_api.schemas.auth import (
    CustomerExistsResponse, CustomerOut, CustomerResponse, StorePostAuthReq,
)
from commerce_api.services import ServiceContainer, get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/store/auth", tags=["auth"])


@router.get("", response_model=CustomerResponse)
async def get_session(
    request: Request,
    customer_id: str = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Return the customer of the current session."""
    try:
        customer = await services.customer_service.with_transaction(db).retrieve(
            customer_id,
        )
    except NotFoundError:
        request.session.pop(CUSTOMER_SESSION_KEY, None)
        raise UnauthorizedError()
    return CustomerResponse(customer=CustomerOut.model_validate(customer))


@router.get("/{email}", response_model=CustomerExistsResponse)
async def exists(
    email: str,
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Check whether an account is registered under `email`."""
    found = await services.customer_service.with_transaction(db).exists_registered(email)
    return CustomerExistsResponse(exists=found)


@router.post("", response_model=CustomerResponse)
async def create_session(
    request: Request,
    body: StorePostAuthReq = Depends(validated_body(StorePostAuthReq)),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Log in a customer and start a session."""
    customer = await services.auth_service.with_transaction(db).authenticate_customer(
        body.email, body.password,
    )
    request.session[CUSTOMER_SESSION_KEY] = customer.id
    logger.info("Customer session started", extra={"actor_id": customer.id})
    return CustomerResponse(customer=CustomerOut.model_validate(customer))


@router.delete("")
async def delete_session(request: Request):
    """Log out: drop the customer from the session."""
    request.session.pop(CUSTOMER_SESSION_KEY, None)
    return {}
