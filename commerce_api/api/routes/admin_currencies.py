"""Admin Currencies - list and update seeded currencies.

Invariants:
    - Every route requires an authenticated admin user (session or API token)
    - includes_tax (body and filter) only accepted while tax_inclusive_pricing is on
    - The update runs as exactly one service call inside atomic()
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.api.dependencies import require_user, validated_body, validated_query
from commerce_api.infrastructure.database import atomic, get_db
from commerce_api.schemas.currency import (
    AdminGetCurrenciesParams,
    AdminPostCurrenciesCurrencyReq,
    CurrencyListResponse,
    CurrencyOut,
    CurrencyResponse,
)
from commerce_api.services import ServiceContainer, get_services

router = APIRouter(
    prefix="/admin/currencies", tags=["currencies"],
    dependencies=[Depends(require_user)],
)


@router.get("", response_model=CurrencyListResponse)
async def list_currencies(
    params: AdminGetCurrenciesParams = Depends(
        validated_query(AdminGetCurrenciesParams),
    ),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """List currencies, optionally filtered by code and tax inclusion."""
    currencies, count = await services.currency_service.with_transaction(
        db,
    ).list_and_count(
        code=params.code,
        includes_tax=params.includes_tax,
        offset=params.offset,
        limit=params.limit,
    )
    return CurrencyListResponse(
        currencies=[CurrencyOut.model_validate(c) for c in currencies],
        count=count,
        offset=params.offset,
        limit=params.limit,
    )


@router.post("/{code}", response_model=CurrencyResponse)
async def update_currency(
    code: str,
    body: AdminPostCurrenciesCurrencyReq = Depends(
        validated_body(AdminPostCurrenciesCurrencyReq),
    ),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Update a Currency."""
    async with atomic(db):
        currency = await services.currency_service.with_transaction(db).update(
            code, body.model_dump(exclude_none=True),
        )
    return CurrencyResponse(currency=CurrencyOut.model_validate(currency))
