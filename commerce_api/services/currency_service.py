"""Currency Service - lookup, listing and updates for seeded currencies.

Invariants:
    - Codes are normalized to lowercase before every lookup
    - update() only touches attributes present in the payload
"""

import logging

from sqlalchemy import func, select

from commerce_api.core.domain_types import normalize_currency_code
from commerce_api.core.errors import NotFoundError
from commerce_api.models.currency import Currency
from commerce_api.services.base import TransactionBaseService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"includes_tax"})


class CurrencyService(TransactionBaseService):

    async def retrieve_by_code(self, code: str) -> Currency:
        normalized = normalize_currency_code(code)
        result = await self.db.execute(
            select(Currency).where(Currency.code == normalized),
        )
        currency = result.scalar_one_or_none()
        if currency is None:
            raise NotFoundError("Currency", normalized, key="code")
        return currency

    async def list_and_count(
        self,
        code: str | None = None,
        includes_tax: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Currency], int]:
        query = select(Currency)
        if code:
            query = query.where(Currency.code == normalize_currency_code(code))
        if includes_tax is not None:
            query = query.where(Currency.includes_tax.is_(includes_tax))

        count = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self.db.execute(
            query.order_by(Currency.code).offset(offset).limit(limit),
        )
        return list(result.scalars().all()), count or 0

    async def update(self, code: str, data: dict) -> Currency:
        """Apply `data` to the currency identified by `code`."""
        currency = await self.retrieve_by_code(code)
        for key, value in data.items():
            if key in UPDATABLE_FIELDS:
                setattr(currency, key, value)
        await self.db.flush()
        logger.info(
            "Currency %s updated", currency.code,
            extra={"entity_id": currency.code},
        )
        return currency
