"""Shipping Option Service - CRUD for shipping options with order-reference protection.

Invariants:
    - delete() refuses (ConflictError) while any active order uses the option
    - Shipping methods of inactive orders are detached in the same transaction,
      then the option row is removed
    - A calculated option keeps amount = None; update() never sets it
    - retrieve() raises NotFoundError; a deleted option is indistinguishable from
      one that never existed
"""

import logging

from sqlalchemy import func, select, update

from commerce_api.core.domain_types import (
    ACTIVE_ORDER_STATUSES, ShippingOptionPriceType,
)
from commerce_api.core.errors import ConflictError, NotFoundError
from commerce_api.models.order import Order, ShippingMethod
from commerce_api.models.shipping_option import ShippingOption
from commerce_api.services.base import TransactionBaseService

logger = logging.getLogger(__name__)

_COLUMN_FOR_FIELD = {"metadata": "metadata_"}


class ShippingOptionService(TransactionBaseService):

    async def retrieve(self, option_id: str) -> ShippingOption:
        option = await self.db.get(ShippingOption, option_id)
        if option is None:
            raise NotFoundError("Shipping Option", option_id)
        return option

    async def list_and_count(
        self,
        region_id: str | None = None,
        is_return: bool | None = None,
        admin_only: bool | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[ShippingOption], int]:
        query = select(ShippingOption)
        if region_id:
            query = query.where(ShippingOption.region_id == region_id)
        if is_return is not None:
            query = query.where(ShippingOption.is_return.is_(is_return))
        if admin_only is not None:
            query = query.where(ShippingOption.admin_only.is_(admin_only))

        count = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self.db.execute(
            query.order_by(ShippingOption.created_at, ShippingOption.id)
            .offset(offset).limit(limit),
        )
        return list(result.scalars().all()), count or 0

    async def create(self, data: dict) -> ShippingOption:
        option = ShippingOption()
        self._apply(option, data)
        self.db.add(option)
        await self.db.flush()
        logger.info(
            "Shipping option %s created", option.id, extra={"entity_id": option.id},
        )
        return option

    async def update(self, option_id: str, data: dict) -> ShippingOption:
        option = await self.retrieve(option_id)
        if option.price_type == ShippingOptionPriceType.CALCULATED.value:
            # calculated options are priced by the provider
            data = {k: v for k, v in data.items() if k != "amount"}
        self._apply(option, data)
        await self.db.flush()
        logger.info(
            "Shipping option %s updated", option.id, extra={"entity_id": option.id},
        )
        return option

    async def delete(self, option_id: str) -> None:
        option = await self.retrieve(option_id)

        active_refs = await self.db.scalar(
            select(func.count(ShippingMethod.id))
            .join(Order, ShippingMethod.order_id == Order.id)
            .where(ShippingMethod.shipping_option_id == option.id)
            .where(Order.status.in_([s.value for s in ACTIVE_ORDER_STATUSES])),
        )
        if active_refs:
            raise ConflictError(
                f"Shipping Option with id {option.id} is used by "
                f"{active_refs} active order(s) and cannot be deleted",
            )

        await self.db.execute(
            update(ShippingMethod)
            .where(ShippingMethod.shipping_option_id == option.id)
            .values(shipping_option_id=None),
        )
        await self.db.delete(option)
        await self.db.flush()
        logger.info(
            "Shipping option %s deleted", option_id, extra={"entity_id": option_id},
        )

    @staticmethod
    def _apply(option: ShippingOption, data: dict) -> None:
        for key, value in data.items():
            setattr(option, _COLUMN_FOR_FIELD.get(key, key), value)
