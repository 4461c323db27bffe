"""Shipping Option Service - CRUD and delete protection against active orders.

Tests cover:
    - create assigns a prefixed id and stores metadata
    - update applies only given fields
    - delete removes an unreferenced option
    - delete refuses while an active order references the option
    - delete detaches methods of completed orders
    - retrieve of unknown id raises NotFoundError
"""

import pytest
from sqlalchemy import select

from commerce_api.core.domain_types import OrderStatus
from commerce_api.core.errors import ConflictError, NotFoundError
from commerce_api.models.order import Order, ShippingMethod
from commerce_api.models.shipping_option import ShippingOption
from commerce_api.services.shipping_option_service import ShippingOptionService


@pytest.fixture
def service(test_db):
    return ShippingOptionService().with_transaction(test_db)


@pytest.fixture
async def option(service, test_db):
    created = await service.create({
        "name": "Standard",
        "region_id": "reg_eu",
        "provider_id": "manual",
        "price_type": "flat_rate",
        "amount": 800,
        "data": {},
        "metadata": {"carrier": "dhl"},
    })
    await test_db.commit()
    return created


async def _attach_order(test_db, option_id: str, status: OrderStatus) -> ShippingMethod:
    order = Order(email="buyer@example.com", currency_code="eur", status=status.value)
    test_db.add(order)
    await test_db.flush()
    method = ShippingMethod(shipping_option_id=option_id, order_id=order.id, price=800)
    test_db.add(method)
    await test_db.commit()
    return method


async def _option_row(test_db, option_id):
    result = await test_db.execute(
        select(ShippingOption).where(ShippingOption.id == option_id),
    )
    return result.scalar_one_or_none()


async def test_create_assigns_prefixed_id(option):
    assert option.id.startswith("so_")
    assert option.metadata_ == {"carrier": "dhl"}
    assert option.admin_only is False


async def test_update_changes_only_given_fields(service, option, test_db):
    updated = await service.update(option.id, {"name": "Express"})
    await test_db.commit()
    assert updated.name == "Express"
    assert updated.amount == 800


async def test_delete_unreferenced_option(service, option, test_db):
    await service.delete(option.id)
    await test_db.commit()
    assert await _option_row(test_db, option.id) is None


async def test_delete_refused_for_active_order(
    service, option, test_db, seed_currencies,
):
    option_id = option.id
    await _attach_order(test_db, option_id, OrderStatus.PENDING)
    with pytest.raises(ConflictError):
        await service.delete(option_id)
    await test_db.rollback()
    assert await _option_row(test_db, option_id) is not None


async def test_delete_refused_for_order_requiring_action(
    service, option, test_db, seed_currencies,
):
    await _attach_order(test_db, option.id, OrderStatus.REQUIRES_ACTION)
    with pytest.raises(ConflictError):
        await service.delete(option.id)


async def test_delete_detaches_completed_order_methods(
    service, option, test_db, seed_currencies,
):
    method = await _attach_order(test_db, option.id, OrderStatus.COMPLETED)
    await service.delete(option.id)
    await test_db.commit()

    result = await test_db.execute(
        select(ShippingMethod)
        .where(ShippingMethod.id == method.id)
        .execution_options(populate_existing=True),
    )
    assert result.scalar_one().shipping_option_id is None
    assert await _option_row(test_db, option.id) is None


async def test_retrieve_unknown_raises_not_found(service):
    with pytest.raises(NotFoundError):
        await service.retrieve("so_missing")


async def test_list_filters_by_region(service, option, test_db):
    await service.create({
        "name": "US Standard", "region_id": "reg_us", "provider_id": "manual",
        "price_type": "calculated", "data": {},
    })
    await test_db.commit()
    options, count = await service.list_and_count(region_id="reg_eu")
    assert count == 1
    assert [o.id for o in options] == [option.id]


async def test_unbound_service_raises():
    with pytest.raises(RuntimeError):
        await ShippingOptionService().retrieve("so_1")
