"""Admin Shipping Options - CRUD and the deletion contract.

Tests cover:
    - DELETE existing unreferenced option -> exactly {id, object, deleted}
    - DELETE unknown id -> 404; repeated DELETE -> 404
    - DELETE option used by an active order -> 409, option kept
    - create/update/retrieve/list round trip, flat_rate amount rule
    - includes_tax gated on create
"""

import pytest
from sqlalchemy import select

from commerce_api.core.domain_types import OrderStatus
from commerce_api.core.feature_flags import TAX_INCLUSIVE_PRICING
from commerce_api.models.order import Order, ShippingMethod
from commerce_api.models.shipping_option import ShippingOption


def _create_body(**overrides):
    body = {
        "name": "Standard",
        "region_id": "reg_eu",
        "provider_id": "manual",
        "data": {"id": "manual-fulfillment"},
        "price_type": "flat_rate",
        "amount": 1000,
    }
    body.update(overrides)
    return body


@pytest.fixture
async def option(test_db):
    created = ShippingOption(
        name="Standard", region_id="reg_eu", provider_id="manual",
        price_type="flat_rate", amount=1000, data={},
    )
    test_db.add(created)
    await test_db.commit()
    return created


async def _option_exists(test_db, option_id) -> bool:
    result = await test_db.execute(
        select(ShippingOption.id).where(ShippingOption.id == option_id),
    )
    return result.scalar_one_or_none() is not None


# ─── DELETE ─────────────────────────────────────────────────────

async def test_delete_returns_acknowledgment(client, admin_headers, option, test_db):
    res = await client.delete(
        f"/admin/shipping-options/{option.id}", headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json() == {
        "id": option.id, "object": "shipping-option", "deleted": True,
    }
    assert not await _option_exists(test_db, option.id)


async def test_delete_unknown_returns_404(client, admin_headers):
    res = await client.delete("/admin/shipping-options/so_missing", headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["code"] == "NOT_FOUND"


async def test_repeated_delete_returns_404(client, admin_headers, option):
    first = await client.delete(
        f"/admin/shipping-options/{option.id}", headers=admin_headers,
    )
    second = await client.delete(
        f"/admin/shipping-options/{option.id}", headers=admin_headers,
    )
    assert first.status_code == 200
    assert second.status_code == 404


async def test_delete_referenced_by_active_order_returns_409(
    client, admin_headers, option, test_db, seed_currencies,
):
    order = Order(email="buyer@example.com", currency_code="usd", status=OrderStatus.PENDING.value)
    test_db.add(order)
    await test_db.flush()
    test_db.add(ShippingMethod(shipping_option_id=option.id, order_id=order.id, price=1000))
    await test_db.commit()

    res = await client.delete(
        f"/admin/shipping-options/{option.id}", headers=admin_headers,
    )

    assert res.status_code == 409
    assert res.json()["code"] == "CONFLICT"
    assert await _option_exists(test_db, option.id)


async def test_delete_requires_authentication(client, option, test_db):
    res = await client.delete(f"/admin/shipping-options/{option.id}")
    assert res.status_code == 401
    assert await _option_exists(test_db, option.id)


async def test_delete_rejects_invalid_token(client, option):
    res = await client.delete(
        f"/admin/shipping-options/{option.id}",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert res.status_code == 401


# ─── Create / update / read ─────────────────────────────────────

async def test_create_shipping_option(client, admin_headers):
    res = await client.post(
        "/admin/shipping-options",
        json=_create_body(metadata={"carrier": "ups"}),
        headers=admin_headers,
    )
    assert res.status_code == 200
    option = res.json()["shipping_option"]
    assert option["id"].startswith("so_")
    assert option["price_type"] == "flat_rate"
    assert option["amount"] == 1000
    assert option["metadata"] == {"carrier": "ups"}


async def test_create_flat_rate_without_amount_returns_400(client, admin_headers):
    body = _create_body()
    body.pop("amount")
    res = await client.post("/admin/shipping-options", json=body, headers=admin_headers)
    assert res.status_code == 400


async def test_create_with_includes_tax_when_flag_enabled(client, admin_headers):
    res = await client.post(
        "/admin/shipping-options",
        json=_create_body(includes_tax=True),
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["shipping_option"]["includes_tax"] is True


async def test_create_with_includes_tax_when_flag_disabled_returns_400(
    client, admin_headers, api_config,
):
    api_config.flags[TAX_INCLUSIVE_PRICING.key] = False
    res = await client.post(
        "/admin/shipping-options",
        json=_create_body(includes_tax=True),
        headers=admin_headers,
    )
    assert res.status_code == 400


async def test_update_shipping_option(client, admin_headers, option):
    res = await client.post(
        f"/admin/shipping-options/{option.id}",
        json={"name": "Express", "amount": 2500},
        headers=admin_headers,
    )
    assert res.status_code == 200
    updated = res.json()["shipping_option"]
    assert updated["name"] == "Express"
    assert updated["amount"] == 2500
    assert updated["region_id"] == "reg_eu"


async def test_update_unknown_returns_404(client, admin_headers):
    res = await client.post(
        "/admin/shipping-options/so_missing", json={"name": "X"}, headers=admin_headers,
    )
    assert res.status_code == 404


async def test_get_shipping_option(client, admin_headers, option):
    res = await client.get(f"/admin/shipping-options/{option.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["shipping_option"]["id"] == option.id


async def test_list_shipping_options(client, admin_headers, option):
    res = await client.get(
        "/admin/shipping-options", params={"region_id": "reg_eu"}, headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["count"] == 1
    assert res.json()["shipping_options"][0]["id"] == option.id


async def test_list_rejects_invalid_limit(client, admin_headers):
    res = await client.get(
        "/admin/shipping-options", params={"limit": 0}, headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_DATA"


async def test_update_calculated_option_keeps_amount_null(client, admin_headers, test_db):
    calculated = ShippingOption(
        name="Carrier rates", region_id="reg_eu", provider_id="manual",
        price_type="calculated", amount=None, data={},
    )
    test_db.add(calculated)
    await test_db.commit()

    res = await client.post(
        f"/admin/shipping-options/{calculated.id}",
        json={"amount": 500, "name": "Carrier rates (live)"},
        headers=admin_headers,
    )

    assert res.status_code == 200
    updated = res.json()["shipping_option"]
    assert updated["price_type"] == "calculated"
    assert updated["amount"] is None
    assert updated["name"] == "Carrier rates (live)"

    stored = await test_db.execute(
        select(ShippingOption.amount).where(ShippingOption.id == calculated.id),
    )
    assert stored.scalar_one() is None
