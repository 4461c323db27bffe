"""Domain Types - id generation and normalization helpers."""

from commerce_api.core.domain_types import (
    ACTIVE_ORDER_STATUSES,
    IdPrefix,
    OrderStatus,
    generate_entity_id,
    normalize_currency_code,
    normalize_email,
)


def test_generated_id_has_prefix():
    assert generate_entity_id(IdPrefix.SHIPPING_OPTION).startswith("so_")


def test_generated_ids_are_unique():
    assert generate_entity_id(IdPrefix.CUSTOMER) != generate_entity_id(IdPrefix.CUSTOMER)


def test_currency_code_lowercased():
    assert normalize_currency_code(" USD ") == "usd"


def test_email_lowercased():
    assert normalize_email(" Jane@Example.COM") == "jane@example.com"


def test_active_order_statuses():
    assert OrderStatus.PENDING in ACTIVE_ORDER_STATUSES
    assert OrderStatus.REQUIRES_ACTION in ACTIVE_ORDER_STATUSES
    assert OrderStatus.COMPLETED not in ACTIVE_ORDER_STATUSES
