"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - Entity ids are prefixed strings ("so_...", "cus_...") except Currency (ISO code)
    - Currency codes are always lowercase
    - All valid states encoded as Enums - no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

import uuid
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ShippingOptionId = NewType("ShippingOptionId", str)
CustomerId = NewType("CustomerId", str)
UserId = NewType("UserId", str)
OrderId = NewType("OrderId", str)
CurrencyCode = NewType("CurrencyCode", str)


class IdPrefix(str, Enum):
    """Entity id prefixes."""
    SHIPPING_OPTION = "so"
    SHIPPING_METHOD = "sm"
    ORDER = "order"
    CUSTOMER = "cus"
    USER = "usr"


def generate_entity_id(prefix: IdPrefix) -> str:
    """New opaque id, e.g. so_3f2a... (32 hex chars after the prefix)."""
    return f"{prefix.value}_{uuid.uuid4().hex}"


def normalize_currency_code(code: str) -> CurrencyCode:
    return CurrencyCode(code.strip().lower())


def normalize_email(email: str) -> str:
    return email.strip().lower()


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states - maps to DB `status` column."""
    PENDING = "pending"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    CANCELED = "canceled"
    REQUIRES_ACTION = "requires_action"


# Orders in these states still depend on their shipping options
ACTIVE_ORDER_STATUSES: frozenset[OrderStatus] = frozenset({
    OrderStatus.PENDING, OrderStatus.REQUIRES_ACTION,
})


class ShippingOptionPriceType(str, Enum):
    """How a shipping option is priced."""
    FLAT_RATE = "flat_rate"
    CALCULATED = "calculated"


class UserRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
    DEVELOPER = "developer"
