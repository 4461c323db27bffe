"""ORM Models - SQLAlchemy declarative models for all commerce entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Entity ids are prefixed strings; Currency is keyed by ISO code

Design Decisions:
    - One file per aggregate for locality (Order and ShippingMethod share order.py)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from commerce_api.models.currency import Currency  # noqa: F401
from commerce_api.models.customer import Customer  # noqa: F401
from commerce_api.models.order import Order, ShippingMethod  # noqa: F401
from commerce_api.models.shipping_option import ShippingOption  # noqa: F401
from commerce_api.models.user import User  # noqa: F401
