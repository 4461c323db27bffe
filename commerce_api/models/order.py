"""Order and ShippingMethod ORM - the references that pin shipping options in place.

Invariants:
    - An order is active while status is pending or requires_action
    - ShippingMethod.shipping_option_id is nullable: historical methods survive
      deletion of their option

Design Decisions:
    - Only the columns the API reads are modelled; order management lives elsewhere
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from commerce_api.core.domain_types import IdPrefix, OrderStatus, generate_entity_id
from commerce_api.db.base import Base


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        default=lambda: generate_entity_id(IdPrefix.ORDER),
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("customers.id"), nullable=True,
    )
    currency_code: Mapped[str] = mapped_column(
        String(3), ForeignKey("currencies.code"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    shipping_methods: Mapped[list["ShippingMethod"]] = relationship(
        "ShippingMethod", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
    )


class ShippingMethod(Base):
    """A shipping option as applied to one order."""
    __tablename__ = "shipping_methods"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        default=lambda: generate_entity_id(IdPrefix.SHIPPING_METHOD),
    )
    shipping_option_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("shipping_options.id"), nullable=True, index=True,
    )
    order_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("orders.id", ondelete="CASCADE"), nullable=True,
    )
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    order: Mapped["Order | None"] = relationship(
        "Order", back_populates="shipping_methods",
    )
