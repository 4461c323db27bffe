"""ShippingOption ORM - a way to ship an order within a region.

Invariants:
    - id is a prefixed string ("so_...")
    - flat_rate options always carry an amount; calculated options store NULL
    - Delete is a hard delete; referencing shipping methods are detached first

Design Decisions:
    - region/profile/provider kept as plain ids: those aggregates live outside this API
    - JSON columns for data/metadata: provider-specific payloads vary per provider
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from commerce_api.core.domain_types import IdPrefix, generate_entity_id
from commerce_api.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ShippingOption(Base):
    """Shipping option offered to customers (or used for returns)."""
    __tablename__ = "shipping_options"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        default=lambda: generate_entity_id(IdPrefix.SHIPPING_OPTION),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    region_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    profile_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    provider_id: Mapped[str] = mapped_column(String(64), nullable=False)
    price_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_return: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin_only: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    includes_tax: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )
