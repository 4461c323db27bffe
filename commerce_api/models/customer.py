"""Customer ORM - storefront shoppers, with or without an account.

Invariants:
    - email stored lowercase
    - (email, has_account) unique: one guest record and one account per email
    - password_hash is NULL for guest customers

Design Decisions:
    - Guests and account holders share one table: checkout creates guests,
      registration upgrades the email to an account
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from commerce_api.core.domain_types import IdPrefix, generate_entity_id
from commerce_api.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("email", "has_account", name="uq_customer_email_has_account"),
    )

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        default=lambda: generate_entity_id(IdPrefix.CUSTOMER),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    has_account: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )
