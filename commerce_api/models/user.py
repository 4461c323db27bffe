"""User ORM - admin accounts, authenticated by session cookie or API token.

Invariants:
    - email unique, stored lowercase
    - api_token unique when set; NULL disables bearer access for the user
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from commerce_api.core.domain_types import IdPrefix, UserRole, generate_entity_id
from commerce_api.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True,
        default=lambda: generate_entity_id(IdPrefix.USER),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    api_token: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True,
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.MEMBER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
