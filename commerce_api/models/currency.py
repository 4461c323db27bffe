"""Currency ORM - ISO currencies seeded by migration, updated through the admin API.

Invariants:
    - code is the primary key, always lowercase
    - Rows are never created or deleted by the API (seeded in alembic 002)

Design Decisions:
    - Natural key over surrogate id: every reference (orders, regions) uses the code
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from commerce_api.db.base import Base


class Currency(Base):
    """Currency with tax-inclusive pricing toggle."""
    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    symbol_native: Mapped[str] = mapped_column(String(10), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    includes_tax: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
