"""Root conftest - shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Settings never point at a real database or real secrets

Design Decisions:
    - SQLite in-memory with StaticPool: one connection shared by fixtures and the
      app under test, so seeded rows are visible to requests
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("COOKIE_SECRET", "test-cookie-secret")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from commerce_api.db.base import Base  # noqa: E402
import commerce_api.models  # noqa: E402,F401
from commerce_api.models.currency import Currency  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_currencies(test_db):
    """usd and eur, both tax-exclusive."""
    currencies = [
        Currency(code="usd", symbol="$", symbol_native="$", name="US Dollar"),
        Currency(code="eur", symbol="€", symbol_native="€", name="Euro"),
    ]
    test_db.add_all(currencies)
    await test_db.commit()
    return currencies
