"""API test fixtures - FastAPI client over the in-memory DB, with auth helpers.

Invariants:
    - get_db overridden to the test session factory
    - Feature flags and gated-field policy overridden per test through `api_config`
    - admin_user carries an API token; customer has a password-protected account

Design Decisions:
    - api_config is read on every request, so a test can flip a flag between calls
    - lifespan does not run under ASGITransport; overrides replace what it would build
"""

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from commerce_api.api.dependencies import get_feature_flags, get_gated_field_policy
from commerce_api.core.domain_types import UserRole
from commerce_api.core.feature_flags import FeatureFlagRouter, TAX_INCLUSIVE_PRICING
from commerce_api.core.validation import GatedFieldPolicy
from commerce_api.infrastructure.database import get_db
from commerce_api.main import app
from commerce_api.services.customer_service import CustomerService
from commerce_api.services.user_service import UserService

ADMIN_PASSWORD = "admin-password"
CUSTOMER_PASSWORD = "customer-password"


@pytest.fixture
def api_config():
    return SimpleNamespace(
        flags={TAX_INCLUSIVE_PRICING.key: True},
        policy=GatedFieldPolicy.REJECT,
    )


@pytest.fixture
async def client(test_session_factory, api_config):
    """FastAPI test client with DB and configuration dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_feature_flags] = (
        lambda: FeatureFlagRouter(api_config.flags)
    )
    app.dependency_overrides[get_gated_field_policy] = lambda: api_config.policy

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(test_db):
    user = await UserService().with_transaction(test_db).create(
        "admin@example.com", ADMIN_PASSWORD, role=UserRole.ADMIN, with_api_token=True,
    )
    await test_db.commit()
    return user


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {admin_user.api_token}"}


@pytest.fixture
async def customer(test_db):
    created = await CustomerService().with_transaction(test_db).create({
        "email": "jane@example.com",
        "password": CUSTOMER_PASSWORD,
        "first_name": "Jane",
        "last_name": "Doe",
    })
    await test_db.commit()
    return created
