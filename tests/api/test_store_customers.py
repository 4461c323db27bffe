"""Store Customers - registration logs the new customer in."""

from sqlalchemy import func, select

from commerce_api.models.customer import Customer


def _registration(**overrides):
    body = {
        "email": "new@example.com",
        "password": "long-enough-password",
        "first_name": "New",
        "last_name": "Customer",
    }
    body.update(overrides)
    return body


async def test_register_creates_account_and_session(client):
    res = await client.post("/store/customers", json=_registration())
    assert res.status_code == 200
    created = res.json()["customer"]
    assert created["id"].startswith("cus_")
    assert created["has_account"] is True

    session = await client.get("/store/auth")
    assert session.status_code == 200
    assert session.json()["customer"]["id"] == created["id"]

    exists = await client.get("/store/auth/new@example.com")
    assert exists.json() == {"exists": True}


async def test_register_duplicate_email_returns_422(client, customer, test_db):
    res = await client.post(
        "/store/customers", json=_registration(email="JANE@example.com"),
    )
    assert res.status_code == 422
    assert res.json()["code"] == "DUPLICATE_ERROR"

    count = await test_db.scalar(
        select(func.count()).select_from(Customer)
        .where(Customer.email == "jane@example.com"),
    )
    assert count == 1


async def test_register_short_password_returns_400(client):
    res = await client.post("/store/customers", json=_registration(password="short"))
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "password"


async def test_register_invalid_email_returns_400(client):
    res = await client.post("/store/customers", json=_registration(email="not-an-email"))
    assert res.status_code == 400


async def test_register_unknown_property_returns_400(client):
    res = await client.post("/store/customers", json=_registration(is_admin=True))
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "is_admin"
