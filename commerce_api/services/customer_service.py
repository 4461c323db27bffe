"""Customer Service - storefront customer lookup and registration.

Invariants:
    - Emails are normalized (lowercase, stripped) before every query
    - exists_registered only matches customers with an account
    - create() upgrades an existing guest record instead of inserting a duplicate
    - A duplicate account is always DuplicateError, even when the unique
      constraint catches a concurrent registration
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from commerce_api.core.domain_types import normalize_email
from commerce_api.core.errors import DuplicateError, NotFoundError
from commerce_api.core.passwords import hash_password
from commerce_api.models.customer import Customer
from commerce_api.services.base import TransactionBaseService

logger = logging.getLogger(__name__)

DUPLICATE_ACCOUNT = (
    "A customer with the given email already has an account. Log in instead"
)


class CustomerService(TransactionBaseService):

    async def retrieve(self, customer_id: str) -> Customer:
        customer = await self.db.get(Customer, customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    async def find_by_email(
        self, email: str, has_account: bool,
    ) -> Customer | None:
        result = await self.db.execute(
            select(Customer)
            .where(Customer.email == normalize_email(email))
            .where(Customer.has_account.is_(has_account)),
        )
        return result.scalar_one_or_none()

    async def exists_registered(self, email: str) -> bool:
        return await self.find_by_email(email, has_account=True) is not None

    async def create(self, data: dict) -> Customer:
        """Register an account; a guest record with the same email is upgraded."""
        email = normalize_email(data["email"])
        if await self.exists_registered(email):
            raise DuplicateError(DUPLICATE_ACCOUNT)

        customer = await self.find_by_email(email, has_account=False)
        if customer is None:
            customer = Customer(email=email)
            self.db.add(customer)
        customer.first_name = data.get("first_name")
        customer.last_name = data.get("last_name")
        customer.phone = data.get("phone")
        customer.password_hash = hash_password(data["password"])
        customer.has_account = True
        try:
            await self.db.flush()
        except IntegrityError:
            # concurrent registration won the unique (email, has_account) race
            raise DuplicateError(DUPLICATE_ACCOUNT)
        logger.info(
            "Customer %s registered", customer.id, extra={"entity_id": customer.id},
        )
        return customer
