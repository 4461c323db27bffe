"""Auth Service - credential checks for customers and admin users.

Invariants:
    - Wrong email and wrong password produce the same UnauthorizedError
    - Guest customers (no password) can never authenticate
"""

import logging
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.core.errors import UnauthorizedError
from commerce_api.core.passwords import verify_password
from commerce_api.models.customer import Customer
from commerce_api.models.user import User
from commerce_api.services.base import TransactionBaseService
from commerce_api.services.customer_service import CustomerService
from commerce_api.services.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Wrong email or password"


class AuthService(TransactionBaseService):

    def __init__(self, customer_service: CustomerService, user_service: UserService):
        super().__init__()
        self.customer_service = customer_service
        self.user_service = user_service

    def with_transaction(self, db: AsyncSession) -> Self:
        bound = super().with_transaction(db)
        bound.customer_service = self.customer_service.with_transaction(db)
        bound.user_service = self.user_service.with_transaction(db)
        return bound

    async def authenticate_customer(self, email: str, password: str) -> Customer:
        customer = await self.customer_service.find_by_email(email, has_account=True)
        if customer is None or not verify_password(password, customer.password_hash):
            logger.info("Customer login rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return customer

    async def authenticate_user(self, email: str, password: str) -> User:
        user = await self.user_service.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Admin login rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

    async def authenticate_api_token(self, api_token: str) -> User:
        user = await self.user_service.find_by_api_token(api_token)
        if user is None:
            raise UnauthorizedError()
        return user
