"""User Service - admin account lookup by id, email or API token."""

import logging

from sqlalchemy import select

from commerce_api.core.domain_types import UserRole, normalize_email
from commerce_api.core.errors import DuplicateError, NotFoundError
from commerce_api.core.passwords import generate_api_token, hash_password
from commerce_api.models.user import User
from commerce_api.services.base import TransactionBaseService

logger = logging.getLogger(__name__)


class UserService(TransactionBaseService):

    async def retrieve(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def find_by_api_token(self, api_token: str) -> User | None:
        if not api_token:
            return None
        result = await self.db.execute(
            select(User).where(User.api_token == api_token),
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        password: str,
        role: UserRole = UserRole.MEMBER,
        first_name: str | None = None,
        last_name: str | None = None,
        with_api_token: bool = False,
    ) -> User:
        if await self.find_by_email(email):
            raise DuplicateError(f"User with email {normalize_email(email)} already exists")
        user = User(
            email=normalize_email(email),
            password_hash=hash_password(password),
            role=role.value,
            first_name=first_name,
            last_name=last_name,
            api_token=generate_api_token() if with_api_token else None,
        )
        self.db.add(user)
        await self.db.flush()
        logger.info("User %s created", user.id, extra={"entity_id": user.id})
        return user
