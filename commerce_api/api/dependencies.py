"""API Dependencies - flags, validated request models, and per-route authentication.

Invariants:
    - Feature flags resolved once per process (lru_cache); overridable in tests
    - validated_body/validated_query raise ValidationError (400) with field details,
      never let a gated field through when its flag is off
    - require_customer reads only the signed session cookie: no database access
    - require_user accepts the methods it is built with (session cookie, bearer token)

Design Decisions:
    - Auth attached through APIRouter/route `dependencies=[...]`: FastAPI resolves
      them before the handler's own parameters, so 401 short-circuits everything
    - Signed cookie (Starlette SessionMiddleware) as the session store: stateless,
      tampered cookies are dropped by the middleware
"""

import json
import os
from collections.abc import Awaitable, Callable
from enum import Enum
from functools import lru_cache
from typing import TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.config import get_settings
from commerce_api.core.errors import (
    FieldError, NotFoundError, UnauthorizedError, ValidationError,
)
from commerce_api.core.feature_flags import FeatureFlagRouter, load_feature_flags
from commerce_api.core.validation import (
    GatedFieldPolicy, ValidationResult, validate_body,
)
from commerce_api.infrastructure.database import get_db
from commerce_api.models.user import User
from commerce_api.services import ServiceContainer, get_services

ModelT = TypeVar("ModelT", bound=BaseModel)

CUSTOMER_SESSION_KEY = "customer_id"
USER_SESSION_KEY = "user_id"


# ─── Configuration ──────────────────────────────────────────────

@lru_cache
def get_feature_flags() -> FeatureFlagRouter:
    return load_feature_flags(get_settings().feature_flags, os.environ)


def get_gated_field_policy() -> GatedFieldPolicy:
    return get_settings().feature_flag_policy


# ─── Request validation ─────────────────────────────────────────

def _unwrap(result: ValidationResult[ModelT]) -> ModelT:
    if not result.ok:
        raise ValidationError("Invalid request data", errors=result.errors)
    return result.payload


async def _read_json(request: Request) -> object:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError(
            "Request body is not valid JSON",
            errors=[FieldError("body", "invalid JSON", "json_invalid")],
        )


def validated_body(model_cls: type[ModelT]) -> Callable[..., Awaitable[ModelT]]:
    """Dependency: JSON body validated against `model_cls` with flag gating."""

    async def dependency(
        request: Request,
        flags: FeatureFlagRouter = Depends(get_feature_flags),
        policy: GatedFieldPolicy = Depends(get_gated_field_policy),
    ) -> ModelT:
        body = await _read_json(request)
        return _unwrap(validate_body(model_cls, body, flags, policy))

    return dependency


def validated_query(model_cls: type[ModelT]) -> Callable[..., Awaitable[ModelT]]:
    """Dependency: query string validated against `model_cls` with flag gating."""

    async def dependency(
        request: Request,
        flags: FeatureFlagRouter = Depends(get_feature_flags),
        policy: GatedFieldPolicy = Depends(get_gated_field_policy),
    ) -> ModelT:
        query = dict(request.query_params)
        return _unwrap(validate_body(model_cls, query, flags, policy))

    return dependency


# ─── Authentication ─────────────────────────────────────────────

class AuthMethod(str, Enum):
    SESSION = "session"
    BEARER = "bearer"


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_customer(request: Request) -> str:
    """Customer id from the session cookie, or 401."""
    customer_id = request.session.get(CUSTOMER_SESSION_KEY)
    if not customer_id:
        raise UnauthorizedError()
    return customer_id


def require_user_via(*methods: AuthMethod) -> Callable[..., Awaitable[User]]:
    """Build an admin-auth dependency accepting the given methods, in order."""

    async def dependency(
        request: Request,
        db: AsyncSession = Depends(get_db),
        services: ServiceContainer = Depends(get_services),
    ) -> User:
        if AuthMethod.SESSION in methods:
            user_id = request.session.get(USER_SESSION_KEY)
            if user_id:
                users = services.user_service.with_transaction(db)
                try:
                    user = await users.retrieve(user_id)
                except NotFoundError:
                    # user deleted since login
                    request.session.pop(USER_SESSION_KEY, None)
                else:
                    request.state.user = user
                    return user

        if AuthMethod.BEARER in methods:
            token = bearer_token(request)
            if token:
                auth = services.auth_service.with_transaction(db)
                user = await auth.authenticate_api_token(token)
                request.state.user = user
                return user

        raise UnauthorizedError()

    return dependency


require_user = require_user_via(AuthMethod.SESSION, AuthMethod.BEARER)
