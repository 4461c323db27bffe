"""Admin Auth - cookie-session login, current user, logout.

Invariants:
    - Login stores only the user id in the signed session cookie
    - GET/DELETE accept either the session cookie or an API token
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from commerce_api.api.dependencies import (
    USER_SESSION_KEY, require_user, validated_body,
)
from commerce_api.infrastructure.database import get_db
from commerce_api.models.user import User
from commerce_api.schemas.auth import AdminPostAuthReq, UserOut, UserResponse
from commerce_api.services import ServiceContainer, get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/auth", tags=["auth"])


@router.post("", response_model=UserResponse)
async def create_admin_session(
    request: Request,
    body: AdminPostAuthReq = Depends(validated_body(AdminPostAuthReq)),
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    """Log in an admin user and start a session."""
    user = await services.auth_service.with_transaction(db).authenticate_user(
        body.email, body.password,
    )
    request.session[USER_SESSION_KEY] = user.id
    logger.info("Admin session started", extra={"actor_id": user.id})
    return UserResponse(user=UserOut.model_validate(user))


@router.get("", response_model=UserResponse)
async def get_admin_session(user: User = Depends(require_user)):
    """Return the authenticated admin user."""
    return UserResponse(user=UserOut.model_validate(user))


@router.delete("", dependencies=[Depends(require_user)])
async def delete_admin_session(request: Request):
    """Log out: drop the user from the session."""
    request.session.pop(USER_SESSION_KEY, None)
    return {}
