"""Auth & Customer Schemas - login bodies, registration, and public account views.

Invariants:
    - Emails are validated (EmailStr) and lowercased before reaching services
    - password_hash and api_token never appear in a response model
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from commerce_api.core.domain_types import normalize_email
from commerce_api.schemas.common import RequestModel, ResponseModel, metadata_field


class _EmailPasswordReq(RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class StorePostAuthReq(_EmailPasswordReq):
    pass


class AdminPostAuthReq(_EmailPasswordReq):
    pass


class StorePostCustomersReq(_EmailPasswordReq):
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=50)


class CustomerOut(ResponseModel):
    id: str
    email: str
    first_name: str | None
    last_name: str | None
    phone: str | None
    has_account: bool
    metadata: dict[str, Any] | None = metadata_field()
    created_at: datetime
    updated_at: datetime


class CustomerResponse(BaseModel):
    customer: CustomerOut


class CustomerExistsResponse(BaseModel):
    exists: bool


class UserOut(ResponseModel):
    id: str
    email: str
    first_name: str | None
    last_name: str | None
    role: str
    created_at: datetime


class UserResponse(BaseModel):
    user: UserOut
