"""Error Hierarchy - typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (4xx) are ERROR severity; server errors (5xx) are CRITICAL
    - to_response() produces the flat REST envelope {code, type, message, ...}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CommerceError base: one FastAPI handler catches all
    - Handlers and services raise, never format; api/error_handlers.py is the only
      place an error becomes a response
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories, surfaced as the envelope `type`."""
    INVALID_DATA = "invalid_data"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    DUPLICATE = "duplicate_error"
    DATABASE = "database_error"
    INTERNAL = "unexpected_state"


@dataclass(frozen=True)
class FieldError:
    """One offending request field."""
    field: str
    message: str
    type: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "type": self.type}


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_type: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CommerceError(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standardized REST error envelope."""
        return {
            "code": self.code,
            "type": self.category.value,
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(CommerceError):
    """Request input is malformed or not allowed."""
    def __init__(
        self,
        message: str,
        errors: list[FieldError] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_DATA", ErrorCategory.INVALID_DATA,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors or []

    def to_response(self) -> dict:
        response = super().to_response()
        if self.errors:
            response["details"] = [e.to_dict() for e in self.errors]
        return response


class UnauthorizedError(CommerceError):
    """Credentials are missing or invalid."""
    def __init__(
        self, message: str = "Unauthorized", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.ERROR, context, 401,
        )


class NotFoundError(CommerceError):
    """Requested entity does not exist."""
    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        key: str = "id",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = entity_type
        ctx.entity_id = entity_id
        super().__init__(
            f"{entity_type} with {key} {entity_id} was not found",
            "NOT_FOUND", ErrorCategory.NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(CommerceError):
    """Requested state transition conflicts with current state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DuplicateError(CommerceError):
    """Entity already exists and cannot be created again."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_ERROR", ErrorCategory.DUPLICATE,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(CommerceError):
    """Unexpected failure."""
    def __init__(
        self,
        message: str = "An unexpected error occurred",
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation
