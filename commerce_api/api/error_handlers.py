"""Error Handlers - the single place where exceptions become HTTP responses.

Invariants:
    - CommerceError -> its http_status + to_response() envelope
    - RequestValidationError (path/query coercion) -> 400 INVALID_DATA with field details
    - Starlette HTTPException (unknown route, wrong method) -> same envelope, own status
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, framework HTTP, catch-all
    - Client errors logged at WARNING, server errors at ERROR
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from commerce_api.core.errors import (
    CommerceError, ErrorCategory, ErrorSeverity, InternalError, ValidationError,
)
from commerce_api.core.validation import field_errors_from_pydantic

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", ErrorCategory.UNAUTHORIZED),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", ErrorCategory.NOT_FOUND),
    status.HTTP_409_CONFLICT: ("CONFLICT", ErrorCategory.CONFLICT),
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_commerce_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_commerce_error_handler(app: FastAPI) -> None:

    @app.exception_handler(CommerceError)
    async def commerce_error_handler(request: Request, exc: CommerceError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle FastAPI parameter validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        error = ValidationError(
            "Invalid request data", errors=field_errors_from_pydantic(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=error.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Wrap framework-level HTTP errors in the standard envelope."""
        code, category = _HTTP_CODES.get(
            exc.status_code, ("HTTP_ERROR", ErrorCategory.INVALID_DATA),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "code": code,
                "type": category.value,
                "message": str(exc.detail),
                "severity": ErrorSeverity.ERROR.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
        )
