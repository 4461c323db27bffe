"""Error Hierarchy - status codes and the flat response envelope.

Tests cover:
    - each error kind maps to its HTTP status and code
    - ValidationError lists field details; others omit `details`
    - NotFoundError message names entity and key
"""

import pytest

from commerce_api.core.errors import (
    ConflictError,
    DatabaseError,
    DuplicateError,
    FieldError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.parametrize("error,status,code", [
    (ValidationError("bad"), 400, "INVALID_DATA"),
    (UnauthorizedError(), 401, "UNAUTHORIZED"),
    (NotFoundError("Currency", "xyz", key="code"), 404, "NOT_FOUND"),
    (ConflictError("in use"), 409, "CONFLICT"),
    (DuplicateError("exists"), 422, "DUPLICATE_ERROR"),
    (InternalError(), 500, "INTERNAL_ERROR"),
    (DatabaseError("boom", "commit"), 500, "DATABASE_ERROR"),
])
def test_status_and_code(error, status, code):
    assert error.http_status == status
    assert error.to_response()["code"] == code


def test_envelope_shape():
    body = ConflictError("in use").to_response()
    assert set(body) == {"code", "type", "message", "severity", "timestamp"}
    assert body["type"] == "conflict"
    assert body["message"] == "in use"


def test_validation_error_includes_details():
    error = ValidationError(
        "Invalid request data",
        errors=[FieldError("includes_tax", "Input should be a valid boolean", "bool_type")],
    )
    assert error.to_response()["details"] == [{
        "field": "includes_tax",
        "message": "Input should be a valid boolean",
        "type": "bool_type",
    }]


def test_validation_error_without_details_omits_key():
    assert "details" not in ValidationError("bad").to_response()


def test_not_found_message_names_entity():
    error = NotFoundError("Shipping Option", "so_123")
    assert error.message == "Shipping Option with id so_123 was not found"
    assert error.context.entity_id == "so_123"


def test_database_error_is_internal():
    assert isinstance(DatabaseError("boom", "commit"), InternalError)
