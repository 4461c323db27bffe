"""Request Validation - flag-gated field policy and pydantic validation as a pure function.

Invariants:
    - validate_body never raises for bad input: it returns ValidationResult
    - Gated fields are decided BEFORE pydantic runs: a disabled field is either
      reported (REJECT) or removed (STRIP), never validated or persisted
    - Flags are passed in explicitly (no global lookup)

Design Decisions:
    - Gate marker lives in Field(json_schema_extra=...): the request model stays the
      single declaration of a schema, gating included
    - Discriminated result (payload xor errors) instead of exceptions: routes decide
      how to surface failures
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from commerce_api.core.errors import FieldError
from commerce_api.core.feature_flags import FeatureFlagRouter

FEATURE_FLAG_KEY = "x-feature-flag"

ModelT = TypeVar("ModelT", bound=BaseModel)


class GatedFieldPolicy(str, Enum):
    """What happens to a gated field whose flag is disabled."""
    REJECT = "reject"
    STRIP = "strip"


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    payload: ModelT | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.payload is not None and not self.errors


def feature_flagged(flag_key: str, default: Any = None, **kwargs: Any) -> Any:
    """Declare a model field that only exists while `flag_key` is enabled."""
    return Field(default, json_schema_extra={FEATURE_FLAG_KEY: flag_key}, **kwargs)


def gated_fields(model_cls: type[BaseModel]) -> dict[str, str]:
    """Map field name -> flag key for every gated field of a model."""
    gated = {}
    for name, info in model_cls.model_fields.items():
        extra = info.json_schema_extra
        if isinstance(extra, dict) and FEATURE_FLAG_KEY in extra:
            gated[info.alias or name] = str(extra[FEATURE_FLAG_KEY])
    return gated


def apply_feature_gates(
    model_cls: type[BaseModel],
    body: dict,
    flags: FeatureFlagRouter,
    policy: GatedFieldPolicy,
) -> tuple[dict, list[FieldError]]:
    """Return (body without disabled fields, errors for REJECT policy)."""
    cleaned = dict(body)
    errors: list[FieldError] = []
    for name, flag_key in gated_fields(model_cls).items():
        if name not in cleaned or flags.is_feature_enabled(flag_key):
            continue
        cleaned.pop(name)
        if policy is GatedFieldPolicy.REJECT:
            errors.append(FieldError(
                field=name,
                message=f"property {name} should not exist",
                type="feature_disabled",
            ))
    return cleaned, errors


def field_errors_from_pydantic(exc: PydanticValidationError) -> list[FieldError]:
    return [
        FieldError(
            field=".".join(str(loc) for loc in e["loc"]) or "body",
            message=e["msg"],
            type=e["type"],
        )
        for e in exc.errors()
    ]


def validate_body(
    model_cls: type[ModelT],
    body: Any,
    flags: FeatureFlagRouter,
    policy: GatedFieldPolicy = GatedFieldPolicy.REJECT,
) -> ValidationResult[ModelT]:
    """Validate a decoded JSON body (or query mapping) against a request model."""
    if not isinstance(body, dict):
        return ValidationResult(errors=[
            FieldError(field="body", message="must be an object", type="dict_type"),
        ])

    cleaned, gate_errors = apply_feature_gates(model_cls, body, flags, policy)
    try:
        payload = model_cls.model_validate(cleaned)
    except PydanticValidationError as exc:
        return ValidationResult(errors=gate_errors + field_errors_from_pydantic(exc))
    if gate_errors:
        return ValidationResult(errors=gate_errors)
    return ValidationResult(payload=payload)
