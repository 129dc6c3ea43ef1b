"""
Input Validators - Schema validation for inbound request bodies.

Validation is pure: no I/O and no side effects. It runs before any
document store or provider call so a rejected request never reaches
the pipeline.

Only the FIRST violated constraint is reported, worded the way API
clients already expect (e.g. '"message" is required').
"""
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from aptix.core.exceptions import ValidationError
from aptix.models.agent import InteractRequest, MESSAGE_MAX_LENGTH, MESSAGE_MIN_LENGTH


def _field_label(loc: tuple) -> str:
    if not loc:
        return '"value"'
    return '"' + ".".join(str(part) for part in loc) + '"'


def _describe(error: dict) -> str:
    """Translate a single pydantic error into a client-facing message."""
    label = _field_label(error.get("loc", ()))
    kind = error.get("type")

    if kind == "missing":
        return f"{label} is required"
    if kind == "string_type":
        return f"{label} must be a string"
    if kind == "string_too_short":
        if MESSAGE_MIN_LENGTH == 1:
            return f"{label} is not allowed to be empty"
        return f"{label} length must be at least {MESSAGE_MIN_LENGTH} characters long"
    if kind == "string_too_long":
        return f"{label} length must be less than or equal to {MESSAGE_MAX_LENGTH} characters long"
    if kind == "extra_forbidden":
        return f"{label} is not allowed"
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return '"value" must be of type object'
    return f"{label} is invalid"


def validate_interaction(payload: Any) -> InteractRequest:
    """
    Validate a raw interaction body.

    Args:
        payload: Decoded JSON body (any type)

    Returns:
        The validated InteractRequest

    Raises:
        ValidationError: describing the first violated constraint
    """
    try:
        return InteractRequest.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc", ())
        raise ValidationError(_describe(first), field=str(loc[0]) if loc else None) from None
