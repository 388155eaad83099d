"""
Validation of untyped token-creation payloads.

The request body arrives as whatever ``json.loads`` produced. These helpers
check it field by field and hand back a typed request or the first reason it
was rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Union

from token_api.core.errors import ValidationError

BODY_NOT_OBJECT = "Body must be an object"
INVALID_USER_ID = "`userId` must be a non-empty string"
INVALID_SCOPES = "`scopes` must be a non-empty array of strings"
INVALID_EXPIRY = "`expiresInMinutes` must be a positive integer"

# Longer durations cannot be represented as a datetime when issued after 1970.
MAX_EXPIRES_IN_MINUTES = (datetime.max - datetime(1970, 1, 1)) // timedelta(minutes=1)


@dataclass(frozen=True, slots=True)
class CreateTokenRequest:
    """A well-formed token creation request."""

    user_id: str
    scopes: tuple[str, ...]
    expires_in_minutes: int


@dataclass(frozen=True, slots=True)
class InvalidRequest:
    """Rejection carrying the caller-facing message."""

    message: str


ValidationResult = Union[CreateTokenRequest, InvalidRequest]


def _coerce_positive_int(value: Any) -> int | None:
    # bool is an int subclass but JSON true/false is not a number.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 < value <= MAX_EXPIRES_IN_MINUTES else None
    if isinstance(value, float) and value.is_integer():
        return _coerce_positive_int(int(value))
    return None


def validate_create_token_request(body: Any) -> ValidationResult:
    """Check ``body`` against the creation contract; first failure wins."""
    # JSON arrays are deliberately treated as non-objects.
    if not isinstance(body, Mapping):
        return InvalidRequest(BODY_NOT_OBJECT)

    user_id = body.get("userId")
    if not isinstance(user_id, str) or not user_id.strip():
        return InvalidRequest(INVALID_USER_ID)

    scopes = body.get("scopes")
    if (
        not isinstance(scopes, (list, tuple))
        or not scopes
        or not all(isinstance(scope, str) for scope in scopes)
    ):
        return InvalidRequest(INVALID_SCOPES)

    expires_in_minutes = _coerce_positive_int(body.get("expiresInMinutes"))
    if expires_in_minutes is None:
        return InvalidRequest(INVALID_EXPIRY)

    return CreateTokenRequest(
        user_id=user_id.strip(),
        scopes=tuple(scopes),
        expires_in_minutes=expires_in_minutes,
    )


def parse_create_token_request(body: Any) -> CreateTokenRequest:
    """Like ``validate_create_token_request`` but raises ``ValidationError``."""
    result = validate_create_token_request(body)
    if isinstance(result, InvalidRequest):
        raise ValidationError(result.message)
    return result


__all__ = [
    "BODY_NOT_OBJECT",
    "CreateTokenRequest",
    "INVALID_EXPIRY",
    "INVALID_SCOPES",
    "INVALID_USER_ID",
    "InvalidRequest",
    "MAX_EXPIRES_IN_MINUTES",
    "ValidationResult",
    "parse_create_token_request",
    "validate_create_token_request",
]
