"""Service layer exports."""

from .auth import ApiKeyGuard
from .expiry import compute_expires_at, is_expired, utc_now
from .tokens import TokenService, generate_secret
from .validation import (
    CreateTokenRequest,
    InvalidRequest,
    parse_create_token_request,
    validate_create_token_request,
)

__all__ = [
    "ApiKeyGuard",
    "CreateTokenRequest",
    "InvalidRequest",
    "TokenService",
    "compute_expires_at",
    "generate_secret",
    "is_expired",
    "parse_create_token_request",
    "utc_now",
    "validate_create_token_request",
]
