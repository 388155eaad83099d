"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from http import HTTPStatus


class TokenApiError(Exception):
    """Base error carrying an HTTP status and a caller-safe message."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class ValidationError(TokenApiError):
    """Malformed caller input. The message is returned to the caller verbatim."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.public_message = message


class AuthError(TokenApiError):
    """Missing or mismatched API key."""

    status_code = HTTPStatus.UNAUTHORIZED
    public_message = "Unauthorized"


class ConfigError(TokenApiError):
    """The service has no API key configured; requests fail closed."""

    public_message = "Server is not configured for API key authentication"


class StorageError(TokenApiError):
    """The persistence layer failed; details stay server-side."""


__all__ = [
    "AuthError",
    "ConfigError",
    "StorageError",
    "TokenApiError",
    "ValidationError",
]
