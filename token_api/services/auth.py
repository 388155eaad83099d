"""Shared-secret API key check guarding the token endpoints."""

from __future__ import annotations

import hmac
import logging

from token_api.core.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)


class ApiKeyGuard:
    """Compare the caller's ``x-api-key`` header against the configured key."""

    def __init__(self, *, api_key: str | None) -> None:
        self._api_key = api_key or None

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    def verify(self, provided: str | None) -> None:
        if self._api_key is None:
            logger.error("Rejecting request: no API key is configured.")
            raise ConfigError("API key missing from configuration")
        if not provided or not hmac.compare_digest(
            provided.encode("utf-8"), self._api_key.encode("utf-8")
        ):
            logger.warning("Rejecting request with missing or invalid API key.")
            raise AuthError()


__all__ = ["ApiKeyGuard"]
