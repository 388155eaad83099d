"""Issuance and lookup of opaque bearer tokens."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Callable, Protocol, Sequence

from token_api.clients.token_store import TokenRecord
from token_api.services.expiry import compute_expires_at, is_expired, utc_now

logger = logging.getLogger(__name__)

SECRET_BYTES = 32


class TokenStore(Protocol):
    def insert(
        self,
        *,
        user_id: str,
        scopes: Sequence[str],
        created_at: datetime,
        expires_at: datetime,
        secret: str,
    ) -> TokenRecord: ...

    def list_for_user(self, user_id: str) -> list[TokenRecord]: ...


def generate_secret() -> str:
    """Return 256 bits from the OS CSPRNG as 64 lowercase hex characters."""
    return secrets.token_hex(SECRET_BYTES)


class TokenService:
    """Creates token records and lists the ones still active for a user."""

    def __init__(
        self,
        store: TokenStore,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    def issue(
        self,
        *,
        user_id: str,
        scopes: Sequence[str],
        expires_in_minutes: int,
        now: datetime | None = None,
    ) -> TokenRecord:
        created_at = now or self._clock()
        record = self._store.insert(
            user_id=user_id,
            scopes=list(scopes),
            created_at=created_at,
            expires_at=compute_expires_at(created_at, expires_in_minutes),
            secret=generate_secret(),
        )
        logger.info(
            "Issued token %s for user %s expiring at %s",
            record.id,
            record.user_id,
            record.expires_at.isoformat(),
        )
        return record

    def list_active(
        self, *, user_id: str, now: datetime | None = None
    ) -> list[TokenRecord]:
        """Return the user's unexpired tokens, newest first."""
        current = now or self._clock()
        records = self._store.list_for_user(user_id.strip())
        return [record for record in records if not is_expired(record.expires_at, current)]


__all__ = ["SECRET_BYTES", "TokenService", "TokenStore", "generate_secret"]
