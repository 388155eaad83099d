"""Expiry arithmetic for issued tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from token_api.core.errors import ValidationError
from token_api.services.validation import INVALID_EXPIRY


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_expires_at(now: datetime, expires_in_minutes: int) -> datetime:
    """Return ``now`` shifted forward by a whole number of minutes.

    Raises ``ValidationError`` when the result falls past ``datetime.max``.
    """
    try:
        return now + timedelta(minutes=expires_in_minutes)
    except OverflowError as exc:
        raise ValidationError(INVALID_EXPIRY) from exc


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """Return True once ``now`` has reached ``expires_at``.

    A token whose expiry equals the current instant is already expired.
    """
    current = _as_utc(now) if now is not None else utc_now()
    return _as_utc(expires_at) <= current


__all__ = ["compute_expires_at", "is_expired", "utc_now"]
