try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import re
from datetime import datetime, timedelta, timezone

import pytest

from token_api.clients.token_store import TokenRecord
from token_api.core.errors import StorageError
from token_api.services.tokens import TokenService, generate_secret

SECRET_PATTERN = re.compile(r"^[0-9a-f]{64}$")


class FakeTokenStore:
    def __init__(self) -> None:
        self.records: list[TokenRecord] = []

    def insert(self, *, user_id, scopes, created_at, expires_at, secret) -> TokenRecord:
        record = TokenRecord(
            id=f"tok-{len(self.records) + 1}",
            user_id=user_id,
            scopes=list(scopes),
            created_at=created_at,
            expires_at=expires_at,
            secret=secret,
        )
        self.records.append(record)
        return record

    def list_for_user(self, user_id: str) -> list[TokenRecord]:
        owned = [r for r in self.records if r.user_id == user_id]
        return list(reversed(owned))


class FailingTokenStore:
    def insert(self, **kwargs):
        raise StorageError("database is locked")

    def list_for_user(self, user_id: str):
        raise StorageError("database is locked")


@pytest.fixture()
def store() -> FakeTokenStore:
    return FakeTokenStore()


@pytest.fixture()
def service(store, clock) -> TokenService:
    return TokenService(store, clock=clock)


def test_generate_secret_is_64_lowercase_hex() -> None:
    secrets = {generate_secret() for _ in range(50)}

    assert len(secrets) == 50
    assert all(SECRET_PATTERN.match(secret) for secret in secrets)


@pytest.mark.parametrize("minutes", [1, 30, 60 * 24 * 365])
def test_issue_computes_exact_expiry(service, clock, minutes) -> None:
    record = service.issue(user_id="u1", scopes=["read"], expires_in_minutes=minutes)

    assert record.created_at == clock.now
    assert record.expires_at - record.created_at == timedelta(seconds=60 * minutes)
    assert SECRET_PATTERN.match(record.secret)


def test_issue_accepts_explicit_now(service) -> None:
    now = datetime(2030, 6, 1, 12, tzinfo=timezone.utc)

    record = service.issue(
        user_id="u1", scopes=("a", "b"), expires_in_minutes=5, now=now
    )

    assert record.created_at == now
    assert record.expires_at == now + timedelta(minutes=5)
    assert record.scopes == ["a", "b"]


def test_list_active_drops_expired_tokens(service, clock) -> None:
    short = service.issue(user_id="u1", scopes=["read"], expires_in_minutes=1)
    long = service.issue(user_id="u1", scopes=["read"], expires_in_minutes=10)

    assert [r.id for r in service.list_active(user_id="u1")] == [long.id, short.id]

    clock.advance(minutes=1)
    assert [r.id for r in service.list_active(user_id="u1")] == [long.id]

    clock.advance(minutes=9)
    assert service.list_active(user_id="u1") == []


def test_list_active_trims_user_id(service) -> None:
    record = service.issue(user_id="u1", scopes=["read"], expires_in_minutes=1)

    assert service.list_active(user_id="  u1 ") == [record]


def test_list_active_is_scoped_per_user(service) -> None:
    service.issue(user_id="u1", scopes=["read"], expires_in_minutes=5)

    assert service.list_active(user_id="u2") == []


def test_storage_errors_propagate(clock) -> None:
    service = TokenService(FailingTokenStore(), clock=clock)

    with pytest.raises(StorageError):
        service.issue(user_id="u1", scopes=["read"], expires_in_minutes=1)
    with pytest.raises(StorageError):
        service.list_active(user_id="u1")
