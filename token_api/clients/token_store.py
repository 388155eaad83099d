"""SQLite-backed persistence for issued tokens."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from token_api.core.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenRecord:
    """A persisted token row."""

    id: str
    user_id: str
    scopes: list[str]
    created_at: datetime
    expires_at: datetime
    secret: str


def _ensure_directory(db_path: Path) -> None:
    if db_path.parent and not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)


def _to_storage_timestamp(value: datetime) -> str:
    # Fixed-width UTC text so ORDER BY on the column is chronological.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def encode_scopes(scopes: Sequence[str]) -> str:
    return json.dumps(list(scopes))


def decode_scopes(raw: str | None) -> list[str]:
    """Decode the stored scopes column; corrupt payloads become ``[]``."""
    try:
        scopes = json.loads(raw) if raw else []
    except (TypeError, ValueError):
        logger.warning("Discarding undecodable scopes payload %r", raw)
        return []
    if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
        logger.warning("Discarding malformed scopes payload %r", raw)
        return []
    return scopes


class SQLiteTokenStore:
    """Token table keyed by id and indexed by owning user."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        _ensure_directory(self._db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS tokens (
                        id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        scopes TEXT NOT NULL,
                        created_at TEXT NOT NULL,
                        expires_at TEXT NOT NULL,
                        secret TEXT NOT NULL UNIQUE
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS ix_tokens_user_id ON tokens (user_id)"
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to prepare token schema: {exc}") from exc

    def insert(
        self,
        *,
        user_id: str,
        scopes: Sequence[str],
        created_at: datetime,
        expires_at: datetime,
        secret: str,
    ) -> TokenRecord:
        token_id = uuid4().hex
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO tokens (
                        id,
                        user_id,
                        scopes,
                        created_at,
                        expires_at,
                        secret
                    )
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        token_id,
                        user_id,
                        encode_scopes(scopes),
                        _to_storage_timestamp(created_at),
                        _to_storage_timestamp(expires_at),
                        secret,
                    ),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to insert token for {user_id}: {exc}") from exc
        return TokenRecord(
            id=token_id,
            user_id=user_id,
            scopes=list(scopes),
            created_at=created_at,
            expires_at=expires_at,
            secret=secret,
        )

    def list_for_user(self, user_id: str) -> list[TokenRecord]:
        """Return every token owned by ``user_id``, newest first."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    (
                        "SELECT * FROM tokens WHERE user_id = ? "
                        "ORDER BY created_at DESC, rowid DESC"
                    ),
                    (user_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to list tokens for {user_id}: {exc}") from exc
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: sqlite3.Row) -> TokenRecord:
        return TokenRecord(
            id=row["id"],
            user_id=row["user_id"],
            scopes=decode_scopes(row["scopes"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
            secret=row["secret"],
        )


__all__ = ["SQLiteTokenStore", "TokenRecord", "decode_scopes", "encode_scopes"]
