"""SQLite-backed token document store."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from tokencleanup.clients.base import (
    RecordNotFoundError,
    TokenStoreError,
    to_utc_timestamp,
)


class SQLiteTokenStore:
    """Token documents in one table keyed by (collection, id)."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS token_documents (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    expires_at TEXT NOT NULL,
                    data TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS ix_token_documents_expiry
                ON token_documents (collection, expires_at)
                """
            )

    def put_document(
        self,
        *,
        collection: str,
        identifier: str,
        expires_at: datetime,
        data: Dict[str, Any],
    ) -> None:
        if not identifier:
            raise ValueError("Token documents require a non-empty identifier")

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO token_documents (collection, id, expires_at, data)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(collection, id) DO UPDATE SET
                        expires_at = excluded.expires_at,
                        data = excluded.data
                    """,
                    (collection, identifier, to_utc_timestamp(expires_at), json.dumps(data)),
                )
        except sqlite3.Error as exc:
            raise TokenStoreError(f"Failed to store {collection}/{identifier}") from exc

    def get_document(
        self, *, collection: str, identifier: str
    ) -> Optional[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT data FROM token_documents WHERE collection = ? AND id = ?",
                    (collection, identifier),
                ).fetchone()
        except sqlite3.Error as exc:
            raise TokenStoreError(f"Failed to read {collection}/{identifier}") from exc
        if not row:
            return None
        return json.loads(row["data"])

    def delete_document(self, *, collection: str, identifier: str) -> None:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM token_documents WHERE collection = ? AND id = ?",
                    (collection, identifier),
                )
        except sqlite3.Error as exc:
            raise TokenStoreError(f"Failed to delete {collection}/{identifier}") from exc
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"No document {identifier!r} in {collection}")

    def list_expired(
        self, *, collection: str, cutoff: datetime
    ) -> list[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    """
                    SELECT data FROM token_documents
                    WHERE collection = ? AND expires_at <= ?
                    ORDER BY expires_at
                    """,
                    (collection, to_utc_timestamp(cutoff)),
                ).fetchall()
        except sqlite3.Error as exc:
            raise TokenStoreError(f"Failed to query expired {collection}") from exc
        return [json.loads(row["data"]) for row in rows]


__all__ = ["SQLiteTokenStore"]
