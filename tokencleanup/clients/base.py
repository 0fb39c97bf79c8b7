"""Shared contract and errors for token store backends."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol


class TokenStoreError(Exception):
    """Raised when a token store backend cannot complete an operation."""


class RecordNotFoundError(TokenStoreError):
    """Raised when deleting a document that does not exist."""


class TokenStore(Protocol):
    """Operations every token store backend provides."""

    def put_document(
        self,
        *,
        collection: str,
        identifier: str,
        expires_at: datetime,
        data: Dict[str, Any],
    ) -> None:
        ...

    def get_document(
        self, *, collection: str, identifier: str
    ) -> Optional[Dict[str, Any]]:
        ...

    def delete_document(self, *, collection: str, identifier: str) -> None:
        ...

    def list_expired(
        self, *, collection: str, cutoff: datetime
    ) -> list[Dict[str, Any]]:
        ...


def to_utc_timestamp(value: datetime) -> str:
    """Render a datetime as a sortable UTC ISO-8601 string.

    Naive values are assumed to already be UTC. Microseconds are always
    included so lexical order matches chronological order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


__all__ = [
    "RecordNotFoundError",
    "TokenStore",
    "TokenStoreError",
    "to_utc_timestamp",
]
