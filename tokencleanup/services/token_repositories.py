"""
Async repositories over the token store, one per token category.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import ClassVar, Generic, Optional, Type, TypeVar

from tokencleanup.clients.base import TokenStore
from tokencleanup.core.config import StoreSettings
from tokencleanup.models.tokens import (
    AuthorizationCodeDocument,
    RefreshTokenDocument,
    TokenDocument,
    TokenHandleDocument,
)

TDocument = TypeVar("TDocument", bound=TokenDocument)


class TokenRepository(Generic[TDocument]):
    """Reads, writes and expires documents in a single collection.

    Store calls block, so each one runs on a worker thread.
    """

    collection: ClassVar[str]
    document_type: ClassVar[Type[TokenDocument]]

    def __init__(self, store: TokenStore, settings: StoreSettings) -> None:
        self._store = store
        self._collection = settings.collection_name(self.collection)

    @property
    def collection_name(self) -> str:
        return self._collection

    async def add(self, document: TDocument) -> None:
        await asyncio.to_thread(
            self._store.put_document,
            collection=self._collection,
            identifier=document.id,
            expires_at=document.expires_at,
            data=document.model_dump(mode="json"),
        )

    async def get(self, identifier: str) -> Optional[TDocument]:
        data = await asyncio.to_thread(
            self._store.get_document,
            collection=self._collection,
            identifier=identifier,
        )
        if data is None:
            return None
        return self.document_type.model_validate(data)  # type: ignore[return-value]

    async def get_expired(self, cutoff: datetime) -> list[TDocument]:
        """Return documents whose expiry is at or before ``cutoff``."""
        rows = await asyncio.to_thread(
            self._store.list_expired,
            collection=self._collection,
            cutoff=cutoff,
        )
        return [self.document_type.model_validate(row) for row in rows]  # type: ignore[misc]

    async def remove(self, identifier: str) -> None:
        """Delete by identifier; raises ``RecordNotFoundError`` if absent."""
        await asyncio.to_thread(
            self._store.delete_document,
            collection=self._collection,
            identifier=identifier,
        )


class TokenHandleRepository(TokenRepository[TokenHandleDocument]):
    collection = "token_handles"
    document_type = TokenHandleDocument


class RefreshTokenRepository(TokenRepository[RefreshTokenDocument]):
    collection = "refresh_tokens"
    document_type = RefreshTokenDocument


class AuthorizationCodeRepository(TokenRepository[AuthorizationCodeDocument]):
    collection = "authorization_codes"
    document_type = AuthorizationCodeDocument


__all__ = [
    "AuthorizationCodeRepository",
    "RefreshTokenRepository",
    "TokenHandleRepository",
    "TokenRepository",
]
