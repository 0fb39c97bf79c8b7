"""Expose token store backends."""

from .base import RecordNotFoundError, TokenStore, TokenStoreError
from .dynamodb import DynamoDBTokenStore
from .sqlite_store import SQLiteTokenStore

__all__ = [
    "DynamoDBTokenStore",
    "RecordNotFoundError",
    "SQLiteTokenStore",
    "TokenStore",
    "TokenStoreError",
]
