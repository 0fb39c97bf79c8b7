"""
DynamoDB-backed token document store.

Every collection shares one table: the collection name is the partition key
and the token identifier is the sort key.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from tokencleanup.clients.base import (
    RecordNotFoundError,
    TokenStoreError,
    to_utc_timestamp,
)
from tokencleanup.core.config import StoreSettings


class DynamoDBTokenStore:
    """Token document operations on a DynamoDB table."""

    def __init__(self, settings: StoreSettings, table: Any = None) -> None:
        self._settings = settings
        if table is None:
            resource = boto3.resource("dynamodb", region_name=settings.region_name)
            table = resource.Table(settings.dynamodb_table_name)
        self._table = table

    def put_document(
        self,
        *,
        collection: str,
        identifier: str,
        expires_at: datetime,
        data: Dict[str, Any],
    ) -> None:
        """Upsert a document under ``collection``."""
        item = {
            "pk": collection,
            "sk": identifier,
            "expires_at": to_utc_timestamp(expires_at),
            "data": data,
        }
        try:
            self._table.put_item(Item=item)
        except (BotoCoreError, ClientError) as exc:
            raise TokenStoreError(f"Failed to store {collection}/{identifier}") from exc

    def get_document(
        self, *, collection: str, identifier: str
    ) -> Optional[Dict[str, Any]]:
        """Retrieve a document by its identifier."""
        try:
            response = self._table.get_item(Key={"pk": collection, "sk": identifier})
        except (BotoCoreError, ClientError) as exc:
            raise TokenStoreError(f"Failed to read {collection}/{identifier}") from exc
        item = response.get("Item")
        if not item:
            return None
        return item["data"]

    def delete_document(self, *, collection: str, identifier: str) -> None:
        """Delete a document, failing when it does not exist."""
        try:
            self._table.delete_item(
                Key={"pk": collection, "sk": identifier},
                ConditionExpression="attribute_exists(sk)",
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code == "ConditionalCheckFailedException":
                raise RecordNotFoundError(
                    f"No document {identifier!r} in {collection}"
                ) from exc
            raise TokenStoreError(f"Failed to delete {collection}/{identifier}") from exc
        except BotoCoreError as exc:
            raise TokenStoreError(f"Failed to delete {collection}/{identifier}") from exc

    def list_expired(
        self, *, collection: str, cutoff: datetime
    ) -> list[Dict[str, Any]]:
        """Return every document in ``collection`` expiring at or before ``cutoff``."""
        query_kwargs: Dict[str, Any] = {
            "KeyConditionExpression": Key("pk").eq(collection),
            "FilterExpression": Attr("expires_at").lte(to_utc_timestamp(cutoff)),
        }
        documents: list[Dict[str, Any]] = []
        try:
            while True:
                response = self._table.query(**query_kwargs)
                documents.extend(item["data"] for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_key
        except (BotoCoreError, ClientError) as exc:
            raise TokenStoreError(f"Failed to query expired {collection}") from exc
        return documents


__all__ = ["DynamoDBTokenStore"]
