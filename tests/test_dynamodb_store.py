try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError

from tokencleanup.clients.base import RecordNotFoundError, TokenStoreError
from tokencleanup.clients.dynamodb import DynamoDBTokenStore
from tokencleanup.core.config import StoreSettings

NOW = datetime(2026, 7, 1, 8, 0, tzinfo=timezone.utc)


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeTable:
    def __init__(self) -> None:
        self.items: dict[tuple[str, str], dict] = {}
        self.query_pages: list[dict] = []
        self.query_calls: list[dict] = []
        self.delete_error: ClientError | None = None

    def put_item(self, Item: dict) -> None:
        self.items[(Item["pk"], Item["sk"])] = Item

    def get_item(self, Key: dict) -> dict:
        item = self.items.get((Key["pk"], Key["sk"]))
        return {"Item": item} if item else {}

    def delete_item(self, Key: dict, ConditionExpression: str) -> None:
        assert ConditionExpression == "attribute_exists(sk)"
        if self.delete_error is not None:
            raise self.delete_error
        if (Key["pk"], Key["sk"]) not in self.items:
            raise _client_error("ConditionalCheckFailedException", "DeleteItem")
        del self.items[(Key["pk"], Key["sk"])]

    def query(self, **kwargs) -> dict:
        self.query_calls.append(kwargs)
        return self.query_pages.pop(0)


@pytest.fixture()
def table() -> FakeTable:
    return FakeTable()


@pytest.fixture()
def store(table: FakeTable) -> DynamoDBTokenStore:
    settings = StoreSettings(backend="dynamodb", dynamodb_table_name="tokens")
    return DynamoDBTokenStore(settings, table=table)


def test_put_document_writes_collection_keyed_item(
    store: DynamoDBTokenStore, table: FakeTable
) -> None:
    store.put_document(
        collection="refresh_tokens",
        identifier="r1",
        expires_at=NOW,
        data={"id": "r1"},
    )

    assert table.items[("refresh_tokens", "r1")] == {
        "pk": "refresh_tokens",
        "sk": "r1",
        "expires_at": "2026-07-01T08:00:00.000000+00:00",
        "data": {"id": "r1"},
    }
    assert store.get_document(collection="refresh_tokens", identifier="r1") == {"id": "r1"}
    assert store.get_document(collection="refresh_tokens", identifier="missing") is None


def test_list_expired_follows_pagination(store: DynamoDBTokenStore, table: FakeTable) -> None:
    table.query_pages = [
        {"Items": [{"data": {"id": "a"}}], "LastEvaluatedKey": {"pk": "t", "sk": "a"}},
        {"Items": [{"data": {"id": "b"}}, {"data": {"id": "c"}}]},
    ]

    expired = store.list_expired(collection="token_handles", cutoff=NOW)

    assert [doc["id"] for doc in expired] == ["a", "b", "c"]
    assert "ExclusiveStartKey" not in table.query_calls[0]
    assert table.query_calls[1]["ExclusiveStartKey"] == {"pk": "t", "sk": "a"}


def test_delete_document_maps_missing_item_to_not_found(store: DynamoDBTokenStore) -> None:
    with pytest.raises(RecordNotFoundError):
        store.delete_document(collection="authorization_codes", identifier="nope")


def test_delete_document_wraps_other_backend_errors(
    store: DynamoDBTokenStore, table: FakeTable
) -> None:
    table.delete_error = _client_error("ProvisionedThroughputExceededException", "DeleteItem")

    with pytest.raises(TokenStoreError) as excinfo:
        store.delete_document(collection="authorization_codes", identifier="code")

    assert not isinstance(excinfo.value, RecordNotFoundError)
