"""Hand-written fakes shared by the cleanup tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tokencleanup.models.tokens import TokenDocument


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeRepository:
    """In-memory stand-in for a token repository.

    ``get_expired`` honours the cutoff like a real store. Failures can be
    scripted for the first N list or remove calls.
    """

    def __init__(
        self,
        name: str,
        documents: list[TokenDocument] | None = None,
        *,
        fail_list_times: int = 0,
        fail_remove_times: int = 0,
        events: list[str] | None = None,
    ) -> None:
        self.collection_name = name
        self.documents = {doc.id: doc for doc in documents or []}
        self.fail_list_times = fail_list_times
        self.fail_remove_times = fail_remove_times
        self.events = events if events is not None else []
        self.cutoffs: list[datetime] = []
        self.removed: list[str] = []

    async def get_expired(self, cutoff: datetime) -> list[TokenDocument]:
        self.events.append(f"{self.collection_name}:list")
        self.cutoffs.append(cutoff)
        if self.fail_list_times:
            self.fail_list_times -= 1
            raise ConnectionError(f"{self.collection_name} unavailable")
        return [doc for doc in self.documents.values() if doc.expires_at <= cutoff]

    async def remove(self, identifier: str) -> None:
        self.events.append(f"{self.collection_name}:remove:{identifier}")
        if self.fail_remove_times:
            self.fail_remove_times -= 1
            raise ConnectionError(f"{self.collection_name} delete failed")
        del self.documents[identifier]
        self.removed.append(identifier)


def make_document(identifier: str, expires_at: datetime) -> TokenDocument:
    return TokenDocument(id=identifier, client_id="client-1", expires_at=expires_at)


