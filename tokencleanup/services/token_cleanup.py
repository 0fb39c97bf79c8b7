"""
Periodic removal of expired refresh tokens, authorization codes and token handles.

Start it alongside the identity provider host and stop it on shutdown.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from tokencleanup.clients import DynamoDBTokenStore, SQLiteTokenStore
from tokencleanup.clients.base import TokenStore
from tokencleanup.core.config import StoreSettings
from tokencleanup.services.cancellation import (
    CancellationToken,
    OperationCancelledError,
)
from tokencleanup.services.token_repositories import (
    AuthorizationCodeRepository,
    RefreshTokenRepository,
    TokenHandleRepository,
    TokenRepository,
)

logger = logging.getLogger(__name__)

# Strong references to running sweep tasks; the event loop only keeps weak ones.
_background_tasks: set[asyncio.Task] = set()


class InvalidConfigurationError(ValueError):
    """Raised when the cleanup is constructed with unusable arguments."""


class AlreadyStartedError(RuntimeError):
    """Raised by ``start`` while a sweep loop is already active."""


class NotStartedError(RuntimeError):
    """Raised by ``stop`` when no sweep loop is active."""


def build_token_store(settings: StoreSettings) -> TokenStore:
    """Create the store backend selected in ``settings``."""
    if settings.backend == "dynamodb":
        return DynamoDBTokenStore(settings)
    return SQLiteTokenStore(settings.sqlite_path)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCleanup:
    """Runs a background loop that deletes expired tokens every ``interval`` seconds."""

    def __init__(
        self,
        options: Optional[StoreSettings],
        interval: int = 60,
        *,
        repositories: Optional[Sequence[TokenRepository]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if options is None:
            raise InvalidConfigurationError("Store options must be provided.")
        if isinstance(interval, bool) or not isinstance(interval, int):
            raise InvalidConfigurationError("interval must be a whole number of seconds.")
        if interval < 1:
            raise InvalidConfigurationError("interval must be at least 1 second.")

        self._interval = interval
        self._clock = clock
        self._source: Optional[CancellationToken] = None

        if repositories is None:
            store = build_token_store(options)
            repositories = (
                TokenHandleRepository(store, options),
                RefreshTokenRepository(store, options),
                AuthorizationCodeRepository(store, options),
            )
        self._repositories = tuple(repositories)

    @property
    def interval(self) -> int:
        return self._interval

    def start(self) -> None:
        """Start the periodic token cleanup."""
        if self._source is not None:
            raise AlreadyStartedError("Already started. Call stop first.")

        token = CancellationToken()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        sweep = self.run(token)
        try:
            if loop is None:
                thread = threading.Thread(
                    target=asyncio.run,
                    args=(sweep,),
                    name="token-cleanup",
                    daemon=True,
                )
                thread.start()
            else:
                task = loop.create_task(sweep, name="token-cleanup")
                _background_tasks.add(task)
                task.add_done_callback(_background_tasks.discard)
        except BaseException:
            sweep.close()
            raise

        self._source = token

    def stop(self) -> None:
        """Stop the periodic token cleanup without waiting for the loop to exit."""
        if self._source is None:
            raise NotStartedError("Not started. Call start first.")

        self._source.cancel()
        self._source = None

    async def run(self, token: CancellationToken) -> None:
        """Sweep once per interval until ``token`` is cancelled."""
        while True:
            if token.is_cancellation_requested:
                logger.info("Token cleanup cancellation requested")
                break

            try:
                await token.sleep(self._interval)
            except OperationCancelledError:
                logger.info("Token cleanup cancellation requested")
                break
            except Exception:
                logger.info("Token cleanup wait interrupted; exiting", exc_info=True)
                break

            if token.is_cancellation_requested:
                logger.info("Token cleanup cancellation requested")
                break

            await self.clear_tokens()

    async def clear_tokens(self) -> None:
        """Remove expired documents from every repository, in order.

        The first failure ends this sweep; later repositories wait for the
        next tick.
        """
        try:
            cutoff = self._clock()
            logger.info("Clearing expired tokens", extra={"cutoff": cutoff.isoformat()})
            for repository in self._repositories:
                await self._clear_repository(repository, cutoff)
        except Exception:
            logger.exception("Failed clearing expired tokens")

    async def _clear_repository(
        self, repository: TokenRepository, cutoff: datetime
    ) -> None:
        expired = await repository.get_expired(cutoff)
        for document in expired:
            await repository.remove(document.id)
        if expired:
            logger.info(
                "Removed expired tokens",
                extra={
                    "collection": repository.collection_name,
                    "removed": len(expired),
                },
            )


__all__ = [
    "AlreadyStartedError",
    "InvalidConfigurationError",
    "NotStartedError",
    "TokenCleanup",
    "build_token_store",
]
