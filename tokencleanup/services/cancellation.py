"""Cooperative cancellation for background loops."""

from __future__ import annotations

import asyncio
import threading
from typing import Optional


class OperationCancelledError(Exception):
    """Raised by ``CancellationToken.sleep`` when cancellation is requested."""


class CancellationToken:
    """One-shot cancellation signal shared between a controller and its loop.

    ``cancel`` may be called from any thread. The token remembers the event
    loop that first waits on it and forwards the signal there.
    """

    def __init__(self) -> None:
        self._requested = False
        self._event = asyncio.Event()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock = threading.Lock()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._requested

    def cancel(self) -> None:
        with self._lock:
            if self._requested:
                return
            self._requested = True
            loop = self._loop

        if loop is None:
            self._event.set()
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._event.set()
        elif not loop.is_closed():
            try:
                loop.call_soon_threadsafe(self._event.set)
            except RuntimeError:
                # Loop closed between the check and the call; nothing waits on it.
                pass

    async def sleep(self, seconds: float) -> None:
        """Wait ``seconds``, or raise ``OperationCancelledError`` on cancellation."""
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.get_running_loop()
            requested = self._requested

        if requested:
            raise OperationCancelledError("Cancellation requested before wait.")

        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise OperationCancelledError("Cancellation requested during wait.")


__all__ = ["CancellationToken", "OperationCancelledError"]
