"""Standalone process that runs the expired token cleanup until signalled."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Optional

from tokencleanup.core.config import get_settings
from tokencleanup.core.logging import configure_logging
from tokencleanup.services import TokenCleanup

logger = logging.getLogger(__name__)


async def main(
    interval_seconds: Optional[int] = None,
    shutdown: Optional[asyncio.Event] = None,
) -> None:
    """Run the cleanup until ``shutdown`` is set, or SIGINT/SIGTERM when omitted."""
    settings = get_settings()
    configure_logging(settings.log_level)

    cleanup = TokenCleanup(
        settings.store,
        interval_seconds or settings.cleanup.interval_seconds,
    )

    if shutdown is None:
        shutdown = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, shutdown.set)
            except NotImplementedError:  # pragma: no cover - Windows event loops
                pass

    cleanup.start()
    logger.info(
        "Token cleanup worker started",
        extra={"interval_seconds": cleanup.interval, "backend": settings.store.backend},
    )
    try:
        await shutdown.wait()
    finally:
        cleanup.stop()
        logger.info("Token cleanup worker stopped")


if __name__ == "__main__":  # pragma: no cover - manual execution path
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Token cleanup worker interrupted")
