"""
FastAPI application entrypoint hosting the expired token cleanup.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from fastapi import FastAPI

from tokencleanup.api.routes import router as api_router
from tokencleanup.core.config import AppSettings, get_settings
from tokencleanup.core.logging import configure_logging
from tokencleanup.dependencies import build_token_cleanup
from tokencleanup.services import TokenCleanup

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    cleanup_factory: Optional[Callable[[AppSettings], TokenCleanup]] = None,
) -> FastAPI:
    """Factory for the FastAPI application.

    ``cleanup_factory`` receives the app's settings; by default the cleanup
    sweeps the store and interval configured there.
    """
    settings = settings or get_settings()
    cleanup_factory = cleanup_factory or build_token_cleanup
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not settings.cleanup.enabled:
            logger.info("Token cleanup disabled")
            yield
            return

        cleanup = cleanup_factory(settings)
        app.state.token_cleanup = cleanup
        cleanup.start()
        logger.info(
            "Token cleanup started",
            extra={"interval_seconds": cleanup.interval},
        )
        try:
            yield
        finally:
            cleanup.stop()
            logger.info("Token cleanup stopped")

    app = FastAPI(
        title="Token Cleanup",
        version="0.1.0",
        description="Identity provider host that sweeps expired tokens.",
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
