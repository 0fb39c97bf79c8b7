"""
FastAPI routes exposed by the token cleanup host.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import APIRouter

from tokencleanup.core.config import AppSettings
from tokencleanup.dependencies import SettingsDependency

router = APIRouter()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettings = SettingsDependency) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


__all__ = ["router"]
