"""
Cached providers for settings, the token store, repositories and the cleanup.
"""

from functools import lru_cache

from fastapi import Depends

from tokencleanup.clients.base import TokenStore
from tokencleanup.core.config import AppSettings, get_settings
from tokencleanup.services import (
    AuthorizationCodeRepository,
    RefreshTokenRepository,
    TokenCleanup,
    TokenHandleRepository,
    build_token_store,
)


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return get_settings()


SettingsDependency = Depends(get_app_settings)


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the configured token store backend."""
    return build_token_store(get_app_settings().store)


@lru_cache()
def get_token_handle_repository() -> TokenHandleRepository:
    return TokenHandleRepository(get_token_store(), get_app_settings().store)


@lru_cache()
def get_refresh_token_repository() -> RefreshTokenRepository:
    return RefreshTokenRepository(get_token_store(), get_app_settings().store)


@lru_cache()
def get_authorization_code_repository() -> AuthorizationCodeRepository:
    return AuthorizationCodeRepository(get_token_store(), get_app_settings().store)


def build_token_cleanup(settings: AppSettings) -> TokenCleanup:
    """Build a cleanup sweeping the store described by ``settings``."""
    return TokenCleanup(settings.store, settings.cleanup.interval_seconds)


@lru_cache()
def get_token_cleanup() -> TokenCleanup:
    """Provide the process-wide expired token cleanup."""
    settings = get_app_settings()
    return TokenCleanup(
        settings.store,
        settings.cleanup.interval_seconds,
        repositories=(
            get_token_handle_repository(),
            get_refresh_token_repository(),
            get_authorization_code_repository(),
        ),
    )


__all__ = [
    "SettingsDependency",
    "build_token_cleanup",
    "get_app_settings",
    "get_authorization_code_repository",
    "get_refresh_token_repository",
    "get_token_cleanup",
    "get_token_handle_repository",
    "get_token_store",
]
