"""Expose dependency providers for the host application."""

from .providers import (
    SettingsDependency,
    build_token_cleanup,
    get_app_settings,
    get_authorization_code_repository,
    get_refresh_token_repository,
    get_token_cleanup,
    get_token_handle_repository,
    get_token_store,
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
