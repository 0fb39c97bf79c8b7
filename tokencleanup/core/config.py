"""
Settings for the token cleanup service.

Both the FastAPI host and the standalone worker read the same settings tree so
the store backend and sweep interval stay consistent across entrypoints.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import os

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")


_load_env_file()


class StoreSettings(BaseSettings):
    """Connection and naming settings for the persistent token store."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    backend: Literal["sqlite", "dynamodb"] = Field(
        "sqlite", validation_alias="TOKEN_STORE_BACKEND"
    )
    sqlite_path: str = Field(
        "data/tokens.db", validation_alias="TOKEN_STORE_SQLITE_PATH"
    )
    dynamodb_table_name: Optional[str] = Field(
        None,
        validation_alias="TOKEN_STORE_DYNAMODB_TABLE",
        description="Table holding every token collection, keyed by (pk, sk).",
    )
    region_name: str = Field("us-east-1", validation_alias="AWS_REGION")
    collection_prefix: str = Field(
        "",
        validation_alias="TOKEN_STORE_COLLECTION_PREFIX",
        description="Optional prefix applied to every collection name.",
    )

    @model_validator(mode="after")
    def _require_table_for_dynamodb(self) -> "StoreSettings":
        if self.backend == "dynamodb" and not self.dynamodb_table_name:
            raise ValueError(
                "TOKEN_STORE_DYNAMODB_TABLE is required when the backend is dynamodb."
            )
        return self

    def collection_name(self, name: str) -> str:
        """Resolve the physical collection name for a token category."""
        return f"{self.collection_prefix}{name}"


class CleanupSettings(BaseSettings):
    """Expired token sweep configuration."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = Field(True, validation_alias="TOKEN_CLEANUP_ENABLED")
    interval_seconds: int = Field(60, validation_alias="TOKEN_CLEANUP_INTERVAL")

    @field_validator("interval_seconds")
    @classmethod
    def _check_interval(cls, value: int) -> int:
        if value < 1:
            raise ValueError("TOKEN_CLEANUP_INTERVAL must be at least 1 second.")
        return value


class AppSettings(BaseSettings):
    """Root settings object for the service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    store: StoreSettings = Field(default_factory=StoreSettings)
    cleanup: CleanupSettings = Field(default_factory=CleanupSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "CleanupSettings",
    "StoreSettings",
    "get_settings",
]
