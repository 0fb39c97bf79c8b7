"""
Domain models for persisted security tokens.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenDocument(BaseModel):
    """Any persisted token that carries an expiry."""

    id: str = Field(..., min_length=1, description="Store-unique token identifier.")
    client_id: str
    subject_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    expires_at: datetime


class TokenHandleDocument(TokenDocument):
    """Reference access token stored server side."""

    token_type: str = "access_token"
    audience: Optional[str] = None
    scopes: list[str] = Field(default_factory=list)


class RefreshTokenDocument(TokenDocument):
    """Refresh token tied to the access token it was issued with."""

    access_token_id: Optional[str] = None
    lifetime_seconds: int = Field(0, ge=0)
    scopes: list[str] = Field(default_factory=list)


class AuthorizationCodeDocument(TokenDocument):
    """Short-lived code issued during the authorization code flow."""

    redirect_uri: str
    scopes: list[str] = Field(default_factory=list)
    nonce: Optional[str] = None


__all__ = [
    "AuthorizationCodeDocument",
    "RefreshTokenDocument",
    "TokenDocument",
    "TokenHandleDocument",
]
