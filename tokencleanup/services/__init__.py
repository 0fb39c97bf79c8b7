"""Service layer exports."""

from .cancellation import CancellationToken, OperationCancelledError
from .token_cleanup import (
    AlreadyStartedError,
    InvalidConfigurationError,
    NotStartedError,
    TokenCleanup,
    build_token_store,
)
from .token_repositories import (
    AuthorizationCodeRepository,
    RefreshTokenRepository,
    TokenHandleRepository,
    TokenRepository,
)

__all__ = [
    "AlreadyStartedError",
    "AuthorizationCodeRepository",
    "CancellationToken",
    "InvalidConfigurationError",
    "NotStartedError",
    "OperationCancelledError",
    "RefreshTokenRepository",
    "TokenCleanup",
    "TokenHandleRepository",
    "TokenRepository",
    "build_token_store",
]
