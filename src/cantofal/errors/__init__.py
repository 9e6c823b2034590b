"""Public error exports for cantofal."""

from __future__ import annotations

from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthorizationFailedError,
    CantoFalError,
    FolderDoesNotExistError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidConfigurationError,
    InvalidIdentifierError,
    MissingRequestedFieldError,
    NotFoundError,
    RateLimitError,
    RemoteUnavailableError,
    map_http_error,
)

__all__ = [
    "CantoFalError",
    "InvalidConfigurationError",
    "InvalidIdentifierError",
    "MissingRequestedFieldError",
    "NotFoundError",
    "FolderDoesNotExistError",
    "AuthorizationFailedError",
    "AccessDeniedError",
    "InvalidArgumentError",
    "RateLimitError",
    "RemoteUnavailableError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
