"""Exception hierarchy and HTTP error mapping for cantofal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class CantoFalError(Exception):
    """
    Base exception for cantofal.

    Attributes:
        details: Optional structured information (e.g., HTTP status, identifier).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidConfigurationError(CantoFalError):
    """Raised when a misconfigured driver is asked for data that must exist."""


class InvalidIdentifierError(CantoFalError):
    """Raised when a combined identifier cannot be decoded."""


class MissingRequestedFieldError(CantoFalError):
    """Raised when file info is requested for a field the projection lacks."""


class NotFoundError(CantoFalError):
    """Raised when a remote asset or container does not exist (HTTP 404)."""


class FolderDoesNotExistError(NotFoundError):
    """Raised when a folder or album does not exist remotely."""


class AuthorizationFailedError(CantoFalError):
    """Raised when the DAM rejects the app credentials (HTTP 401, token refresh)."""


class AccessDeniedError(CantoFalError):
    """Raised when access to a resource is denied (HTTP 403)."""


class InvalidArgumentError(CantoFalError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class RateLimitError(CantoFalError):
    """Raised when rate-limited (HTTP 429)."""


class RemoteUnavailableError(CantoFalError):
    """Raised when network/timeout issues or 5xx responses prevent the request."""


class ApiError(CantoFalError):
    """Raised for unclassified API errors."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to cantofal exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> CantoFalError:
    """
    Map an HTTP error to a cantofal exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthorizationFailedError
        - 403 -> AccessDeniedError
        - 404 -> NotFoundError
        - 429 -> RateLimitError
        - 5xx -> RemoteUnavailableError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthorizationFailedError(message, details=details, cause=cause)
    if info.status_code == 403:
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return RemoteUnavailableError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
