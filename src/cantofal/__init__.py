"""cantofal public API."""

from __future__ import annotations

from cantofal.auth import CantoConfig, CantoCredentials, OAuthClient
from cantofal.driver import Capability, CantoDriver
from cantofal.errors import (
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
from cantofal.local import LocalCopy, TransientFileRegistry
from cantofal.mdc import (
    CropArea,
    MdcConfiguration,
    MdcUrlGenerator,
    ProcessingTask,
    SuffixParts,
    compose_suffix,
)
from cantofal.models import AssetRecord, AssetSearch, FolderNode, FolderRecord, FolderTree, SearchResult
from cantofal.repository import CantoRepository

__all__ = [
    # High-level
    "CantoDriver",
    "Capability",
    "CantoRepository",
    "MdcUrlGenerator",
    # Config / Auth
    "CantoConfig",
    "CantoCredentials",
    "OAuthClient",
    # Models
    "AssetRecord",
    "FolderRecord",
    "FolderNode",
    "FolderTree",
    "AssetSearch",
    "SearchResult",
    "LocalCopy",
    "TransientFileRegistry",
    "CropArea",
    "MdcConfiguration",
    "ProcessingTask",
    "SuffixParts",
    "compose_suffix",
    # Errors
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
