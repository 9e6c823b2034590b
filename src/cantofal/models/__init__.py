"""Public model exports for cantofal."""

from __future__ import annotations

from .asset import AssetRecord
from .folder import FolderNode, FolderRecord, FolderTree
from .search import APPROVAL_APPROVED, AssetSearch, SearchResult

__all__ = [
    "AssetRecord",
    "FolderRecord",
    "FolderNode",
    "FolderTree",
    "AssetSearch",
    "SearchResult",
    "APPROVAL_APPROVED",
]
