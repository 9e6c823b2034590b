"""CantoRepository: cached access to Canto data for the driver."""

from __future__ import annotations

import logging
import os
import posixpath
import tempfile
from typing import Any, Mapping, Optional, Union

from cantofal.auth import CantoConfig
from cantofal.controller import CantoController
from cantofal.controller.params import (
    MAX_PAGE_SIZE,
    SORT_BY_NAME,
    SORT_BY_TIME,
    SORT_DIRECTION_ASC,
)
from cantofal.errors import (
    FolderDoesNotExistError,
    InvalidConfigurationError,
    NotFoundError,
)
from cantofal.local import LocalCopy, remove_quietly
from cantofal.models import AssetRecord, AssetSearch, FolderRecord, FolderTree, SearchResult
from cantofal.util.identifiers import decode, is_mdc_enabled

logger = logging.getLogger(__name__)

_TEMP_PREFIX: str = "cantofal_"

_FileCacheKey = tuple[str, str, bool]


class CantoRepository:
    """
    Gateway between the driver and the Canto API.

    Lookups are memoized for the lifetime of the instance; there is no
    eviction and no invalidation. Create a fresh repository per request.
    """

    def __init__(self, config: CantoConfig) -> None:
        self._config = config
        self._controller: Optional[CantoController] = None
        self._file_cache: dict[_FileCacheKey, AssetRecord] = {}
        self._folder_cache: dict[tuple[str, str], FolderRecord] = {}
        self._tree_cache: dict[tuple[str, str], FolderTree] = {}

    @classmethod
    def from_controller(cls, controller: Any, config: CantoConfig) -> "CantoRepository":
        """Create repository with an injected controller (useful for tests)."""
        obj = cls(config)
        obj._controller = controller
        return obj

    def initialize(self) -> None:
        """
        Authenticate against Canto.

        Raises:
            InvalidConfigurationError: if the configuration is incomplete.
            AuthorizationFailedError: if Canto rejects the app credentials.
        """
        if self._controller is not None:
            return
        self._config.require_valid()
        self._controller = CantoController(self._config)
        logger.debug(f"Connected to Canto {self._config.canto_name}.{self._config.canto_domain}")

    @property
    def controller(self) -> CantoController:
        if self._controller is None:
            raise InvalidConfigurationError("Repository is not initialized. Call initialize() first.")
        return self._controller

    # ----------------------------
    # Files
    # ----------------------------
    def get_file_details(self, scheme: str, remote_id: str, use_mdc: bool = False) -> AssetRecord:
        key = (scheme, remote_id, use_mdc)
        cached = self._file_cache.get(key)
        if cached is not None:
            logger.debug(f"File cache hit for {scheme}/{remote_id}")
            return cached

        data = self.controller.get_asset(scheme, remote_id)
        record = AssetRecord.from_api(data, use_mdc=use_mdc)
        self._file_cache[key] = record
        return record

    def set_file_cache(self, identifier: str, record: Union[AssetRecord, Mapping[str, Any]]) -> None:
        """Seed the file cache with data the caller already holds."""
        scheme, remote_id = decode(identifier)
        use_mdc = is_mdc_enabled(identifier)
        if not isinstance(record, AssetRecord):
            record = AssetRecord.from_api(record, use_mdc=use_mdc)
        self._file_cache[(scheme, remote_id, use_mdc)] = record

    def get_files_in_folder(
        self,
        album_id: str,
        start: int = 0,
        limit: int = MAX_PAGE_SIZE,
        sort_by: str = SORT_BY_TIME,
        sort_direction: str = SORT_DIRECTION_ASC,
    ) -> list[AssetRecord]:
        """One page (at most 1000 assets) of an album; no auto-pagination."""
        limit = min(limit, MAX_PAGE_SIZE) if limit > 0 else MAX_PAGE_SIZE
        data = self.controller.list_album(
            album_id,
            start=start,
            limit=limit,
            sort_by=sort_by,
            sort_direction=sort_direction,
        )
        return [AssetRecord.from_api(item) for item in data.get("results") or []
                if isinstance(item, Mapping)]

    def count_files_in_folder(self, album_id: str) -> int:
        data = self.controller.list_album(album_id, start=0, limit=1)
        found = data.get("found", 0)
        try:
            return int(found)
        except (TypeError, ValueError):
            return 0

    def search(self, asset_search: AssetSearch) -> SearchResult:
        params = {
            "keyword": asset_search.keyword,
            "scheme": "|".join(asset_search.schemes),
            "approval": asset_search.status,
            "start": asset_search.start,
            "limit": asset_search.limit,
        }
        data = self.controller.search(params)
        assets = [AssetRecord.from_api(item) for item in data.get("results") or []
                  if isinstance(item, Mapping)]
        try:
            found = int(data.get("found", len(assets)))
        except (TypeError, ValueError):
            found = len(assets)
        return SearchResult(found=found, assets=assets)

    # ----------------------------
    # Folders
    # ----------------------------
    def get_folder_details(self, scheme: str, remote_id: str) -> FolderRecord:
        key = (scheme, remote_id)
        cached = self._folder_cache.get(key)
        if cached is not None:
            return cached
        try:
            data = self.controller.get_folder_info(scheme, remote_id)
        except NotFoundError as exc:
            raise FolderDoesNotExistError(
                "Folder does not exist",
                details={"scheme": scheme, "id": remote_id},
                cause=exc,
            ) from exc
        record = FolderRecord.from_api(data)
        self._folder_cache[key] = record
        return record

    def get_folder_identifier_tree(
        self,
        sort_by: str = SORT_BY_NAME,
        sort_direction: str = SORT_DIRECTION_ASC,
    ) -> FolderTree:
        key = (sort_by, sort_direction)
        cached = self._tree_cache.get(key)
        if cached is not None:
            return cached
        tree = FolderTree.from_api(self.controller.get_tree(sort_by, sort_direction))
        self._tree_cache[key] = tree
        return tree

    # ----------------------------
    # Bytes and URLs
    # ----------------------------
    def get_file_for_local_processing(self, identifier: str) -> str:
        """
        Download the original asset into a new temporary file.

        The caller owns the returned path and must delete it.

        Raises:
            NotFoundError: if the asset has no downloadable original.
        """
        scheme, remote_id = decode(identifier)
        record = self.get_file_details(scheme, remote_id, is_mdc_enabled(identifier))
        if not record.direct_url:
            raise NotFoundError(
                "Asset has no downloadable original",
                details={"identifier": identifier},
            )

        suffix = posixpath.splitext(record.name)[1]
        fd, path = tempfile.mkstemp(prefix=_TEMP_PREFIX, suffix=suffix)
        os.close(fd)
        try:
            self.controller.download(record.direct_url, path)
        except Exception:
            remove_quietly(path)
            raise
        logger.debug(f"Downloaded {identifier} to {path}")
        return path

    def open_local_copy(self, identifier: str) -> LocalCopy:
        return LocalCopy(self.get_file_for_local_processing(identifier), identifier)

    def get_url_contents(self, url: str) -> bytes:
        return self.controller.fetch(url)

    def generate_mdc_base_url(self, identifier: str) -> str:
        """Base delivery URL of an asset, before transformation suffixes."""
        _, remote_id = decode(identifier)
        return (
            f"https://{self._config.mdc_domain_name}/"
            f"{self._config.mdc_aws_account_id}/{remote_id}"
        )
