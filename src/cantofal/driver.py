"""CantoDriver: read-only file abstraction over a Canto library."""

from __future__ import annotations

import hashlib
import logging
import weakref
from enum import IntFlag
from typing import Any, Mapping, Optional, Sequence, Union
from urllib.parse import unquote

from cantofal.auth import CantoConfig
from cantofal.controller.params import (
    MAX_PAGE_SIZE,
    SORT_BY_NAME,
    SORT_BY_SCHEME,
    SORT_BY_SIZE,
    SORT_BY_TIME,
    SORT_DIRECTION_ASC,
    SORT_DIRECTION_DESC,
)
from cantofal.errors import (
    AuthorizationFailedError,
    CantoFalError,
    InvalidConfigurationError,
    MissingRequestedFieldError,
    NotFoundError,
)
from cantofal.local import LocalCopy, TransientFileRegistry
from cantofal.mdc import MdcConfiguration, MdcUrlGenerator
from cantofal.repository import CantoRepository
from cantofal.util.identifiers import (
    ROOT_FOLDER,
    decode,
    encode,
    hash_identifier,
    is_mdc_enabled,
    is_root,
    root_identifier,
    validate,
)
from cantofal.util.schemes import SCHEME_ALBUM, SCHEME_FOLDER, is_container_scheme
from cantofal.util.time import now_timestamp

logger = logging.getLogger(__name__)

ROOT_FOLDER_NAME: str = "Canto"

_SORT_MAP: dict[str, str] = {
    "name": SORT_BY_NAME,
    "fileext": SORT_BY_SCHEME,
    "size": SORT_BY_SIZE,
}


class Capability(IntFlag):
    BROWSABLE = 1
    PUBLIC = 2
    WRITABLE = 4


class CantoDriver:
    """
    Read-only driver exposing Canto folders, albums and assets.

    Folders contain folders and albums; albums contain assets. Every handle
    is a combined identifier (see `cantofal.util.identifiers`).

    With an invalid configuration (or rejected credentials) the driver never
    talks to Canto: browsing reports an empty storage and operations that
    need real data raise `InvalidConfigurationError`.
    """

    DRIVER_NAME: str = "Canto"

    def __init__(
        self,
        configuration: Union[CantoConfig, Mapping[str, Any]],
        *,
        repository: Any = None,
        mdc_url_generator: Optional[MdcUrlGenerator] = None,
    ) -> None:
        if isinstance(configuration, CantoConfig):
            self._config = configuration
        else:
            self._config = CantoConfig.from_mapping(configuration)

        self.capabilities = Capability.BROWSABLE
        self.root_identifier = self._build_root_identifier()
        self.initialization_error: Optional[CantoFalError] = None

        self._repository = repository
        self._mdc_url_generator = mdc_url_generator
        if self._mdc_url_generator is None and repository is not None:
            self._mdc_url_generator = self._build_mdc_url_generator(repository)

        self._transient_files = TransientFileRegistry()
        # Sweeps again on garbage collection or interpreter exit if close() was skipped.
        weakref.finalize(self, self._transient_files.sweep)

        if not self._config.is_valid:
            logger.warning(
                f"Canto storage {self._config.storage_id!r} is misconfigured: "
                f"{'; '.join(self._config.problems())}"
            )

    @classmethod
    def from_repository(
        cls,
        configuration: Union[CantoConfig, Mapping[str, Any]],
        repository: Any,
    ) -> "CantoDriver":
        """Create driver with an injected repository (useful for tests)."""
        return cls(configuration, repository=repository)

    def initialize(self) -> None:
        """
        Connect the repository.

        Rejected credentials are logged and leave the driver in the
        misconfigured state instead of raising.
        """
        if not self._config.is_valid:
            return
        if self._repository is None:
            self._repository = CantoRepository(self._config)
        try:
            self._repository.initialize()
        except AuthorizationFailedError as exc:
            logger.error(f"Canto authorization failed for storage {self._config.storage_id}: {exc}")
            self.initialization_error = exc
            self._repository = None
            return
        if self._mdc_url_generator is None:
            self._mdc_url_generator = self._build_mdc_url_generator(self._repository)

    @property
    def configuration(self) -> CantoConfig:
        return self._config

    @property
    def is_valid(self) -> bool:
        return (
            self._config.is_valid
            and self._repository is not None
            and self.initialization_error is None
        )

    @property
    def mdc_url_generator(self) -> Optional[MdcUrlGenerator]:
        return self._mdc_url_generator

    def merge_configuration_capabilities(self, capabilities: int) -> Capability:
        self.capabilities &= capabilities
        return self.capabilities

    def get_root_level_folder(self) -> str:
        return self.root_identifier

    def get_default_folder(self) -> str:
        return self.root_identifier

    # ----------------------------
    # Teardown
    # ----------------------------
    def close(self) -> None:
        """Delete transient local copies handed out by this driver."""
        self._transient_files.sweep()

    def __enter__(self) -> CantoDriver:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    # ----------------------------
    # Identifiers
    # ----------------------------
    def get_parent_identifier(self, identifier: str) -> str:
        """
        Return the parent container of `identifier`.

        Raises:
            FolderDoesNotExistError: if the container is unknown to Canto.
            InvalidIdentifierError: if `identifier` is malformed.
        """
        if not identifier:
            return ""
        scheme, remote_id = decode(identifier)
        if remote_id == ROOT_FOLDER:
            return identifier
        if not is_container_scheme(scheme):
            return ""

        folder = self._require_repository().get_folder_details(scheme, remote_id)
        if len(folder.id_path) <= 1:
            return self.root_identifier
        # Albums hold no sub-containers, so any parent is a folder.
        return encode(SCHEME_FOLDER, folder.id_path[-2])

    def hash(self, identifier: str, algorithm: str) -> str:
        return hashlib.new(algorithm, identifier.encode("utf-8")).hexdigest()

    def hash_identifier(self, identifier: str) -> str:
        if validate(identifier) and is_container_scheme(decode(identifier)[0]):
            identifier = self._canonicalize_folder_identifier(identifier)
        identifier = self._canonicalize_file_identifier(identifier)
        return hash_identifier(identifier)

    def get_permissions(self, identifier: str) -> dict[str, bool]:
        return {"r": True, "w": False}

    # ----------------------------
    # Existence checks (never raise)
    # ----------------------------
    def file_exists(self, identifier: str) -> bool:
        if not validate(identifier):
            return False
        scheme, remote_id = decode(identifier)
        if is_container_scheme(scheme):
            return False
        repository = self._repository_or_none()
        if repository is None:
            return False
        try:
            repository.get_file_details(scheme, remote_id, is_mdc_enabled(identifier))
        except CantoFalError as exc:
            return self._absent(identifier, exc)
        return True

    def folder_exists(self, identifier: str) -> bool:
        if is_root(identifier):
            return True
        if not validate(identifier):
            return False
        scheme, remote_id = decode(identifier)
        if not is_container_scheme(scheme):
            return False
        repository = self._repository_or_none()
        if repository is None:
            return False
        try:
            repository.get_folder_details(scheme, remote_id)
        except CantoFalError as exc:
            return self._absent(identifier, exc)
        return True

    def is_folder_empty(self, identifier: str) -> bool:
        return (self.count_files_in_folder(identifier) + self.count_folders_in_folder(identifier)) == 0

    def folder_exists_in_folder(self, name_or_identifier: str, folder_identifier: str) -> bool:
        """True if `name_or_identifier` lies on the id path of `folder_identifier`."""
        if name_or_identifier == folder_identifier:
            return True
        if not validate(folder_identifier):
            return False
        scheme, remote_id = decode(folder_identifier)
        repository = self._repository_or_none()
        if repository is None or remote_id == ROOT_FOLDER:
            return False
        try:
            folder = repository.get_folder_details(scheme, remote_id)
        except CantoFalError as exc:
            return self._absent(folder_identifier, exc)

        if is_root(name_or_identifier):
            return True
        if validate(name_or_identifier):
            segment = decode(name_or_identifier)[1]
        else:
            segment = name_or_identifier
        return segment in folder.id_path

    def file_exists_in_folder(self, file_identifier: str, folder_identifier: str) -> bool:
        """True if the asset belongs to `folder_identifier` or an album below it."""
        if not validate(file_identifier) or not validate(folder_identifier):
            return False
        if is_root(folder_identifier):
            return self.file_exists(file_identifier)
        scheme, remote_id = decode(file_identifier)
        repository = self._repository_or_none()
        if repository is None:
            return False
        try:
            asset = repository.get_file_details(scheme, remote_id, is_mdc_enabled(file_identifier))
        except CantoFalError as exc:
            return self._absent(file_identifier, exc)

        albums = asset.related_folder_identifiers
        if folder_identifier in albums:
            return True
        return any(self.folder_exists_in_folder(folder_identifier, album) for album in albums)

    def is_within(self, folder_identifier: str, identifier: str) -> bool:
        """
        Check whether `identifier` lies within `folder_identifier`.

        Malformed identifiers yield False: the host probes with identifiers
        of unrelated storages (e.g. its processing folder).
        """
        if not validate(folder_identifier) or not validate(identifier):
            return False
        if is_container_scheme(decode(identifier)[0]):
            return self.folder_exists_in_folder(folder_identifier, identifier)
        return self.file_exists_in_folder(identifier, folder_identifier)

    # ----------------------------
    # Metadata
    # ----------------------------
    def get_public_url(self, identifier: str) -> Optional[str]:
        repository = self._repository_or_none()
        if repository is None:
            return None
        scheme, remote_id = decode(identifier)
        use_mdc = is_mdc_enabled(identifier)
        asset = repository.get_file_details(scheme, remote_id, use_mdc)
        if use_mdc and self._mdc_url_generator is not None:
            url = repository.generate_mdc_base_url(identifier)
            url += self._mdc_url_generator.compose_suffix(
                MdcConfiguration(width=asset.width or None, height=asset.height or None)
            )
            return unquote(url)
        if asset.direct_url:
            return unquote(asset.direct_url)
        return None

    def get_file_info(self, identifier: str, requested_fields: Sequence[str] = ()) -> dict[str, Any]:
        """
        Project an asset into the host's file metadata.

        Raises:
            MissingRequestedFieldError: if a requested field is not provided.
            NotFoundError: if the asset does not exist.
        """
        scheme, remote_id = decode(identifier)
        if is_container_scheme(scheme):
            return self.get_folder_info(identifier)

        asset = self._require_repository().get_file_details(
            scheme, remote_id, is_mdc_enabled(identifier)
        )
        data: dict[str, Any] = {
            "size": asset.size,
            "atime": now_timestamp(),
            "mtime": asset.modified_at,
            "ctime": asset.uploaded_at,
            "mimetype": asset.mime_type,
            "name": asset.name,
            "extension": asset.extension,
            "identifier": identifier,
            "identifier_hash": self.hash_identifier(identifier),
            "storage": self._config.storage_id,
            "folder_hash": "",
            "folder_identifiers": list(asset.related_folder_identifiers),
        }
        if not requested_fields:
            return data

        missing = [name for name in requested_fields if name not in data]
        if missing:
            raise MissingRequestedFieldError(
                "Requested file info fields are not available",
                details={"fields": missing, "identifier": identifier},
            )
        return {name: data[name] for name in requested_fields}

    def get_folder_info(self, identifier: str) -> dict[str, Any]:
        if not identifier or identifier == ROOT_FOLDER or is_root(identifier):
            now = now_timestamp()
            return {
                "identifier": root_identifier(),
                "name": ROOT_FOLDER_NAME,
                "mtime": now,
                "ctime": now,
                "storage": self._config.storage_id,
            }

        scheme, remote_id = decode(identifier)
        folder = self._require_repository().get_folder_details(scheme, remote_id)
        # Folders and albums may share a name; the prefix tells them apart.
        prefix = "A" if scheme == SCHEME_ALBUM else "F"
        return {
            "identifier": identifier,
            "name": f"{prefix}: {folder.name}",
            "mtime": folder.modified_at,
            "ctime": folder.created_at,
            "storage": self._config.storage_id,
        }

    # ----------------------------
    # Listings
    # ----------------------------
    def get_files_in_folder(
        self,
        identifier: str,
        start: int = 0,
        limit: int = 0,
        recursive: bool = False,
        sort: str = "",
        sort_reverse: bool = False,
    ) -> list[str]:
        """
        List asset identifiers of an album (one page of at most 1000).

        Folders and the root hold no assets. `recursive` has no effect since
        albums are flat.
        """
        if not validate(identifier):
            return []
        scheme, remote_id = decode(identifier)
        if scheme != SCHEME_ALBUM or remote_id == ROOT_FOLDER:
            return []
        repository = self._repository_or_none()
        if repository is None:
            return []

        sort_by = _SORT_MAP.get(sort, SORT_BY_TIME)
        sort_direction = SORT_DIRECTION_DESC if sort_reverse else SORT_DIRECTION_ASC
        page_size = min(limit, MAX_PAGE_SIZE) if limit > 0 else MAX_PAGE_SIZE
        # TODO: request further pages when an album holds more than 1000 assets.
        try:
            assets = repository.get_files_in_folder(
                remote_id, max(0, start), page_size, sort_by, sort_direction
            )
        except NotFoundError:
            logger.debug(f"Album {identifier} not found, listing no files")
            return []

        files: list[str] = []
        for asset in assets:
            file_identifier = encode(asset.scheme, asset.remote_id)
            repository.set_file_cache(file_identifier, asset)
            files.append(file_identifier)
        return files

    def get_folders_in_folder(
        self,
        identifier: str,
        start: int = 0,
        limit: int = 0,
        recursive: bool = False,
        sort_reverse: bool = False,
    ) -> dict[str, str]:
        """
        List sub-containers of a folder, in tree order (name sorted).

        `recursive` flattens the subtree depth-first, parents first. `start`
        skips entries and `limit` caps them (0 is unlimited).
        """
        if not validate(identifier):
            return {}
        scheme, remote_id = decode(identifier)
        if not is_container_scheme(scheme) or scheme == SCHEME_ALBUM:
            return {}
        repository = self._repository_or_none()
        if repository is None:
            return {}

        sort_direction = SORT_DIRECTION_DESC if sort_reverse else SORT_DIRECTION_ASC
        tree = repository.get_folder_identifier_tree(SORT_BY_NAME, sort_direction)
        node = tree.root
        if remote_id != ROOT_FOLDER:
            try:
                folder = repository.get_folder_details(scheme, remote_id)
            except NotFoundError:
                return {}
            if not folder.id_path:
                return {}
            found = tree.find(_tree_path(folder.id_path, folder.scheme or scheme))
            if found is None:
                return {}
            node = found

        if recursive:
            identifiers = tree.flatten(node)
        else:
            identifiers = [child.identifier for child in node.children]

        if start > 0:
            identifiers = identifiers[start:]
        if limit > 0:
            identifiers = identifiers[:limit]
        return {i: i for i in identifiers}

    def count_files_in_folder(self, identifier: str, recursive: bool = False) -> int:
        if not validate(identifier):
            return 0
        scheme, remote_id = decode(identifier)
        if scheme != SCHEME_ALBUM or remote_id == ROOT_FOLDER:
            return 0
        repository = self._repository_or_none()
        if repository is None:
            return 0
        try:
            return repository.count_files_in_folder(remote_id)
        except NotFoundError:
            return 0

    def count_folders_in_folder(self, identifier: str, recursive: bool = False) -> int:
        return len(self.get_folders_in_folder(identifier, 0, 0, recursive))

    # ----------------------------
    # Bytes
    # ----------------------------
    def get_file_for_local_processing(self, identifier: str, writable: bool = True) -> str:
        """
        Download the asset and return the local path.

        The file is removed when the driver is closed. `writable` is ignored:
        the copy is never written back.
        """
        path = self._require_repository().get_file_for_local_processing(identifier)
        return self._transient_files.register(path)

    def open_local_copy(self, identifier: str) -> LocalCopy:
        """Download the asset into a `LocalCopy` that is deleted on close."""
        return self._require_repository().open_local_copy(identifier)

    def get_file_contents(self, identifier: str) -> bytes:
        repository = self._require_repository()
        url = self.get_public_url(identifier)
        if not url:
            return b""
        return repository.get_url_contents(url)

    # ----------------------------
    # Internals
    # ----------------------------
    def _build_root_identifier(self) -> str:
        scheme = self._config.root_folder_scheme or SCHEME_FOLDER
        remote_id = self._config.root_folder_id
        if is_container_scheme(scheme) and remote_id:
            return encode(scheme, remote_id)
        return root_identifier()

    def _build_mdc_url_generator(self, repository: Any) -> MdcUrlGenerator:
        return MdcUrlGenerator(repository, master_image_size=self._config.master_image_size)

    def _repository_or_none(self) -> Any:
        if not self._config.is_valid or self.initialization_error is not None:
            return None
        return self._repository

    def _require_repository(self) -> Any:
        repository = self._repository_or_none()
        if repository is None:
            raise InvalidConfigurationError(
                "Canto storage is not configured or failed to authorize",
                details={
                    "storage_id": self._config.storage_id,
                    "problems": self._config.problems(),
                },
                cause=self.initialization_error,
            )
        return repository

    def _absent(self, identifier: str, exc: CantoFalError) -> bool:
        if not isinstance(exc, NotFoundError):
            logger.warning(f"Treating {identifier} as missing after Canto error: {exc}")
        return False

    def _canonicalize_file_identifier(self, identifier: str) -> str:
        return identifier

    def _canonicalize_folder_identifier(self, identifier: str) -> str:
        return identifier


def _tree_path(id_path: Sequence[str], own_scheme: str) -> list[str]:
    """Combined identifiers for an id path; only the last segment keeps its own scheme."""
    if not id_path:
        return []
    ancestors = [encode(SCHEME_FOLDER, segment) for segment in id_path[:-1]]
    return ancestors + [encode(own_scheme, id_path[-1])]
