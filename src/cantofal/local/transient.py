"""Transient local copies of remote assets."""

from __future__ import annotations

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


def remove_quietly(path: str) -> bool:
    """Delete `path` if it exists. Returns True if a file was removed."""
    if not os.path.exists(path):
        return False
    try:
        os.unlink(path)
    except OSError as e:
        logger.warning(f"Failed to remove transient file {path}: {e}")
        return False
    return True


class LocalCopy:
    """
    Handle to a downloaded temporary file.

    The file is deleted on `close()` or when leaving the `with` block,
    whichever comes first. Closing twice is harmless.
    """

    def __init__(self, path: str, identifier: str = "") -> None:
        self.path = path
        self.identifier = identifier
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        remove_quietly(self.path)

    def __enter__(self) -> LocalCopy:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def __fspath__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"LocalCopy(path={self.path!r}, identifier={self.identifier!r})"


class TransientFileRegistry:
    """Paths handed out for local processing, removed in one sweep at teardown."""

    def __init__(self) -> None:
        self._paths: list[str] = []

    def register(self, path: str) -> str:
        if path not in self._paths:
            self._paths.append(path)
        return path

    def paths(self) -> list[str]:
        return list(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def sweep(self) -> int:
        """Delete every registered file still on disk; returns the number removed."""
        removed = 0
        paths, self._paths = self._paths, []
        for path in paths:
            if remove_quietly(path):
                removed += 1
        if removed:
            logger.debug(f"Removed {removed} transient file(s)")
        return removed
