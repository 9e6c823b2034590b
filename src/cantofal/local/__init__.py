"""Transient local file handling for cantofal."""

from __future__ import annotations

from .transient import LocalCopy, TransientFileRegistry, remove_quietly

__all__ = ["LocalCopy", "TransientFileRegistry", "remove_quietly"]
