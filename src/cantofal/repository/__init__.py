"""Repository exports for cantofal."""

from __future__ import annotations

from .canto_repository import CantoRepository

__all__ = ["CantoRepository"]
