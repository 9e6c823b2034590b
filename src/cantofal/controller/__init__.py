"""Internal controller exports for cantofal."""

from __future__ import annotations

from .canto_controller import CantoController

__all__ = ["CantoController"]
