"""Public auth exports for cantofal."""

from __future__ import annotations

from .config import CantoConfig
from .oauth_client import CantoCredentials, OAuthClient

__all__ = ["CantoConfig", "CantoCredentials", "OAuthClient"]
