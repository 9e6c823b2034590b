"""Asset search parameters and results."""

from __future__ import annotations

from dataclasses import dataclass, field

from cantofal.util.schemes import SCHEME_DOCUMENT, SCHEME_IMAGE

from .asset import AssetRecord

APPROVAL_APPROVED: str = "approved"


@dataclass(slots=True)
class AssetSearch:
    """Keyword search over approved assets."""

    keyword: str = ""
    start: int = 0
    limit: int = 30
    schemes: list[str] = field(default_factory=lambda: [SCHEME_IMAGE, SCHEME_DOCUMENT])

    @property
    def status(self) -> str:
        # Only approved assets may be referenced by the host.
        return APPROVAL_APPROVED


@dataclass(slots=True)
class SearchResult:
    found: int
    assets: list[AssetRecord] = field(default_factory=list)
