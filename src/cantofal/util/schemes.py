from __future__ import annotations

SCHEME_FOLDER: str = "folder"
SCHEME_ALBUM: str = "album"
SCHEME_IMAGE: str = "image"
SCHEME_VIDEO: str = "video"
SCHEME_AUDIO: str = "audio"
SCHEME_DOCUMENT: str = "document"
SCHEME_PRESENTATION: str = "presentation"
SCHEME_OTHER: str = "other"

CONTAINER_SCHEMES: frozenset[str] = frozenset({SCHEME_FOLDER, SCHEME_ALBUM})

ASSET_SCHEMES: frozenset[str] = frozenset(
    {
        SCHEME_IMAGE,
        SCHEME_VIDEO,
        SCHEME_AUDIO,
        SCHEME_DOCUMENT,
        SCHEME_PRESENTATION,
        SCHEME_OTHER,
    }
)

KNOWN_SCHEMES: frozenset[str] = CONTAINER_SCHEMES | ASSET_SCHEMES


def is_container_scheme(scheme: str) -> bool:
    """Folders and albums are containers; everything else is an asset."""
    return scheme in CONTAINER_SCHEMES


def is_known_scheme(scheme: str) -> bool:
    return scheme in KNOWN_SCHEMES
