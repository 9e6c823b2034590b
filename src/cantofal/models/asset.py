"""Data model for Canto assets."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from cantofal.util.identifiers import encode
from cantofal.util.time import canto_date_to_timestamp


@dataclass(slots=True)
class AssetRecord:
    """
    A remote asset as reported by the DAM.

    Notes:
        - `identifier` is the combined identifier (with the MDC flag when the
          record was fetched for MDC use).
        - `related_folder_identifiers` lists the albums the asset belongs to.
        - `raw` keeps the untouched remote payload.
    """

    identifier: str
    remote_id: str
    scheme: str
    name: str

    size: int = 0
    mime_type: str = ""
    created_at: int = 0
    modified_at: int = 0
    uploaded_at: int = 0
    width: int = 0
    height: int = 0
    related_folder_identifiers: list[str] = field(default_factory=list)
    direct_url: Optional[str] = None
    mdc_eligible: bool = False
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.name)[1].lstrip(".")

    @classmethod
    def from_api(cls, data: Mapping[str, Any], *, use_mdc: bool = False) -> AssetRecord:
        """Build a record from an asset payload of the Canto API."""
        remote_id = _as_str(data.get("id"))
        scheme = _as_str(data.get("scheme"))
        default = data.get("default")
        if not isinstance(default, Mapping):
            default = {}

        url = data.get("url")
        direct_url = None
        if isinstance(url, Mapping):
            value = url.get("directUrlOriginal")
            direct_url = value if isinstance(value, str) and value else None

        related: list[str] = []
        for album in data.get("relatedAlbums") or []:
            if isinstance(album, Mapping) and album.get("id") and album.get("scheme"):
                related.append(encode(_as_str(album["scheme"]), _as_str(album["id"])))

        return cls(
            identifier=encode(scheme, remote_id, mdc=use_mdc),
            remote_id=remote_id,
            scheme=scheme,
            name=_as_str(data.get("name")),
            size=_as_int(default.get("Size", data.get("size"))),
            mime_type=_as_str(default.get("Content Type")),
            created_at=canto_date_to_timestamp(default.get("Date Created") or data.get("created")),
            modified_at=canto_date_to_timestamp(default.get("Date modified") or data.get("time")),
            uploaded_at=canto_date_to_timestamp(default.get("Date uploaded")),
            width=_as_int(data.get("width")),
            height=_as_int(data.get("height")),
            related_folder_identifiers=related,
            direct_url=direct_url,
            mdc_eligible=use_mdc,
            raw=dict(data),
        )


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if s.isdigit():
            return int(s)
        try:
            return int(float(s))
        except ValueError:
            return 0
    return 0
