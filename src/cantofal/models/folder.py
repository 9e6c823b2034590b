"""Folder and album models, including the explicit library tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Sequence

from cantofal.util.identifiers import encode, root_identifier
from cantofal.util.time import canto_date_to_timestamp


@dataclass(slots=True)
class FolderRecord:
    """Details of one folder or album."""

    identifier: str
    remote_id: str
    scheme: str
    name: str
    id_path: list[str] = field(default_factory=list)
    created_at: int = 0
    modified_at: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> FolderRecord:
        remote_id = str(data.get("id") or "")
        scheme = str(data.get("scheme") or "")
        id_path = str(data.get("idPath") or remote_id)
        return cls(
            identifier=encode(scheme, remote_id),
            remote_id=remote_id,
            scheme=scheme,
            name=str(data.get("name") or ""),
            id_path=[segment for segment in id_path.split("/") if segment],
            created_at=canto_date_to_timestamp(data.get("created")),
            modified_at=canto_date_to_timestamp(data.get("time")),
        )


@dataclass(slots=True)
class FolderNode:
    """A node of the library tree; `children` keeps the remote sort order."""

    identifier: str
    name: str = ""
    children: list[FolderNode] = field(default_factory=list)

    def child(self, identifier: str) -> Optional[FolderNode]:
        for node in self.children:
            if node.identifier == identifier:
                return node
        return None

    def iter_depth_first(self) -> Iterator[FolderNode]:
        """Yield all descendants, each parent before its children."""
        for node in self.children:
            yield node
            yield from node.iter_depth_first()


@dataclass(slots=True)
class FolderTree:
    """
    Snapshot of the folder/album hierarchy.

    The virtual root node carries the canonical root identifier; its children
    are the top-level containers of the library.
    """

    root: FolderNode = field(default_factory=lambda: FolderNode(root_identifier(), "root"))

    @classmethod
    def from_api(cls, results: Sequence[Mapping[str, Any]]) -> FolderTree:
        tree = cls()
        tree.root.children = [_node_from_api(item) for item in results if isinstance(item, Mapping)]
        return tree

    def find(self, path: Sequence[str]) -> Optional[FolderNode]:
        """
        Walk from the root along combined identifiers.

        Returns None when any segment is missing.
        """
        node = self.root
        for identifier in path:
            found = node.child(identifier)
            if found is None:
                return None
            node = found
        return node

    def flatten(self, node: Optional[FolderNode] = None) -> list[str]:
        """Identifiers below `node` (default: root), depth-first, parent first."""
        start = node if node is not None else self.root
        return [n.identifier for n in start.iter_depth_first()]


def _node_from_api(data: Mapping[str, Any]) -> FolderNode:
    children = data.get("children") or []
    return FolderNode(
        identifier=encode(str(data.get("scheme") or ""), str(data.get("id") or "")),
        name=str(data.get("name") or ""),
        children=[_node_from_api(c) for c in children if isinstance(c, Mapping)],
    )
