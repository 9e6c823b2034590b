"""Query parameter values understood by the Canto API."""

from __future__ import annotations

SORT_BY_TIME: str = "time"
SORT_BY_NAME: str = "name"
SORT_BY_SCHEME: str = "scheme"
SORT_BY_SIZE: str = "size"

SORT_DIRECTION_ASC: str = "ascending"
SORT_DIRECTION_DESC: str = "descending"

# Album listings return at most this many assets per request.
MAX_PAGE_SIZE: int = 1000

# layer=-1 asks the tree endpoint for the whole hierarchy.
TREE_ALL_LAYERS: int = -1
