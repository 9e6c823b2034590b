from .identifiers import (
    MDC_FLAG,
    ROOT_FOLDER,
    SPLIT_CHARACTER,
    decode,
    encode,
    get_remote_id,
    get_scheme,
    hash_identifier,
    is_mdc_enabled,
    is_root,
    root_identifier,
    validate,
)
from .schemes import (
    ASSET_SCHEMES,
    CONTAINER_SCHEMES,
    SCHEME_ALBUM,
    SCHEME_DOCUMENT,
    SCHEME_FOLDER,
    SCHEME_IMAGE,
    is_container_scheme,
    is_known_scheme,
)
from .time import canto_date_to_timestamp, now_timestamp, parse_canto_date

__all__ = [
    "SPLIT_CHARACTER",
    "MDC_FLAG",
    "ROOT_FOLDER",
    "encode",
    "decode",
    "get_scheme",
    "get_remote_id",
    "is_mdc_enabled",
    "is_root",
    "root_identifier",
    "validate",
    "hash_identifier",
    "SCHEME_FOLDER",
    "SCHEME_ALBUM",
    "SCHEME_IMAGE",
    "SCHEME_DOCUMENT",
    "CONTAINER_SCHEMES",
    "ASSET_SCHEMES",
    "is_container_scheme",
    "is_known_scheme",
    "now_timestamp",
    "parse_canto_date",
    "canto_date_to_timestamp",
]
