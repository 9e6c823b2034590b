"""Combined identifiers: one token carrying scheme, remote id and the MDC flag."""

from __future__ import annotations

import hashlib

from cantofal.errors import InvalidIdentifierError

from .schemes import SCHEME_FOLDER, is_known_scheme

SPLIT_CHARACTER: str = "<>"
MDC_FLAG: str = "mdc"
ROOT_FOLDER: str = "ROOT"


def encode(scheme: str, remote_id: str, mdc: bool = False) -> str:
    """Build a combined identifier such as ``image<>A1B2`` or ``image<>A1B2<>mdc``."""
    token = f"{scheme}{SPLIT_CHARACTER}{remote_id}"
    if mdc:
        token += SPLIT_CHARACTER + MDC_FLAG
    return token


def _split(token: str) -> list[str]:
    if not isinstance(token, str) or SPLIT_CHARACTER not in token:
        raise InvalidIdentifierError(
            "Combined identifier is missing the delimiter",
            details={"identifier": token},
        )
    parts = token.split(SPLIT_CHARACTER)
    if len(parts) == 3 and parts[2] != MDC_FLAG:
        raise InvalidIdentifierError(
            "Unknown combined identifier flag",
            details={"identifier": token},
        )
    if len(parts) > 3:
        raise InvalidIdentifierError(
            "Too many combined identifier segments",
            details={"identifier": token},
        )
    return parts


def decode(token: str) -> tuple[str, str]:
    """
    Split a combined identifier into ``(scheme, remote_id)``.

    Raises:
        InvalidIdentifierError: if the token is malformed.
    """
    parts = _split(token)
    scheme, remote_id = parts[0], parts[1]
    if not is_known_scheme(scheme):
        raise InvalidIdentifierError(
            "Unknown scheme in combined identifier",
            details={"identifier": token, "scheme": scheme},
        )
    if not remote_id:
        raise InvalidIdentifierError(
            "Empty remote id in combined identifier",
            details={"identifier": token},
        )
    return scheme, remote_id


def get_scheme(token: str) -> str:
    return decode(token)[0]


def get_remote_id(token: str) -> str:
    return decode(token)[1]


def is_mdc_enabled(token: str) -> bool:
    try:
        parts = _split(token)
    except InvalidIdentifierError:
        return False
    return len(parts) == 3


def validate(token: str) -> bool:
    """Return True if ``token`` decodes; never raises."""
    try:
        decode(token)
    except InvalidIdentifierError:
        return False
    return True


def is_root(token: str) -> bool:
    """True for any valid token whose remote id is the reserved root sentinel."""
    try:
        return decode(token)[1] == ROOT_FOLDER
    except InvalidIdentifierError:
        return False


def root_identifier() -> str:
    return encode(SCHEME_FOLDER, ROOT_FOLDER)


def hash_identifier(token: str) -> str:
    """sha1 over the identifier string; a stable key, not a content hash."""
    return hashlib.sha1(token.encode("utf-8")).hexdigest()
