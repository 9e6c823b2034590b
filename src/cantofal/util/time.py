from __future__ import annotations

import time
from datetime import datetime, timezone

# Canto reports dates as yyyyMMddHHmmssSSS, e.g. 20210315093012345.
_CANTO_DATE_FORMAT: str = "%Y%m%d%H%M%S"


def now_timestamp() -> int:
    """Return the current unix timestamp in whole seconds."""
    return int(time.time())


def parse_canto_date(value: str | int | None) -> datetime | None:
    """
    Parse a Canto date string into a tz-aware UTC datetime.

    Accepts the full millisecond form as well as the bare seconds form.
    Returns None for empty values.

    Raises:
        ValueError: if the value is not a Canto date.
    """
    if value is None or value == "":
        return None
    s = str(value).strip()
    if not s.isdigit() or len(s) < 14:
        raise ValueError(f"Not a Canto date: {value!r}")

    dt = datetime.strptime(s[:14], _CANTO_DATE_FORMAT)
    millis = s[14:17]
    if millis:
        dt = dt.replace(microsecond=int(millis.ljust(3, "0")) * 1000)
    return dt.replace(tzinfo=timezone.utc)


def canto_date_to_timestamp(value: str | int | None) -> int:
    """Convert a Canto date to a unix timestamp; 0 when missing or unparsable."""
    try:
        dt = parse_canto_date(value)
    except ValueError:
        return 0
    if dt is None:
        return 0
    return int(dt.timestamp())
