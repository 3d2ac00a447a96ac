"""Date normalization for outgoing date properties.

Policy, applied the same way on parse and format:
- date-only strings are civil dates; no zone conversion happens.
- timestamps without an offset are wall-clock UTC.
- timestamps with an offset (or ``Z``) are converted to UTC.

A string counts as a timestamp iff it contains ``:``.
"""

from datetime import date, datetime, timezone

from sheetsync.core.errors import ShapeError

DATE_FORMATS = ["%Y-%m-%d", "%Y/%m/%d"]
DATETIME_FORMATS = [
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
]


def _parse_date(s: str) -> date:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise ShapeError(f"cannot parse date {s!r}") from None


def _parse_datetime(s: str) -> datetime:
    for fmt in DATETIME_FORMATS:
        try:
            return datetime.strptime(s, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        raise ShapeError(f"cannot parse timestamp {s!r}") from None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def normalize_date(value: str) -> str:
    """Re-emit a date string as ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM:SSZ``."""
    if not isinstance(value, str):
        raise ShapeError(f"date should be a string but {type(value).__name__}")
    s = value.strip()
    if ":" in s:
        return _parse_datetime(s).strftime("%Y-%m-%dT%H:%M:%SZ")
    return _parse_date(s).strftime("%Y-%m-%d")
