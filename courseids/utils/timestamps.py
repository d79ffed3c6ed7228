"""
Canonical timestamp rendering for ID inputs.

Every timestamp is serialised to UTC with millisecond precision:

    2025-09-01T00:00:00.000Z

Older data was hashed with date-only timestamps (YYYY-MM-DD). That scheme is
not reproduced here; IDs generated under it will not match.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Union

from pydantic import TypeAdapter, ValidationError

from courseids.errors import InvalidInput

TimestampLike = Union[datetime, date, str]

_DATETIME = TypeAdapter(datetime)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _parse_iso(value: str, field: str) -> datetime:
    s = value.strip()
    if not s:
        raise InvalidInput(field)
    # extended-format dates only; bare numbers would be read as unix epochs
    if not _ISO_DATE_RE.match(s):
        raise InvalidInput(field, f"invalid ISO-8601 timestamp for '{field}': {value!r}")
    if s[-1] in ("Z", "z"):
        s = s[:-1] + "+00:00"
    try:
        return _DATETIME.validate_python(s)
    except ValidationError as e:
        raise InvalidInput(field, f"invalid ISO-8601 timestamp for '{field}': {value!r}") from e


def to_utc(value: TimestampLike, field: str = "created_at") -> datetime:
    """
    Coerce ``value`` to an aware UTC datetime.
    Naive datetimes are taken to already be UTC; bare dates become midnight UTC.
    """
    if value is None:
        raise InvalidInput(field)
    if isinstance(value, str):
        dt = _parse_iso(value, field)
    elif isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        raise InvalidInput(field, f"unsupported timestamp type for '{field}': {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def canonical_timestamp(value: TimestampLike, field: str = "created_at") -> str:
    """Render ``value`` as YYYY-MM-DDTHH:MM:SS.mmmZ (sub-millisecond digits are truncated)."""
    dt = to_utc(value, field)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )
