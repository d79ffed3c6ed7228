"""
Six-character join codes for courses.

The code is derived from the same 12-hex hash as course IDs:

    hash48_hex(course_name + "-" + ts)  ->  6 byte pairs
    each byte % 36  ->  0-9 then A-Z

256 is not a multiple of 36, so indices 0-3 are slightly more likely than the
rest. Removing that bias would change every code already handed out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from courseids.hashing import hash48_hex
from courseids.utils.text import require_field
from courseids.utils.timestamps import TimestampLike, canonical_timestamp, to_utc

CODE_LENGTH = 6
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_CODE_RE = re.compile(r"[A-Z0-9]{6}")


def encode_course_code(hex12: str) -> str:
    """Map a 12-character hex hash to the 6-character code alphabet."""
    pairs = [hex12[i : i + 2] for i in range(0, 2 * CODE_LENGTH, 2)]
    return "".join(ALPHABET[int(p, 16) % len(ALPHABET)] for p in pairs)


def course_code(course_name: str, created_at: TimestampLike) -> str:
    name = require_field("course_name", course_name)
    ts = canonical_timestamp(created_at, "created_at")
    return encode_course_code(hash48_hex(f"{name}-{ts}"))


def is_valid_course_code(code: str) -> bool:
    """True for exactly six uppercase letters/digits (the format accepted on course entry)."""
    return bool(code) and bool(_CODE_RE.fullmatch(code))


@dataclass(frozen=True)
class CourseCodeAllocation:
    code: str
    created_at: str
    attempts: int
    unique: bool


def allocate_course_code(
    course_name: str,
    created_at: TimestampLike,
    is_taken: Callable[[str], bool],
    *,
    max_attempts: int = 10,
) -> CourseCodeAllocation:
    """
    Find a course code not yet in use.

    ``is_taken`` is the caller's lookup (e.g. a database query). On a collision
    the timestamp is nudged forward by ``attempts`` milliseconds, so successive
    retries land at +1, +3, +6 ... ms from the original time. When every attempt
    collides the last code is returned with unique=False.

    The returned ``created_at`` is the canonical timestamp that produced the code.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    require_field("course_name", course_name)
    when: datetime = to_utc(created_at, "created_at")
    attempts = 0
    while True:
        code = course_code(course_name, when)
        if not is_taken(code):
            return CourseCodeAllocation(
                code=code,
                created_at=canonical_timestamp(when),
                attempts=attempts,
                unique=True,
            )
        attempts += 1
        if attempts >= max_attempts:
            return CourseCodeAllocation(
                code=code,
                created_at=canonical_timestamp(when),
                attempts=attempts,
                unique=False,
            )
        when = when + timedelta(milliseconds=attempts)
