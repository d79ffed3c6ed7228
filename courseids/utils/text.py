"""
Small string helpers shared by the ID composers.
"""

from __future__ import annotations

import re
from typing import Optional

from courseids.errors import InvalidInput

_WS_RE = re.compile(r"\s+")


def require_field(field: str, value: Optional[str]) -> str:
    """
    Return ``value`` untouched if it is a non-blank string, else raise InvalidInput.
    Values are never trimmed: the hash input must be exactly what the caller stored.
    """
    if value is None:
        raise InvalidInput(field)
    if not isinstance(value, str):
        raise InvalidInput(field, f"field '{field}' must be a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidInput(field, f"field '{field}' is empty")
    return value


def first_words(text: str, n: int = 10) -> str:
    """
    First ``n`` whitespace-delimited words of ``text`` joined by single spaces.
    Leading and trailing whitespace is dropped and inner runs collapse, so
    "hi " and "hi" give the same result. Shorter texts are returned whole.
    """
    if not text:
        return ""
    words = _WS_RE.split(text.strip())
    return " ".join(words[:n])
