"""
Error types raised by the ID generator.

Only one category exists: a required identifying field was missing or empty.
The hash itself is total over any string, so nothing else can fail.
"""

from __future__ import annotations

from typing import Optional


class InvalidInput(ValueError):
    """A required identifying field (title, name, parent context or timestamp) is absent or empty."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"missing required field '{field}'")
