from .text import first_words, require_field
from .timestamps import canonical_timestamp, to_utc, TimestampLike

__all__ = [
    "first_words",
    "require_field",
    "canonical_timestamp",
    "to_utc",
    "TimestampLike",
]
