"""
48-bit non-cryptographic hash used for every entity ID.

Two independent 32-bit lanes are fed the UTF-8 bytes of the input:

  lane 1 (murmur-style finaliser)  seed 0x9e3779b9
  lane 2 (golden-ratio offset)     seed 0x85ebca6b

The result is (low 16 bits of lane 2) << 32 | lane 1, rendered as 12 lowercase
hex characters. Only 16 bits of lane 2 survive; widening it would change every
ID already issued.

Not suitable for anything security related.
"""

from __future__ import annotations

MASK32 = 0xFFFFFFFF

SEED_LANE1 = 0x9E3779B9
SEED_LANE2 = 0x85EBCA6B


def _mix_lane1(h: int, b: int) -> int:
    h ^= b
    h = (h * 0x85EBCA6B) & MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK32
    h ^= h >> 16
    return h


def _mix_lane2(h: int, b: int) -> int:
    x = h ^ ((b + 0x9E3779B9) & MASK32)
    x = (x * 0x27D4EB2D) & MASK32
    x ^= x >> 15
    x = (x * 0x165667B1) & MASK32
    x ^= x >> 17
    return x


def _utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates become U+FFFD, paired ones are combined
        return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


def hash48(text: str) -> int:
    """Return the 48-bit hash value of ``text`` as an unsigned int."""
    h1 = SEED_LANE1
    h2 = SEED_LANE2
    for b in _utf8(text):
        h1 = _mix_lane1(h1, b)
        h2 = _mix_lane2(h2, b)
    return ((h2 & 0xFFFF) << 32) | h1


def hash48_hex(text: str) -> str:
    """
    Hash ``text`` to a 12-character lowercase hex string.

    Deterministic and total: the empty string yields the seeds unchanged
    ("ca6b9e3779b9"), and non-ASCII text is hashed by its UTF-8 bytes.
    """
    return format(hash48(text), "012x")


# Name used by callers of the original generator.
hash_to_hex12 = hash48_hex
