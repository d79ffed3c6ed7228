from .hash48 import hash48, hash48_hex, hash_to_hex12

__all__ = [
    "hash48",
    "hash48_hex",
    "hash_to_hex12",
]
