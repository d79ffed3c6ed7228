from .schema import EntityKind, ID_FIELDS, TIMESTAMP_FIELD, normalize_kind

__all__ = [
    "EntityKind",
    "ID_FIELDS",
    "TIMESTAMP_FIELD",
    "normalize_kind",
]
