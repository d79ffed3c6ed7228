"""
courseids: deterministic hierarchical IDs for course content.

Public API:
    hash48_hex / hash_to_hex12      12-hex 48-bit hash of a string
    course_id, item_id, ...          per-entity IDs (see courseids.ids.compose)
    derive_id(kind, fields)          dispatch by entity kind
    course_code(name, created_at)    6-character join code
    InvalidInput                     raised for missing/empty identifying fields
"""

from .errors import InvalidInput
from .hashing import hash48_hex, hash_to_hex12
from .entities import EntityKind, ID_FIELDS
from .ids import (
    allocate_course_code,
    assistant_prompt_id,
    chat_id,
    course_code,
    course_id,
    course_user_id,
    derive_id,
    division_id,
    flag_id,
    global_user_id,
    is_valid_course_code,
    item_id,
    learning_objective_id,
    message_id,
    topic_or_week_id,
    upload_content_id,
)
from .utils import canonical_timestamp

__all__ = [
    "InvalidInput",
    "hash48_hex",
    "hash_to_hex12",
    "EntityKind",
    "ID_FIELDS",
    "allocate_course_code",
    "assistant_prompt_id",
    "chat_id",
    "course_code",
    "course_id",
    "course_user_id",
    "derive_id",
    "division_id",
    "flag_id",
    "global_user_id",
    "is_valid_course_code",
    "item_id",
    "learning_objective_id",
    "message_id",
    "topic_or_week_id",
    "upload_content_id",
    "canonical_timestamp",
]
