"""
Entity kinds that receive a derived ID, and the identifying fields of each.

The tuples in ID_FIELDS list fields in hash-input order. That order is part of
the ID contract: reordering a tuple changes every ID of that kind and needs a
data migration.

Timestamp fields are named ``created_at`` throughout; everything else is a
plain string supplied by the owning service.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class EntityKind(str, Enum):
    course = "course"
    topic_or_week = "topic_or_week"
    item = "item"
    learning_objective = "learning_objective"
    upload_content = "upload_content"
    global_user = "global_user"
    course_user = "course_user"
    chat = "chat"
    message = "message"
    flag = "flag"
    assistant_prompt = "assistant_prompt"


TIMESTAMP_FIELD = "created_at"

# Keep stable: see module docstring.
ID_FIELDS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.course: ("course_name", "created_at"),
    EntityKind.topic_or_week: ("title", "course_name", "created_at"),
    EntityKind.item: ("title", "division_title", "course_name", "created_at"),
    EntityKind.learning_objective: ("objective", "item_title", "division_title", "course_name", "created_at"),
    EntityKind.upload_content: ("name", "item_title", "division_title", "course_name", "created_at"),
    EntityKind.global_user: ("puid", "name", "affiliation"),
    EntityKind.course_user: ("puid", "name", "role", "course_name"),
    EntityKind.chat: ("user_id", "course_name", "created_at"),
    EntityKind.message: ("text", "chat_id", "created_at"),
    EntityKind.flag: ("user_id", "course_name", "created_at"),
    EntityKind.assistant_prompt: ("title", "course_name", "created_at"),
}

_ALIASES = {
    "division": EntityKind.topic_or_week,
    "topic": EntityKind.topic_or_week,
    "week": EntityKind.topic_or_week,
    "objective": EntityKind.learning_objective,
    "material": EntityKind.upload_content,
    "upload": EntityKind.upload_content,
    "user": EntityKind.course_user,
    "prompt": EntityKind.assistant_prompt,
}


def normalize_kind(v: str | EntityKind) -> EntityKind:
    """
    Map a kind name (or a short alias such as 'division' or 'upload') to EntityKind.
    Raises ValueError for unknown names.
    """
    if isinstance(v, EntityKind):
        return v
    key = str(v or "").strip().lower().replace("-", "_")
    if key in _ALIASES:
        return _ALIASES[key]
    return EntityKind(key)
