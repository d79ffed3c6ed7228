"""
Deterministic IDs for every entity in the course hierarchy.

Each function joins the entity's identifying fields (and its ancestors'
titles) with "-" in a fixed order and hashes the result with hash48_hex:

    course            course_name-ts
    topic/week        title-course_name-ts
    item              title-division_title-course_name-ts
    objective         objective-item_title-division_title-course_name-ts
    upload            name-item_title-division_title-course_name-ts
    global user       puid-name-affiliation
    course user       puid-name-role-course_name
    chat              user_id-course_name-ts
    message           first_10_words-chat_id-ts
    flag              flag_user_id-course_name-ts
    assistant prompt  title-course_name-ts

``ts`` is the canonical UTC timestamp (see courseids.utils.timestamps).
Parent titles keep same-titled children of different parents apart.

All functions are pure; they raise InvalidInput when a required field is
None, empty or blank, and never hash a partial string.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from courseids.entities.schema import EntityKind, ID_FIELDS, TIMESTAMP_FIELD, normalize_kind
from courseids.errors import InvalidInput
from courseids.hashing import hash48_hex
from courseids.utils.text import first_words, require_field
from courseids.utils.timestamps import TimestampLike, canonical_timestamp

DELIMITER = "-"
MESSAGE_WORDS = 10
FLAG_PREFIX = "flag_"


def _join(*pairs: Tuple[str, Any]) -> str:
    parts = []
    for field, value in pairs:
        if field == TIMESTAMP_FIELD:
            parts.append(canonical_timestamp(value, field))
        else:
            parts.append(require_field(field, value))
    return DELIMITER.join(parts)


def course_id(course_name: str, created_at: TimestampLike) -> str:
    return hash48_hex(_join(("course_name", course_name), ("created_at", created_at)))


def topic_or_week_id(title: str, course_name: str, created_at: TimestampLike) -> str:
    return hash48_hex(_join(
        ("title", title),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


division_id = topic_or_week_id


def item_id(title: str, division_title: str, course_name: str, created_at: TimestampLike) -> str:
    return hash48_hex(_join(
        ("title", title),
        ("division_title", division_title),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


def learning_objective_id(
    objective: str,
    item_title: str,
    division_title: str,
    course_name: str,
    created_at: TimestampLike,
) -> str:
    return hash48_hex(_join(
        ("objective", objective),
        ("item_title", item_title),
        ("division_title", division_title),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


def upload_content_id(
    name: str,
    item_title: str,
    division_title: str,
    course_name: str,
    created_at: TimestampLike,
) -> str:
    return hash48_hex(_join(
        ("name", name),
        ("item_title", item_title),
        ("division_title", division_title),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


def global_user_id(puid: str, name: str, affiliation: str) -> str:
    """Platform-wide user ID; no timestamp so the same person always maps to the same ID."""
    return hash48_hex(_join(("puid", puid), ("name", name), ("affiliation", affiliation)))


def course_user_id(puid: str, name: str, role: str, course_name: str) -> str:
    """ID of a user's enrolment record inside one course."""
    return hash48_hex(_join(
        ("puid", puid),
        ("name", name),
        ("role", role),
        ("course_name", course_name),
    ))


def chat_id(user_id: str, course_name: str, created_at: TimestampLike) -> str:
    return hash48_hex(_join(
        ("user_id", user_id),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


def message_id(text: str, chat_id: str, created_at: TimestampLike) -> str:
    """
    Only the first MESSAGE_WORDS words of the message body go into the hash;
    chat ID and timestamp carry the rest of the uniqueness.
    """
    require_field("text", text)
    return hash48_hex(_join(
        ("text", first_words(text, MESSAGE_WORDS)),
        ("chat_id", chat_id),
        ("created_at", created_at),
    ))


def flag_id(user_id: str, course_name: str, created_at: TimestampLike) -> str:
    """
    Flag (report) ID. The flagged content is not part of the input; the
    excerpt-based variant is incompatible and not produced here.
    """
    return hash48_hex(FLAG_PREFIX + _join(
        ("user_id", user_id),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


def assistant_prompt_id(title: str, course_name: str, created_at: TimestampLike) -> str:
    return hash48_hex(_join(
        ("title", title),
        ("course_name", course_name),
        ("created_at", created_at),
    ))


ID_BUILDERS: Dict[EntityKind, Callable[..., str]] = {
    EntityKind.course: course_id,
    EntityKind.topic_or_week: topic_or_week_id,
    EntityKind.item: item_id,
    EntityKind.learning_objective: learning_objective_id,
    EntityKind.upload_content: upload_content_id,
    EntityKind.global_user: global_user_id,
    EntityKind.course_user: course_user_id,
    EntityKind.chat: chat_id,
    EntityKind.message: message_id,
    EntityKind.flag: flag_id,
    EntityKind.assistant_prompt: assistant_prompt_id,
}


def derive_id(kind: str | EntityKind, fields: Mapping[str, Any], *, strict: bool = True) -> str:
    """
    Dispatch to the ID function for ``kind`` using the named ``fields``.

    - kind may be an EntityKind, its value, or a short alias ('division', 'upload', ...)
    - missing fields raise InvalidInput for the first missing name, in hash order
    - with strict=True, fields outside ID_FIELDS[kind] are rejected
    """
    try:
        k = normalize_kind(kind)
    except ValueError as e:
        raise InvalidInput("kind", f"unknown entity kind {kind!r}") from e

    if not isinstance(fields, Mapping):
        raise InvalidInput("fields", "entity fields must be a mapping")

    names = ID_FIELDS[k]
    if strict:
        extra = sorted(set(fields) - set(names))
        if extra:
            raise InvalidInput(extra[0], f"unexpected field '{extra[0]}' for kind '{k.value}'")

    kwargs: Dict[str, Optional[Any]] = {name: fields.get(name) for name in names}
    return ID_BUILDERS[k](**kwargs)
