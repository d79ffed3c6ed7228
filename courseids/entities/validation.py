"""
Pydantic-based validation of entity records (CLI / batch boundary).

Goals
- Reject unknown fields so a typo never silently drops part of the hash input.
- Reject missing, empty and blank identifying fields.
- Canonicalise 'created_at' (datetime, date or ISO string) to the ID timestamp form.
- Leave every other value byte-for-byte as given; trimming would change IDs.

Usage
- validate_entity_fields(kind, raw: dict) -> dict
  Returns a clean dict suitable for courseids.ids.derive_id(kind, ...).
  Raises InvalidInput naming the first offending field.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from courseids.entities.schema import EntityKind, TIMESTAMP_FIELD, normalize_kind
from courseids.errors import InvalidInput
from courseids.utils.timestamps import canonical_timestamp


class _EntityInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @field_validator("*", mode="before")
    @classmethod
    def _check_value(cls, v: Any, info: ValidationInfo):
        if info.field_name == TIMESTAMP_FIELD:
            return canonical_timestamp(v, TIMESTAMP_FIELD)
        if isinstance(v, str) and not v.strip():
            raise ValueError(f"field '{info.field_name}' is empty")
        return v


# ---- models ----

class CourseInput(_EntityInput):
    course_name: str
    created_at: str


class TopicOrWeekInput(_EntityInput):
    title: str
    course_name: str
    created_at: str


class ItemInput(_EntityInput):
    title: str
    division_title: str
    course_name: str
    created_at: str


class LearningObjectiveInput(_EntityInput):
    objective: str
    item_title: str
    division_title: str
    course_name: str
    created_at: str


class UploadContentInput(_EntityInput):
    name: str
    item_title: str
    division_title: str
    course_name: str
    created_at: str


class GlobalUserInput(_EntityInput):
    puid: str
    name: str
    affiliation: str


class CourseUserInput(_EntityInput):
    puid: str
    name: str
    role: str
    course_name: str


class ChatInput(_EntityInput):
    user_id: str
    course_name: str
    created_at: str


class MessageInput(_EntityInput):
    text: str
    chat_id: str
    created_at: str


class FlagInput(_EntityInput):
    user_id: str
    course_name: str
    created_at: str


class AssistantPromptInput(_EntityInput):
    title: str
    course_name: str
    created_at: str


INPUT_MODELS: Dict[EntityKind, Type[_EntityInput]] = {
    EntityKind.course: CourseInput,
    EntityKind.topic_or_week: TopicOrWeekInput,
    EntityKind.item: ItemInput,
    EntityKind.learning_objective: LearningObjectiveInput,
    EntityKind.upload_content: UploadContentInput,
    EntityKind.global_user: GlobalUserInput,
    EntityKind.course_user: CourseUserInput,
    EntityKind.chat: ChatInput,
    EntityKind.message: MessageInput,
    EntityKind.flag: FlagInput,
    EntityKind.assistant_prompt: AssistantPromptInput,
}


def validate_entity_fields(kind: str | EntityKind, raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate ``raw`` against the model for ``kind``.

    - unknown kind            -> InvalidInput('kind')
    - raw not a mapping       -> InvalidInput('fields')
    - missing / blank / extra -> InvalidInput(<field>)
    """
    try:
        k = normalize_kind(kind)
    except ValueError as e:
        raise InvalidInput("kind", f"unknown entity kind {kind!r}") from e

    if not isinstance(raw, Mapping):
        raise InvalidInput("fields", "entity fields must be an object")

    model = INPUT_MODELS[k]
    try:
        return model(**dict(raw)).model_dump()
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc") or ("fields",)
        field = str(loc[0])
        raise InvalidInput(field, f"{k.value}.{field}: {first.get('msg')}") from e
