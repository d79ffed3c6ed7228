"""
Derive IDs for a JSONL file of entity records.

Each non-blank line is one JSON object:

    {"kind": "item", "fields": {"title": "...", "division_title": "...",
                                "course_name": "...", "created_at": "..."}}

Output records (one per input line):
    {"line": 3, "kind": "item", "id": "34950ca18cb3"}
    {"line": 4, "kind": "chat", "error": "...", "field": "user_id"}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator

from courseids.entities.schema import normalize_kind
from courseids.entities.validation import validate_entity_fields
from courseids.errors import InvalidInput
from courseids.ids.compose import derive_id


def derive_record_id(record: Dict[str, Any]) -> Dict[str, Any]:
    """Validate one {"kind", "fields"} record and return {"kind", "id"}."""
    if not isinstance(record, dict):
        raise InvalidInput("record", "record must be a JSON object")
    kind_raw = record.get("kind")
    try:
        kind = normalize_kind(kind_raw)
    except ValueError as e:
        raise InvalidInput("kind", f"unknown entity kind {kind_raw!r}") from e
    clean = validate_entity_fields(kind, record.get("fields") or {})
    return {"kind": kind.value, "id": derive_id(kind, clean)}


def derive_ids_from_jsonl(path: str | Path, *, fail_fast: bool = False) -> Iterator[Dict[str, Any]]:
    """
    Yield one result per record in ``path``.
    With fail_fast=True the first invalid record raises InvalidInput instead.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            kind_hint = None
            try:
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise InvalidInput("record", f"line {lineno}: invalid JSON ({e.msg})") from e
                if isinstance(record, dict):
                    kind_hint = record.get("kind")
                out = derive_record_id(record)
            except InvalidInput as e:
                if fail_fast:
                    raise
                yield {"line": lineno, "kind": kind_hint, "error": str(e), "field": e.field}
                continue
            yield {"line": lineno, **out}
