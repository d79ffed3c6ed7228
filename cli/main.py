"""
courseids CLI

Command-line access to the deterministic ID generator. Every command prints
one JSON document on stdout; failures print a JSON error object on stderr.

High-level overview of commands:

  Hashing
  -------
  - hash "<text>"
      48-bit hash of the UTF-8 text as 12 lowercase hex characters.

  - timestamp "<value>"
      Canonical timestamp form used inside hash inputs
      (e.g. 2025-09-01 -> 2025-09-01T00:00:00.000Z).

  Entity IDs
  ----------
  - course | topic-or-week | item | learning-objective | upload-content |
    global-user | course-user | chat | message | flag | assistant-prompt
      One sub-command per entity kind; flags are the entity's identifying
      fields, e.g.
        courseids item --title "Entropy Laws" --division-title Thermodynamics \
                       --course-name CHBE241 --created-at 2025-09-03T00:00:00Z

  - batch --path records.jsonl [--fail-fast]
      Derive IDs for many records ({"kind": ..., "fields": {...}} per line).

  Course codes
  ------------
  - code --course-name NAME --created-at TS
      6-character join code.

  - allocate-code --course-name NAME --created-at TS [--taken CODE ...]
      Retry with nudged timestamps until the code is not in --taken.

  - check-code CODE
      Validate join-code format (6 uppercase letters/digits).

Exit codes: 0 ok, 2 invalid input, 1 any other failure.

Environment:
- `.env` is loaded at startup; see courseids.config for the variables.
"""

from __future__ import annotations

# --- LOAD .env EARLY ----------------------------------------------------------
from pathlib import Path as _PathLike

try:
    from dotenv import load_dotenv  # type: ignore
    load_dotenv(dotenv_path=_PathLike(__file__).resolve().parents[1] / ".env", override=False)
except ImportError:
    pass
# -----------------------------------------------------------------------------


import argparse
import json
import sys
from typing import Any, Dict, Optional

from courseids.config import load_config
from courseids.entities.schema import EntityKind, ID_FIELDS
from courseids.entities.validation import validate_entity_fields
from courseids.errors import InvalidInput
from courseids.hashing import hash48_hex
from courseids.ids.batch import derive_ids_from_jsonl
from courseids.ids.compose import derive_id
from courseids.ids.course_code import allocate_course_code, course_code, is_valid_course_code
from courseids.utils.timestamps import canonical_timestamp


# -----------------------------------------------------------------------------
# Small helpers
# -----------------------------------------------------------------------------

def _emit(payload: Dict[str, Any]) -> None:
    indent = load_config().json_indent or None
    print(json.dumps(payload, ensure_ascii=False, indent=indent))


def _fail(action: str, e: Exception) -> int:
    """Print a machine-readable error and map it to an exit code."""
    err: Dict[str, Any] = {"action": action, "error": str(e)}
    if isinstance(e, InvalidInput):
        err["field"] = e.field
        print(json.dumps(err, ensure_ascii=False), file=sys.stderr)
        return 2
    print(json.dumps(err, ensure_ascii=False), file=sys.stderr)
    return 1


def _flag(field: str) -> str:
    return "--" + field.replace("_", "-")


def _command(kind: EntityKind) -> str:
    return kind.value.replace("_", "-")


# -----------------------------------------------------------------------------
# Command implementations
# -----------------------------------------------------------------------------

def cmd_hash(args: argparse.Namespace) -> int:
    _emit({"action": "hash", "input": args.text, "hash": hash48_hex(args.text)})
    return 0


def cmd_timestamp(args: argparse.Namespace) -> int:
    try:
        ts = canonical_timestamp(args.value, "value")
    except InvalidInput as e:
        return _fail("timestamp", e)
    _emit({"action": "timestamp", "input": args.value, "canonical": ts})
    return 0


def cmd_entity(args: argparse.Namespace) -> int:
    """
    Derive the ID of one entity from its identifying flags.
    Fields are validated at this boundary (missing/blank -> exit 2).
    """
    kind: EntityKind = args.kind
    raw = {f: getattr(args, f) for f in ID_FIELDS[kind] if getattr(args, f) is not None}
    try:
        clean = validate_entity_fields(kind, raw)
        entity_id = derive_id(kind, clean)
    except Exception as e:
        return _fail(kind.value, e)
    _emit({"action": kind.value, "id": entity_id, "fields": clean})
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    path = _PathLike(args.path)
    if not path.exists():
        print(f"ERROR: file not found: {path}", file=sys.stderr)
        return 2

    fail_fast = bool(args.fail_fast) or load_config().batch_fail_fast
    try:
        results = list(derive_ids_from_jsonl(path, fail_fast=fail_fast))
    except Exception as e:
        return _fail("batch", e)

    errors = sum(1 for r in results if "error" in r)
    _emit({
        "action": "batch",
        "path": str(path),
        "derived": len(results) - errors,
        "errors": errors,
        "results": results,
    })
    return 0 if errors == 0 else 2


def cmd_code(args: argparse.Namespace) -> int:
    try:
        code = course_code(args.course_name, args.created_at)
        ts = canonical_timestamp(args.created_at)
    except Exception as e:
        return _fail("code", e)
    _emit({"action": "code", "course_name": args.course_name, "created_at": ts, "code": code})
    return 0


def cmd_allocate_code(args: argparse.Namespace) -> int:
    """
    Allocate a join code against a set of codes already in use.
    Lookup is in-memory here; services pass their own database query.
    """
    taken = {c.strip().upper() for c in (args.taken or []) if c.strip()}
    max_attempts = args.max_attempts
    if max_attempts is None:
        max_attempts = load_config().course_code_max_attempts
    try:
        alloc = allocate_course_code(
            args.course_name,
            args.created_at,
            lambda code: code in taken,
            max_attempts=int(max_attempts),
        )
    except Exception as e:
        return _fail("allocate-code", e)
    _emit({
        "action": "allocate-code",
        "course_name": args.course_name,
        "code": alloc.code,
        "created_at": alloc.created_at,
        "attempts": alloc.attempts,
        "unique": alloc.unique,
    })
    return 0 if alloc.unique else 1


def cmd_check_code(args: argparse.Namespace) -> int:
    ok = is_valid_course_code(args.code)
    _emit({"action": "check-code", "code": args.code, "valid": ok})
    return 0 if ok else 2


# -----------------------------------------------------------------------------
# Argument parser construction
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Define CLI structure, flags and handlers.
    Each subparser sets .set_defaults(func=...), which is called by main().
    """
    p = argparse.ArgumentParser(prog="courseids", description="Deterministic course entity IDs")
    sub = p.add_subparsers(dest="command", required=True)

    # --- hash ---
    ph = sub.add_parser("hash", help="Hash a string to 12 hex characters")
    ph.add_argument("text", help="Input text (use quotes)")
    ph.set_defaults(func=cmd_hash)

    # --- timestamp ---
    pt = sub.add_parser("timestamp", help="Show the canonical form of a timestamp")
    pt.add_argument("value", help="ISO-8601 date or datetime")
    pt.set_defaults(func=cmd_timestamp)

    # --- one sub-command per entity kind ---
    for kind, fields in ID_FIELDS.items():
        pe = sub.add_parser(_command(kind), help=f"Derive a {kind.value.replace('_', ' ')} ID")
        for field in fields:
            pe.add_argument(_flag(field), dest=field, type=str, help=field.replace("_", " "))
        pe.set_defaults(func=cmd_entity, kind=kind)

    # --- batch ---
    pb = sub.add_parser("batch", help="Derive IDs for a JSONL file of entity records")
    pb.add_argument("--path", required=True, help="Input JSONL path")
    pb.add_argument("--fail-fast", action="store_true", help="Stop at the first invalid record")
    pb.set_defaults(func=cmd_batch)

    # --- code ---
    pc = sub.add_parser("code", help="Course join code")
    pc.add_argument("--course-name", dest="course_name", required=True, help="Course name")
    pc.add_argument("--created-at", dest="created_at", required=True, help="Course creation timestamp")
    pc.set_defaults(func=cmd_code)

    # --- allocate-code ---
    pa = sub.add_parser("allocate-code", help="Course join code avoiding codes already in use")
    pa.add_argument("--course-name", dest="course_name", required=True, help="Course name")
    pa.add_argument("--created-at", dest="created_at", required=True, help="Course creation timestamp")
    pa.add_argument("--taken", nargs="*", help="Codes already in use")
    pa.add_argument("--max-attempts", dest="max_attempts", type=int, help="Override COURSE_CODE_MAX_ATTEMPTS")
    pa.set_defaults(func=cmd_allocate_code)

    # --- check-code ---
    pk = sub.add_parser("check-code", help="Validate a join code's format")
    pk.add_argument("code", help="Six-character code")
    pk.set_defaults(func=cmd_check_code)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
