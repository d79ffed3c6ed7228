"""
courseids configuration loader.

- Reads environment variables and .env without failing on import.
- Provides a typed Config object with sensible defaults.
- Only tunes the tooling around ID generation (CLI, batch, allocation);
  hash and ID formulas never read configuration.

Usage:
    from courseids.config import load_config
    cfg = load_config()
    cfg.course_code_max_attempts
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _getenv_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _getenv_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return str(val).strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class Config:
    # Course code allocation
    course_code_max_attempts: int = 10

    # Batch derivation: stop at the first invalid record
    batch_fail_fast: bool = False

    # CLI output
    json_indent: int = 2

    def validate(self) -> None:
        if self.course_code_max_attempts < 1:
            raise RuntimeError("COURSE_CODE_MAX_ATTEMPTS must be >= 1.")
        if self.json_indent < 0:
            raise RuntimeError("JSON_INDENT must be >= 0.")


# Single, cached instance after first load
__CONFIG_SINGLETON: Optional[Config] = None


def load_config(reload: bool = False) -> Config:
    """
    Load configuration from environment and .env (once) with defaults.
    Use reload=True to force re-reading.
    """
    global __CONFIG_SINGLETON
    if __CONFIG_SINGLETON is not None and not reload:
        return __CONFIG_SINGLETON

    # Do not override already-set env vars.
    load_dotenv(override=False)

    cfg = Config(
        course_code_max_attempts=_getenv_int("COURSE_CODE_MAX_ATTEMPTS", 10),
        batch_fail_fast=_getenv_bool("BATCH_FAIL_FAST", False),
        json_indent=_getenv_int("JSON_INDENT", 2),
    )
    cfg.validate()

    __CONFIG_SINGLETON = cfg
    return cfg
