from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .constants import (
    AUTO_FILLED_KEY,
    ENV_KEEP_STRING_NEWLINES,
    ENV_KEYWORD_MODE,
    ENV_WRAP_BARE_MEMBERS,
)


class ParseState(str, Enum):
    VALUE_START = "value_start"
    OBJECT_AWAITING_KEY_OR_CLOSE = "object_awaiting_key_or_close"
    OBJECT_KEY = "object_key"
    OBJECT_KEY_END = "object_key_end"
    STRING_VALUE = "string_value"
    NUMBER_VALUE = "number_value"
    KEYWORD_VALUE = "keyword_value"
    VALUE_END = "value_end"


class KeywordMode(str, Enum):
    FIRST_LETTER = "first-letter"
    PREFIX = "prefix"

    @classmethod
    def parse(cls, value: str | None) -> "KeywordMode":
        v = (value or "first-letter").strip().lower().replace("_", "-")
        if v in {"first-letter", "first", "lax", ""}:
            return cls.FIRST_LETTER
        if v in {"prefix", "strict"}:
            return cls.PREFIX
        raise ValueError(f"Invalid keyword mode: {value}")


@dataclass(frozen=True)
class RepairOptions:
    keyword_mode: KeywordMode = KeywordMode.FIRST_LETTER
    string_escapes: bool = True
    keep_string_newlines: bool = False
    wrap_bare_members: bool = False
    auto_filled_key: str = AUTO_FILLED_KEY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RepairOptions":
        env = os.environ if environ is None else environ
        return cls(
            keyword_mode=KeywordMode.parse(env.get(ENV_KEYWORD_MODE)),
            keep_string_newlines=_env_flag(env.get(ENV_KEEP_STRING_NEWLINES)),
            wrap_bare_members=_env_flag(env.get(ENV_WRAP_BARE_MEMBERS)),
        )


@dataclass(frozen=True)
class RepairedDocument:
    source: str
    repaired: str
    rendered: str
    source_was_valid: bool


def _env_flag(raw: str | None) -> bool:
    v = (raw or "").strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"Invalid boolean flag value: {raw}")
