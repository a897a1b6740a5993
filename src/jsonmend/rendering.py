from __future__ import annotations

import json
import math
import uuid
from dataclasses import dataclass

from .constants import DEFAULT_INDENT, EXCERPT_LENGTH


class RepairedJsonError(RuntimeError):
    pass


@dataclass(frozen=True)
class RawNumber:
    """A number literal that float/int cannot hold: overflowing floats and
    integers past the interpreter's digit limit. Re-emitted verbatim."""

    text: str


def ensure_valid(repaired: str) -> object:
    try:
        return _loads(repaired)
    except ValueError as exc:
        raise RepairedJsonError(f"Repaired text is not valid JSON: {exc}. Excerpt: {_excerpt(repaired)}") from exc


def is_valid_json(text: str) -> bool:
    try:
        _loads(text)
    except ValueError:
        return False
    return True


def render(repaired: str, indent: int | None = DEFAULT_INDENT) -> str:
    if not repaired:
        return ""
    node = ensure_valid(repaired)

    raw_numbers: dict[str, str] = {}
    tag = uuid.uuid4().hex

    def _placeholder(value: object) -> str:
        if not isinstance(value, RawNumber):
            raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
        key = f"{tag}:{len(raw_numbers)}"
        raw_numbers[json.dumps(key)] = value.text
        return key

    if indent is None:
        text = json.dumps(node, ensure_ascii=False, allow_nan=False, default=_placeholder, separators=(",", ":"))
    else:
        text = json.dumps(node, ensure_ascii=False, allow_nan=False, default=_placeholder, indent=indent)
    for quoted_key, number_text in raw_numbers.items():
        text = text.replace(quoted_key, number_text)
    return text


def _loads(text: str) -> object:
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float, parse_int=_parse_int)


def _parse_float(text: str) -> float | RawNumber:
    value = float(text)
    if not math.isfinite(value):
        return RawNumber(text)
    return value


def _parse_int(text: str) -> int | RawNumber:
    try:
        return int(text)
    except ValueError:
        # Past sys.get_int_max_str_digits(); still a valid JSON number.
        return RawNumber(text)


def _reject_constant(name: str) -> object:
    raise ValueError(f"non-standard constant {name}")


def _excerpt(text: str) -> str:
    compact = " ".join(text.split())
    if len(compact) <= EXCERPT_LENGTH:
        return compact
    return compact[:EXCERPT_LENGTH] + "..."
