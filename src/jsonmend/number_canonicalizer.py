from __future__ import annotations

import math
from decimal import Decimal

from .constants import MISSING_VALUE

DIGITS = frozenset("0123456789")
EXPONENT_MARKERS = frozenset("eE")
# Floats at or above this magnitude are rendered with an exponent by repr().
_INTEGRAL_FLOAT_LIMIT = 1e16


class NumberAccumulator:
    def __init__(self) -> None:
        self._chars: list[str] = []
        self.float_seen = False
        self.exponent_at: int | None = None
        self._mantissa_digits = 0
        self._exponent_digits = 0

    def start(self, ch: str) -> None:
        self.reset()
        if not self.append(ch):
            raise ValueError(f"A number cannot start with {ch!r}")

    def append(self, ch: str) -> bool:
        if ch in DIGITS:
            if self.exponent_at is None:
                self._mantissa_digits += 1
            else:
                self._exponent_digits += 1
            self._chars.append(ch)
            return True
        if ch == "-" and not self._chars:
            self._chars.append(ch)
            return True
        if ch == "." and not self.float_seen and self.exponent_at is None:
            self.float_seen = True
            self._chars.append(ch)
            return True
        if ch in EXPONENT_MARKERS and self.exponent_at is None and self._mantissa_digits:
            self.exponent_at = len(self._chars)
            self._chars.append(ch)
            return True
        if ch in {"+", "-"} and self._chars and self._chars[-1] in EXPONENT_MARKERS:
            self._chars.append(ch)
            return True
        return False

    def render(self) -> str:
        return canonicalize("".join(self._chars))

    def reset(self) -> None:
        self._chars.clear()
        self.float_seen = False
        self.exponent_at = None
        self._mantissa_digits = 0
        self._exponent_digits = 0


def canonicalize(raw: str) -> str:
    """Shortest JSON rendering of a possibly truncated number literal.

    A dangling exponent (``1e``, ``1e+``) is dropped and text without any
    digit in the mantissa is a missing value.
    """
    text = _strip_dangling_exponent(raw)
    mantissa = text.split("e")[0].split("E")[0]
    if not any(ch in DIGITS for ch in mantissa):
        return MISSING_VALUE

    if "." not in text and "e" not in text and "E" not in text:
        negative = text.startswith("-")
        digits = text.lstrip("-").lstrip("0") or "0"
        if digits == "0":
            return "0"
        return f"-{digits}" if negative else digits

    value = float(text)
    if not math.isfinite(value):
        return str(Decimal(text))
    if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(value))
    return repr(value)


def _strip_dangling_exponent(text: str) -> str:
    for marker in EXPONENT_MARKERS:
        head, sep, tail = text.partition(marker)
        if sep and not tail.lstrip("+-"):
            return head
    return text
