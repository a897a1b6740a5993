from __future__ import annotations

from .constants import ARRAY_CLOSER, OBJECT_CLOSER, STRING_TERMINATOR


class ContainerStack:
    """Pending closers, innermost last.

    Brackets and the string terminator share one stack so that "inside a
    string" is a top-of-stack check.
    """

    def __init__(self) -> None:
        self._closers: list[str] = []

    def __bool__(self) -> bool:
        return bool(self._closers)

    def top(self) -> str | None:
        return self._closers[-1] if self._closers else None

    def push(self, closer: str) -> None:
        if closer not in {OBJECT_CLOSER, ARRAY_CLOSER, STRING_TERMINATOR}:
            raise ValueError(f"Unknown closer: {closer!r}")
        self._closers.append(closer)

    def pop(self) -> str:
        return self._closers.pop()

    def open_string(self) -> None:
        self.push(STRING_TERMINATOR)

    def in_string(self) -> bool:
        return self.top() == STRING_TERMINATOR

    def in_object(self) -> bool:
        return self.top() == OBJECT_CLOSER

    def matches(self, ch: str) -> bool:
        return ch in {OBJECT_CLOSER, ARRAY_CLOSER} and self.top() == ch
