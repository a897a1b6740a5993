from __future__ import annotations

import json


class OutputBuffer:
    def __init__(self) -> None:
        self._chars: list[str] = []

    def __len__(self) -> int:
        return len(self._chars)

    def emit(self, text: str) -> None:
        self._chars.extend(text)

    def emit_string_char(self, ch: str) -> None:
        if ch < " ":
            # json.dumps gives \n, \t, ... or \u00XX for the rest of C0
            self._chars.extend(json.dumps(ch)[1:-1])
        else:
            self._chars.append(ch)

    def last_char(self) -> str | None:
        return self._chars[-1] if self._chars else None

    def strip_trailing_comma(self) -> None:
        if self._chars and self._chars[-1] == ",":
            self._chars.pop()

    def text(self) -> str:
        return "".join(self._chars)
