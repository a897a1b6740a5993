from __future__ import annotations

import json
from typing import Callable

from .constants import (
    ARRAY_CLOSER,
    HEX_DIGITS,
    KEYWORDS,
    MISSING_VALUE,
    OBJECT_CLOSER,
    QUOTE_CHARS,
    SIMPLE_ESCAPE_CHARS,
    UNICODE_ESCAPE_DIGITS,
)
from .container_stack import ContainerStack
from .models import KeywordMode, ParseState, RepairOptions
from .number_canonicalizer import DIGITS, NumberAccumulator
from .output_buffer import OutputBuffer
from .scanner import logical_chars, prepare

KEYWORD_INITIALS = {word[0]: word for word in KEYWORDS}


class RepairEngine:
    """Single-pass repair of almost-JSON text.

    The engine itself is stateless; every ``run`` call owns a fresh
    :class:`RepairRun`, so one engine may be shared freely.
    """

    def __init__(self, options: RepairOptions | None = None) -> None:
        self.options = options or RepairOptions()

    def run(self, raw: str) -> str:
        text = prepare(raw, self.options)
        if not text:
            return ""

        run = RepairRun(self.options)
        for ch in logical_chars(text, run.stack, self.options):
            run.feed(ch)
        run.finalize()
        run.unwind()
        return run.output.text()


class RepairRun:
    def __init__(self, options: RepairOptions) -> None:
        self.options = options
        self.state = ParseState.VALUE_START
        self.output = OutputBuffer()
        self.stack = ContainerStack()
        self.number = NumberAccumulator()
        self.keyword = ""
        self.key_start = 0
        self.pending_escape = False
        self.hex_remaining = 0
        self._handlers: dict[ParseState, Callable[[str], bool]] = {
            ParseState.VALUE_START: self._value_start,
            ParseState.OBJECT_AWAITING_KEY_OR_CLOSE: self._object_awaiting_key_or_close,
            ParseState.OBJECT_KEY: self._object_key,
            ParseState.OBJECT_KEY_END: self._object_key_end,
            ParseState.STRING_VALUE: self._string_value,
            ParseState.NUMBER_VALUE: self._number_value,
            ParseState.KEYWORD_VALUE: self._keyword_value,
            ParseState.VALUE_END: self._value_end,
        }

    def feed(self, ch: str) -> None:
        # A handler returns False when it changed state without consuming ch;
        # the same char then goes through the new state's handler.
        while not self._handlers[self.state](ch):
            pass

    def finalize(self) -> None:
        self._flush_escape()

        if self.state == ParseState.VALUE_START:
            if self.output.last_char() not in {"[", ","}:
                self._emit_missing_value()
        elif self.state == ParseState.OBJECT_KEY:
            if len(self.output) == self.key_start:
                self.output.emit(json.dumps(self.options.auto_filled_key)[1:-1])
            self.output.emit('":')
            self.output.emit(MISSING_VALUE)
            self.stack.pop()
            self.state = ParseState.VALUE_END
        elif self.state == ParseState.OBJECT_KEY_END:
            self.output.emit(":")
            self._emit_missing_value()
        elif self.state == ParseState.NUMBER_VALUE:
            self._finish_number()
        elif self.state == ParseState.KEYWORD_VALUE:
            self._flush_keyword()

    def unwind(self) -> None:
        while self.stack:
            self.output.strip_trailing_comma()
            self.output.emit(self.stack.pop())
        self.output.strip_trailing_comma()

    def _value_start(self, ch: str) -> bool:
        if ch == "{":
            self.stack.push(OBJECT_CLOSER)
            self.output.emit(ch)
            self.state = ParseState.OBJECT_AWAITING_KEY_OR_CLOSE
        elif ch in QUOTE_CHARS:
            self.stack.open_string()
            self.output.emit('"')
            self.state = ParseState.STRING_VALUE
        elif ch == "[":
            self.stack.push(ARRAY_CLOSER)
            self.output.emit(ch)
        elif ch == ARRAY_CLOSER and self.stack.matches(ch):
            self._close_container()
            self.state = ParseState.VALUE_END
        elif ch in KEYWORD_INITIALS:
            if self.options.keyword_mode == KeywordMode.PREFIX:
                self.keyword = ch
                self.state = ParseState.KEYWORD_VALUE
            else:
                self.output.emit(KEYWORD_INITIALS[ch])
                self.state = ParseState.VALUE_END
        elif ch == "-" or ch in DIGITS:
            self.number.start(ch)
            self.state = ParseState.NUMBER_VALUE
        else:
            self._emit_missing_value()
        return True

    def _object_awaiting_key_or_close(self, ch: str) -> bool:
        if ch == OBJECT_CLOSER:
            self._close_container()
            self.state = ParseState.VALUE_END
            return True

        self.stack.open_string()
        self.output.emit('"')
        self.key_start = len(self.output)
        self.state = ParseState.OBJECT_KEY
        if ch not in QUOTE_CHARS and not self._absorb_escape(ch):
            self.output.emit_string_char(ch)
        return True

    def _object_key(self, ch: str) -> bool:
        if self._absorb_escape(ch):
            return True
        if ch in QUOTE_CHARS:
            self.stack.pop()
            self.state = ParseState.OBJECT_KEY_END
            self.output.emit('"')
        elif ch == ":":
            self.stack.pop()
            self.output.emit('":')
            self.state = ParseState.VALUE_START
        else:
            self.output.emit_string_char(ch)
        return True

    def _object_key_end(self, ch: str) -> bool:
        self.output.emit(":")
        self.state = ParseState.VALUE_START
        return ch in {":", "="}

    def _string_value(self, ch: str) -> bool:
        if self._absorb_escape(ch):
            return True
        if ch in QUOTE_CHARS:
            self.stack.pop()
            self.state = ParseState.VALUE_END
            self.output.emit('"')
        else:
            self.output.emit_string_char(ch)
        return True

    def _number_value(self, ch: str) -> bool:
        if self.number.append(ch):
            return True
        self._finish_number()
        return False

    def _keyword_value(self, ch: str) -> bool:
        candidate = self.keyword + ch
        if candidate in KEYWORDS:
            self.output.emit(candidate)
            self.keyword = ""
            self.state = ParseState.VALUE_END
            return True
        if any(word.startswith(candidate) for word in KEYWORDS):
            self.keyword = candidate
            return True
        self._flush_keyword()
        return False

    def _value_end(self, ch: str) -> bool:
        if ch == ",":
            if self.stack:
                self.output.emit(ch)
                if self.stack.in_object():
                    self.state = ParseState.OBJECT_AWAITING_KEY_OR_CLOSE
                else:
                    self.state = ParseState.VALUE_START
        elif self.stack.matches(ch):
            self._close_container()
        elif ch == '"' and self.stack.in_object():
            # Missing comma before the next key.
            self.stack.open_string()
            self.output.emit(',"')
            self.key_start = len(self.output)
            self.state = ParseState.OBJECT_KEY
        return True

    def _absorb_escape(self, ch: str) -> bool:
        if self.hex_remaining:
            if ch in HEX_DIGITS:
                self.output.emit(ch)
                self.hex_remaining -= 1
                return True
            self._flush_escape()

        if self.pending_escape:
            self.pending_escape = False
            if ch in SIMPLE_ESCAPE_CHARS:
                self.output.emit("\\" + ch)
                return True
            if ch == "u":
                self.output.emit("\\u")
                self.hex_remaining = UNICODE_ESCAPE_DIGITS
                return True
            if ch == "'":
                self.output.emit(ch)
                return True
            self.output.emit("\\\\")
            return False

        if ch == "\\" and self.options.string_escapes:
            self.pending_escape = True
            return True
        return False

    def _flush_escape(self) -> None:
        if self.pending_escape:
            self.output.emit("\\\\")
            self.pending_escape = False
        if self.hex_remaining:
            self.output.emit("0" * self.hex_remaining)
            self.hex_remaining = 0

    def _close_container(self) -> None:
        self.output.strip_trailing_comma()
        self.output.emit(self.stack.pop())

    def _emit_missing_value(self) -> None:
        self.output.emit(MISSING_VALUE)
        self.state = ParseState.VALUE_END

    def _finish_number(self) -> None:
        self.output.emit(self.number.render())
        self.number.reset()
        self.state = ParseState.VALUE_END

    def _flush_keyword(self) -> None:
        self.output.emit(next(word for word in KEYWORDS if word.startswith(self.keyword)))
        self.keyword = ""
        self.state = ParseState.VALUE_END
