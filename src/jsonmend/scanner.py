from __future__ import annotations

from typing import Iterator

from .constants import LINE_BREAK_CHARS
from .container_stack import ContainerStack
from .models import RepairOptions


def prepare(raw: str, options: RepairOptions) -> str:
    text = raw.strip()
    if text and options.wrap_bare_members and text[0] not in {"{", "["}:
        text = "{" + text
    return text


def logical_chars(text: str, stack: ContainerStack, options: RepairOptions) -> Iterator[str]:
    # The stack is consulted lazily, so it must reflect every char already yielded.
    for ch in text:
        if ch == " ":
            if stack.in_string():
                yield ch
            continue
        if ch in LINE_BREAK_CHARS:
            if options.keep_string_newlines and stack.in_string():
                yield ch
            continue
        yield ch
