from __future__ import annotations

STRING_TERMINATOR = '"'
OBJECT_CLOSER = "}"
ARRAY_CLOSER = "]"
QUOTE_CHARS = frozenset({'"', "'"})

KEYWORDS = ("null", "true", "false")
MISSING_VALUE = "null"
AUTO_FILLED_KEY = "autoFilled"

# Always dropped by the scanner, even inside strings, unless newlines are kept.
LINE_BREAK_CHARS = frozenset({"\n", "\t", "\r"})
SIMPLE_ESCAPE_CHARS = frozenset({'"', "\\", "/", "b", "f", "n", "r", "t"})
UNICODE_ESCAPE_DIGITS = 4
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

DEFAULT_INDENT = 2
EXCERPT_LENGTH = 200

ENV_KEYWORD_MODE = "JSONMEND_KEYWORD_MODE"
ENV_KEEP_STRING_NEWLINES = "JSONMEND_KEEP_STRING_NEWLINES"
ENV_WRAP_BARE_MEMBERS = "JSONMEND_WRAP_BARE_MEMBERS"
