from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TextIO


def read_document(path: Path | None, stdin: TextIO | None = None) -> str:
    if path is None:
        return (stdin or sys.stdin).read()
    if not path.exists():
        raise FileNotFoundError(f"Input file does not exist: {path}")
    return path.read_text(encoding="utf-8")


def write_document_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f"{path.name}.tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


def with_trailing_newline(text: str) -> str:
    if not text or text.endswith("\n"):
        return text
    return text + "\n"
