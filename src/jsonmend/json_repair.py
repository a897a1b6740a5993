from __future__ import annotations

from .constants import DEFAULT_INDENT
from .engine import RepairEngine
from .models import RepairedDocument, RepairOptions
from .rendering import is_valid_json, render


def repair(raw: str, options: RepairOptions | None = None) -> str:
    return RepairEngine(options).run(raw)


def repair_document(
    raw: str,
    options: RepairOptions | None = None,
    indent: int | None = DEFAULT_INDENT,
) -> RepairedDocument:
    repaired = repair(raw, options)
    return RepairedDocument(
        source=raw,
        repaired=repaired,
        rendered=render(repaired, indent=indent),
        source_was_valid=is_valid_json(raw),
    )
