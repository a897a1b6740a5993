from __future__ import annotations

import sys
from pathlib import Path

from ..document_io import write_document_atomic
from ..json_repair import repair_document
from ..models import RepairOptions
from ..rendering import RepairedJsonError
from ..repair_stats import RepairStats


def repair_lines(
    *,
    input_path: Path,
    output_path: Path,
    options: RepairOptions | None = None,
    stats: RepairStats | None = None,
) -> RepairStats:
    if not input_path.exists():
        raise FileNotFoundError(f"Input JSONL not found: {input_path}")

    stats = stats or RepairStats()
    rendered: list[str] = []
    with input_path.open("r", encoding="utf-8") as handle:
        for line_number, raw in enumerate(handle, start=1):
            line = raw.strip()
            if not line:
                stats.record_blank()
                continue
            try:
                doc = repair_document(line, options, indent=None)
            except RepairedJsonError as exc:
                stats.record_failure(line_number)
                print(f"line={line_number} repair_failed: {exc}", file=sys.stderr)
                continue
            stats.record_document(doc.source_was_valid)
            rendered.append(doc.rendered)

    write_document_atomic(output_path, "".join(f"{line}\n" for line in rendered))
    return stats
