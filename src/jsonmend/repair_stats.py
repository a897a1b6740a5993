from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class RepairStats:
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lines_read: int = 0
    blank_lines: int = 0
    already_valid: int = 0
    repaired: int = 0
    failed: int = 0
    failed_line_numbers: list[int] = field(default_factory=list)

    def record_blank(self) -> None:
        self.lines_read += 1
        self.blank_lines += 1

    def record_document(self, source_was_valid: bool) -> None:
        self.lines_read += 1
        if source_was_valid:
            self.already_valid += 1
        else:
            self.repaired += 1

    def record_failure(self, line_number: int) -> None:
        self.lines_read += 1
        self.failed += 1
        self.failed_line_numbers.append(line_number)

    def documents_written(self) -> int:
        return self.already_valid + self.repaired

    def elapsed_seconds(self) -> float:
        return max(0.0, (datetime.now(timezone.utc) - self.started_at).total_seconds())

    def repair_rate(self) -> float:
        total = self.documents_written() + self.failed
        if total == 0:
            return 0.0
        return self.repaired / total

    def format_summary(self) -> str:
        lines = [
            "--- Repair Run Summary ---",
            f"Duration: {self.elapsed_seconds():.1f}s",
            f"Lines read: {self.lines_read} (blank={self.blank_lines})",
            f"Documents written: {self.documents_written()}",
            f"Already valid: {self.already_valid}",
            f"Repaired: {self.repaired} (repair_rate={self.repair_rate() * 100:.0f}%)",
        ]
        if self.failed:
            shown = ", ".join(str(n) for n in self.failed_line_numbers[:10])
            more = "" if self.failed <= 10 else ", ..."
            lines.append(f"Failed: {self.failed} (lines {shown}{more})")
        return "\n".join(lines)
