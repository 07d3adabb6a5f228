"""Data model for the issues aggregated against a single file."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .backtrace import Backtrace
from .frame import Frame
from .issue_type import IssueType

# Hot spots are ranked by how likely fixing them is to fix other things too.
# An exception in source code can't run at all and ripples outward; a broken
# test can't tell you anything until it runs; failures are the point of the
# exercise; skips and slow tests shouldn't be ignored but rarely cascade.
# Skips and slow tests keep a nonzero weight on purpose: when nothing more
# serious happened they still rank as hot spots.
WEIGHTS: dict[IssueType, int] = {
    IssueType.ERROR: 5,
    IssueType.BROKEN: 4,
    IssueType.FAILURE: 3,
    IssueType.SKIPPED: 2,
    IssueType.PAINFUL: 1,
    IssueType.SLOW: 1,
    IssueType.SUCCESS: 0,
}


@dataclass(frozen=True)
class LineOccurrence:
    """One issue landing on a given line, with the backtrace that led there."""

    type: IssueType
    backtrace: Backtrace | None = None


class Hit:
    """Every issue logged against one file, by type and by line.

    Example:
        hit = Hit("lib/models.py")
        hit.log(IssueType.ERROR, 12)
        hit.log(IssueType.FAILURE, 12)
        hit.weight  # 8
        hit.count   # 2
    """

    def __init__(self, path: str) -> None:
        self.path = str(path)
        self.issues: dict[IssueType, list[int]] = {}
        self.lines: dict[int, list[LineOccurrence]] = {}

    def __repr__(self) -> str:
        return f"Hit({self.path!r}, weight={self.weight}, count={self.count})"

    def log(
        self, issue_type: IssueType, line_number: int, backtrace: Backtrace | None = None
    ) -> None:
        """Record an issue at a line. Repeats are kept and count toward the weight."""
        self.issues.setdefault(issue_type, []).append(line_number)
        self.lines.setdefault(line_number, []).append(LineOccurrence(issue_type, backtrace))

    @property
    def frame(self) -> Frame:
        return Frame(self.path)

    @property
    def mtime(self) -> datetime:
        return self.frame.mtime

    @property
    def age_in_seconds(self) -> int:
        return self.frame.age_in_seconds

    @property
    def weight(self) -> int:
        return self.weight_for()

    @property
    def count(self) -> int:
        return sum(len(line_numbers) for line_numbers in self.issues.values())

    def weight_for(self, issue_types: Iterable[IssueType] | None = None) -> int:
        """Weight counting only the given issue types (all types when None)."""
        return sum(
            len(line_numbers) * WEIGHTS.get(issue_type, 0)
            for issue_type, line_numbers in self._issues_for(issue_types)
        )

    def count_for(self, issue_types: Iterable[IssueType] | None = None) -> int:
        """Occurrences that carry weight, restricted to the given issue types."""
        return sum(
            len(line_numbers)
            for issue_type, line_numbers in self._issues_for(issue_types)
            if WEIGHTS.get(issue_type, 0) > 0
        )

    @property
    def critical_issues(self) -> bool:
        return any(issue_type.critical for issue_type in self.issues)

    @property
    def line_numbers(self) -> list[int]:
        """Every affected line number, unique and sorted."""
        return sorted(self.lines)

    def line_types(self, line_number: int) -> list[IssueType]:
        """Distinct issue types seen on a line, in the order first seen."""
        seen: dict[IssueType, None] = {}
        for occurrence in self.lines.get(line_number, []):
            seen.setdefault(occurrence.type, None)
        return list(seen)

    def repeated_line_numbers(self) -> list[int]:
        """Lines hit by more than one issue."""
        return sorted(number for number, occurrences in self.lines.items() if len(occurrences) > 1)

    def to_dict(self, issue_types: Iterable[IssueType] | None = None) -> dict[str, Any]:
        """Serializable summary of the hit, optionally restricted to some issue types."""
        allowed = set(issue_types) if issue_types is not None else None
        lines: list[dict[str, Any]] = []
        for number in self.line_numbers:
            occurrences = [
                occurrence
                for occurrence in self.lines[number]
                if allowed is None or occurrence.type in allowed
            ]
            if not occurrences:
                continue
            types = list(dict.fromkeys(occurrence.type.value for occurrence in occurrences))
            lines.append({"line": number, "types": types, "count": len(occurrences)})

        return {
            "file": self.frame.relative_filename,
            "weight": self.weight_for(allowed),
            "count": self.count_for(allowed),
            "lines": lines,
        }

    def _issues_for(
        self, issue_types: Iterable[IssueType] | None
    ) -> list[tuple[IssueType, list[int]]]:
        if issue_types is None:
            return list(self.issues.items())
        allowed = set(issue_types)
        return [(t, numbers) for t, numbers in self.issues.items() if t in allowed]
