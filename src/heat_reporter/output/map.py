"""Token lines for the heat map of hot files.

Example (unstyled):
    Hot Spots
    lib/billing/invoice.py · 14 14 22
      Problems on line 14 originated from multiple locations:
      - lib/billing/tax.py:8 ➜ raise TaxError(region)
      - lib/billing/discount.py:31 ➜ return total / count
    tests/test_invoice.py · 9 40
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from heat_reporter.models.frame import Frame
from heat_reporter.models.hit import Hit
from heat_reporter.models.issue_type import IssueType

from .token import SPACER, SYMBOLS, Line, Token

if TYPE_CHECKING:
    from heat_reporter.core.results import Results

HEADING = "Hot Spots"


class HeatMapListing:
    """Renders the ranked hot files, limited to the issue types worth showing."""

    def __init__(self, results: Results) -> None:
        self.results = results
        self.issue_types = results.relevant_issue_types()

    def tokens(self) -> list[Line]:
        hits = self.results.heat_map.file_hits(self.issue_types)
        if not hits:
            return []

        lines: list[Line] = [[Token("bold", HEADING)]]
        for hit in hits:
            lines.append(self._file_summary(hit))
            for line_number in self._repeated_line_numbers(hit):
                origins = self._origins(hit, line_number)
                if len(origins) < 2:
                    continue
                lines.append(
                    [
                        Token(
                            "muted",
                            f"  Problems on line {line_number} "
                            "originated from multiple locations:",
                        )
                    ]
                )
                lines.extend(self._origin_tokens(frame) for frame in origins)
        return lines

    def _file_summary(self, hit: Hit) -> Line:
        frame = hit.frame
        tokens: Line = [
            Token("default", frame.relative_directory),
            Token("bold", frame.filename),
            SPACER,
        ]

        # Line numbers in order, each styled by the type of issue that landed there
        numbered: list[tuple[int, IssueType]] = []
        for issue_type in self.issue_types:
            numbered.extend((number, issue_type) for number in hit.issues.get(issue_type, []))
        numbered.sort(key=lambda pair: pair[0])

        tokens.extend(Token(issue_type.value, f"{number} ") for number, issue_type in numbered)
        return tokens

    def _repeated_line_numbers(self, hit: Hit) -> list[int]:
        relevant = set(self.issue_types)
        return [
            number
            for number in hit.repeated_line_numbers()
            if sum(occurrence.type in relevant for occurrence in hit.lines[number]) > 1
        ]

    def _origins(self, hit: Hit, line_number: int) -> list[Frame]:
        """Distinct places the issues on a line were raised from."""
        relevant = set(self.issue_types)
        origins: dict[tuple[str, int], Frame] = {}
        for occurrence in hit.lines[line_number]:
            if occurrence.type not in relevant or occurrence.backtrace is None:
                continue
            frame = occurrence.backtrace.final_location
            if frame is not None:
                origins.setdefault((frame.relative_filename, frame.line), frame)
        return list(origins.values())

    def _origin_tokens(self, frame: Frame) -> Line:
        tokens: Line = [
            Token("muted", "  - "),
            Token("default", frame.relative_filename),
            Token("muted", ":"),
            Token("default", str(frame.line)),
        ]
        code = frame.source_code().line
        if code is not None and code.strip():
            tokens.append(Token("muted", f" {SYMBOLS['arrow']} {code.strip()}"))
        return tokens
