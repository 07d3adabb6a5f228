"""Writes token lines to the report stream."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Literal, TextIO

from heat_reporter.models.issue_type import IssueType

from .backtrace import DEFAULT_LINE_COUNT as DEFAULT_BACKTRACE_LINES
from .issue import IssueDetails
from .map import HeatMapListing
from .marker import marker_token
from .results import ResultsSummary
from .source_code import DEFAULT_LINE_COUNT as DEFAULT_SOURCE_LINES
from .token import Line, Token, render_line

if TYPE_CHECKING:
    from heat_reporter.core.issue import Issue
    from heat_reporter.core.results import Results
    from heat_reporter.core.timer import Timer

ColorMode = Literal["auto", "always", "never"]


class Output:
    """Friendly interface for printing consistently styled output.

    Styling is applied with ANSI escape sequences when ``color`` is
    ``always``, or when it's ``auto`` and the stream is a terminal.

    Args:
        stream: Where the report goes (defaults to stdout)
        color: When to style the output
        backtrace_lines: Maximum backtrace lines shown per issue
        source_lines: Lines of source shown per snippet
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        color: ColorMode = "auto",
        backtrace_lines: int = DEFAULT_BACKTRACE_LINES,
        source_lines: int = DEFAULT_SOURCE_LINES,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.backtrace_lines = backtrace_lines
        self.source_lines = source_lines

    @property
    def styled(self) -> bool:
        match self.color:
            case "always":
                return True
            case "never":
                return False
            case _:
                isatty = getattr(self.stream, "isatty", None)
                return bool(isatty and isatty())

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.flush()

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()

    def newline(self) -> None:
        self.write("\n")

    def write_tokens(self, tokens: Line) -> None:
        """Write tokens without ending the line."""
        self.write(render_line(tokens, self.styled))

    def write_lines(self, lines: Iterable[Line]) -> None:
        self.write("".join(f"{render_line(line, self.styled)}\n" for line in lines))

    def marker(self, issue_type: IssueType | str) -> None:
        self.write_tokens([marker_token(issue_type)])

    def issue_details(self, issue: Issue) -> None:
        details = IssueDetails(issue, self.backtrace_lines, self.source_lines)
        self.write_lines(details.tokens())

    def compact_summary(self, results: Results, timer: Timer) -> None:
        self.write_lines(ResultsSummary(results, timer).tokens())

    def heat_map(self, results: Results) -> None:
        lines = HeatMapListing(results).tokens()
        if lines:
            self.newline()
            self.write_lines(lines)

    def diagnostic(self, message: str) -> None:
        """An out-of-band note about the reporter itself."""
        self.write_lines([[Token("warning_light", message)]])
