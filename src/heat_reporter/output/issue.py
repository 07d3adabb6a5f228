"""Token lines describing a single issue in detail."""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from heat_reporter.models.issue_type import IssueType

from .backtrace import DEFAULT_LINE_COUNT as DEFAULT_BACKTRACE_LINES
from .backtrace import BacktraceListing
from .source_code import DEFAULT_LINE_COUNT as DEFAULT_SOURCE_LINES
from .source_code import SourceCode
from .token import MUTED_ARROW, SPACER, Line, Token

if TYPE_CHECKING:
    from heat_reporter.core.issue import Issue

SOURCE_UNAVAILABLE = "(source unavailable)"
NO_DETAILS = "(no details available)"


class IssueDetails:
    """Picks what to show for an issue based on its type.

    - error / broken: headline, test location, summary, backtrace
    - failure: headline, test location, summary, offending source
    - skipped: headline, test location
    - painful / slow: headline, duration and location

    Every listing ends with an empty line to separate it from the next.
    """

    def __init__(
        self,
        issue: Issue,
        backtrace_lines: int = DEFAULT_BACKTRACE_LINES,
        source_lines: int = DEFAULT_SOURCE_LINES,
    ) -> None:
        self.issue = issue
        self.locations = issue.locations
        self.backtrace_lines = backtrace_lines
        self.source_lines = source_lines

    def tokens(self) -> list[Line]:
        issue_type = self.issue.type
        match issue_type:
            case IssueType.ERROR | IssueType.BROKEN:
                lines = [
                    self._headline(),
                    *self._test_location(),
                    self._summary(),
                    *BacktraceListing(self.locations, self.backtrace_lines).tokens(),
                ]
            case IssueType.FAILURE:
                lines = [
                    self._headline(),
                    *self._test_location(),
                    self._summary(),
                    *self._source(),
                ]
            case IssueType.SKIPPED:
                lines = [self._headline(), *self._test_location()]
            case IssueType.PAINFUL | IssueType.SLOW:
                lines = [self._headline(), self._slowness()]
            case IssueType.SUCCESS:
                lines = [self._headline()]
            case _:
                assert_never(issue_type)

        return [*lines, []]

    def _headline(self) -> Line:
        tokens = [
            Token(self.issue.type.value, self.issue.label),
            SPACER,
            Token("default", self.issue.test_name),
        ]
        if self.issue.test_class:
            tokens.extend([SPACER, Token("muted", self.issue.test_class)])
        return tokens

    def _test_location(self) -> list[Line]:
        definition = self.locations.test_definition
        failure = self.locations.test_failure
        code = failure.source_code().line

        location: Line = [
            Token("default", definition.relative_filename),
            Token("muted", ":"),
            Token("default", str(definition.line)),
        ]
        if failure.line != definition.line or failure.path != definition.path:
            location.extend([MUTED_ARROW, Token("default", failure.short)])

        return [location, [Token("muted", f"  {_stripped(code)}")]]

    def _summary(self) -> Line:
        return [Token("italicized", self.issue.summary or NO_DETAILS)]

    def _source(self) -> list[Line]:
        frame = self.locations.most_relevant
        snippet = SourceCode(frame.pathname, frame.line, max_line_count=self.source_lines)
        return [[Token("muted", "  "), Token("bold", frame.short)], *snippet.tokens()]

    def _slowness(self) -> Line:
        definition = self.locations.test_definition
        return [
            Token("bold", f"{round(self.issue.execution_time, 2)}s"),
            SPACER,
            Token("default", definition.relative_directory),
            Token("default", definition.filename),
            Token("muted", ":"),
            Token("default", str(definition.line)),
        ]


def _stripped(code: str | None) -> str:
    if code is None or not code.strip():
        return SOURCE_UNAVAILABLE
    return code.strip()
