"""Token lines for the end-of-run summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .token import SPACER, Line, Token, pluralize

if TYPE_CHECKING:
    from heat_reporter.core.issue import Issue
    from heat_reporter.core.results import Results
    from heat_reporter.core.timer import Timer


class ResultsSummary:
    """Issue counts on one line, then timing and throughput on the next.

    Example (unstyled):
        2 Errors · 1 Failure · 1 Skip
        0.42s · 12 tests (28.57/s) with 40 assertions (95.24/s)

    Skips are muted when there are real problems, and slow tests are muted
    when there are problems or skips, so the eye lands on what matters.
    """

    def __init__(self, results: Results, timer: Timer) -> None:
        self.results = results
        self.timer = timer

    def tokens(self) -> list[Line]:
        lines: list[Line] = []

        counts = self._issue_counts()
        if counts:
            lines.append(counts)

        lines.append(
            [
                Token("bold", f"{round(self.timer.total_time, 2)}s"),
                SPACER,
                Token("default", pluralize(self.timer.test_count, "test")),
                Token("default", f" ({self.timer.tests_per_second}/s)"),
                Token("default", " with "),
                Token("default", pluralize(self.timer.assertion_count, "assertion")),
                Token("default", f" ({self.timer.assertions_per_second}/s)"),
            ]
        )
        return lines

    def _issue_counts(self) -> Line:
        results = self.results
        quieted = results.problems or bool(results.skips)

        candidates = [
            _count_token("error", results.errors, "Error"),
            _count_token("broken", results.brokens, "Broken Test"),
            _count_token("failure", results.failures, "Failure"),
            _count_token("muted" if results.problems else "skipped", results.skips, "Skip"),
            _count_token("muted" if quieted else "painful", results.painfuls, "Painfully Slow"),
            _count_token("muted" if quieted else "slow", results.slows, "Slow"),
        ]
        counts = [token for token in candidates if token is not None]

        line: Line = []
        for index, token in enumerate(counts):
            if index:
                line.append(SPACER)
            line.append(token)
        return line


def _count_token(style: str, issues: list[Issue], name: str) -> Token | None:
    if not issues:
        return None
    return Token(style, pluralize(len(issues), name))
