"""The single character printed as each test finishes."""

from __future__ import annotations

from heat_reporter.models.issue_type import IssueType

from .token import Token

# Shown when the reporter itself failed while recording a test
REPORTER_MARKER = "reporter"
UNKNOWN_SYMBOL = "?"

SYMBOLS: dict[str, str] = {
    IssueType.SUCCESS: "·",
    IssueType.SLOW: "♦",
    IssueType.PAINFUL: "♦",
    IssueType.BROKEN: "B",
    IssueType.ERROR: "E",
    IssueType.SKIPPED: "S",
    IssueType.FAILURE: "F",
    REPORTER_MARKER: "✖",
}

STYLES: dict[str, str] = {
    IssueType.SUCCESS: "success",
    IssueType.SLOW: "slow",
    IssueType.PAINFUL: "painful",
    IssueType.BROKEN: "error",
    IssueType.ERROR: "error",
    IssueType.SKIPPED: "skipped",
    IssueType.FAILURE: "failure",
    REPORTER_MARKER: "error",
}


def marker_token(issue_type: IssueType | str) -> Token:
    """The styled marker for an issue type; unknown types get a plain ``?``."""
    key = str(issue_type)
    return Token(STYLES.get(key, "default"), SYMBOLS.get(key, UNKNOWN_SYMBOL))
