"""The closed set of outcome classifications."""

from enum import StrEnum


class IssueType(StrEnum):
    """Classification of a single test outcome, most severe first."""

    ERROR = "error"
    BROKEN = "broken"
    FAILURE = "failure"
    SKIPPED = "skipped"
    PAINFUL = "painful"
    SLOW = "slow"
    SUCCESS = "success"

    @property
    def label(self) -> str:
        """Display-friendly description of the issue type."""
        return ISSUE_LABELS[self]

    @property
    def critical(self) -> bool:
        """True for the types that mean something is actually wrong."""
        return self in CRITICAL_ISSUE_TYPES


ISSUE_LABELS: dict[IssueType, str] = {
    IssueType.ERROR: "Error",
    IssueType.BROKEN: "Broken Test",
    IssueType.FAILURE: "Failure",
    IssueType.SKIPPED: "Skipped",
    IssueType.PAINFUL: "Passed but Very Slow",
    IssueType.SLOW: "Passed but Slow",
    IssueType.SUCCESS: "Success",
}

CRITICAL_ISSUE_TYPES = frozenset({IssueType.ERROR, IssueType.BROKEN, IssueType.FAILURE})

# Everything worth reporting on, in severity order
ISSUE_TYPES: tuple[IssueType, ...] = (
    IssueType.ERROR,
    IssueType.BROKEN,
    IssueType.FAILURE,
    IssueType.SKIPPED,
    IssueType.PAINFUL,
    IssueType.SLOW,
)
