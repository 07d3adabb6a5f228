"""Data models and transfer objects."""

from .backtrace import Backtrace, LineCount
from .frame import (
    UNKNOWN_CONTAINER,
    UNKNOWN_MODIFICATION_SECONDS,
    UNKNOWN_MODIFICATION_TIME,
    Frame,
    parse_frame,
)
from .hit import WEIGHTS, Hit, LineOccurrence
from .issue_type import CRITICAL_ISSUE_TYPES, ISSUE_LABELS, ISSUE_TYPES, IssueType
from .outcome import TestOutcome

__all__ = [
    # Issue types
    "CRITICAL_ISSUE_TYPES",
    "ISSUE_LABELS",
    "ISSUE_TYPES",
    # Frame models
    "UNKNOWN_CONTAINER",
    "UNKNOWN_MODIFICATION_SECONDS",
    "UNKNOWN_MODIFICATION_TIME",
    # Hit models
    "WEIGHTS",
    # Backtrace models
    "Backtrace",
    "Frame",
    "Hit",
    "IssueType",
    "LineCount",
    "LineOccurrence",
    # Runner input
    "TestOutcome",
    "parse_frame",
]
