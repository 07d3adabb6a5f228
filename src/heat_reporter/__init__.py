"""Test-run reporter that points at the likely culprit of each failure.

Outcomes are classified by severity, each problem is traced to the project
code most likely responsible, and recurring locations are ranked into a heat
map of hot files.
"""

from heat_reporter._version import __version__
from heat_reporter.config import configure, get_settings, reset_settings
from heat_reporter.core import HeatReporter, Issue, Locations, Map, Results, Timer
from heat_reporter.models import Backtrace, Frame, IssueType, TestOutcome, parse_frame

__all__ = [
    "Backtrace",
    "Frame",
    "HeatReporter",
    "Issue",
    "IssueType",
    "Locations",
    "Map",
    "Results",
    "TestOutcome",
    "Timer",
    "__version__",
    "configure",
    "get_settings",
    "parse_frame",
    "reset_settings",
]
