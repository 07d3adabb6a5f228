"""Classification, blame resolution, aggregation, and the reporter itself."""

from .heat_map import MAXIMUM_FILES_TO_SHOW, Map
from .issue import Issue
from .locations import Locations
from .reporter import HeatReporter
from .results import Results
from .source import Source
from .timer import MINIMUM_TOTAL_TIME, Timer

__all__ = [
    "MAXIMUM_FILES_TO_SHOW",
    "MINIMUM_TOTAL_TIME",
    "HeatReporter",
    "Issue",
    "Locations",
    "Map",
    "Results",
    "Source",
    "Timer",
]
