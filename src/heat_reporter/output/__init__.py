"""Rendering of results as styled text or JSON."""

from .backtrace import BacktraceListing
from .console import Output
from .issue import IssueDetails
from .json_report import REPORT_VERSION, build_report, render_json
from .map import HeatMapListing
from .marker import REPORTER_MARKER, marker_token
from .results import ResultsSummary
from .source_code import SourceCode
from .token import STYLES, SYMBOLS, Line, Token, pluralize, render_line

__all__ = [
    # JSON
    "REPORT_VERSION",
    # Markers
    "REPORTER_MARKER",
    # Tokens
    "STYLES",
    "SYMBOLS",
    # Listings
    "BacktraceListing",
    "HeatMapListing",
    "IssueDetails",
    "Line",
    # Writer
    "Output",
    "ResultsSummary",
    "SourceCode",
    "Token",
    "build_report",
    "marker_token",
    "pluralize",
    "render_json",
    "render_line",
]
