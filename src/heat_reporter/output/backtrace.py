"""Token lines for the backtrace of an exception."""

from __future__ import annotations

from typing import TYPE_CHECKING

from heat_reporter.models.backtrace import LineCount
from heat_reporter.models.frame import Frame

from .token import SYMBOLS, Line, Token

if TYPE_CHECKING:
    from heat_reporter.core.locations import Locations

DEFAULT_LINE_COUNT = 10
DEFAULT_INDENTATION_SPACES = 2


class BacktraceListing:
    """Renders the relevant part of a backtrace, one location per line.

    Enough lines are shown to reach the outermost project frame, up to
    ``max_line_count``. Project lines stand out; everything else is muted.
    When more than one line is shown, the most recently modified project
    file is flagged since it's a likely suspect.
    """

    def __init__(
        self,
        locations: Locations,
        max_line_count: int = DEFAULT_LINE_COUNT,
        indentation: int = DEFAULT_INDENTATION_SPACES,
    ) -> None:
        self.locations = locations
        self.backtrace = locations.backtrace
        self.max_line_count = max_line_count
        self.indentation = indentation

    @property
    def line_count(self) -> int:
        return LineCount(self.backtrace.locations, maximum=self.max_line_count).limit

    @property
    def backtrace_locations(self) -> tuple[Frame, ...]:
        return self.backtrace.locations[: self.line_count]

    @property
    def all_backtrace_from_project(self) -> bool:
        """If every line shown is from the project, the root needn't be repeated on each."""
        return all(frame.is_project_file for frame in self.backtrace_locations)

    def tokens(self) -> list[Line]:
        return [self._location_tokens(frame) for frame in self.backtrace_locations]

    def _most_recently_modified(self, frame: Frame) -> bool:
        return len(self.backtrace_locations) > 1 and frame == self.locations.freshest

    def _location_tokens(self, frame: Frame) -> Line:
        project_file = frame.is_project_file
        path_style = "default" if project_file else "muted"
        name_style = "bold" if project_file else "muted"

        if self.all_backtrace_from_project:
            directory = frame.relative_directory
        else:
            directory = f"{frame.absolute_pathname.parent}/"

        tokens: Line = [
            Token("default", " " * self.indentation),
            Token(path_style, directory),
            Token(name_style, frame.filename),
            Token("muted", ":"),
            Token(name_style, str(frame.line)),
        ]

        code = frame.source_code().line
        if code is not None and code.strip():
            tokens.append(Token("muted", f" {SYMBOLS['arrow']} `{code.strip()}`"))

        tokens.append(Token("muted", f" in `{frame.container}`"))

        if self._most_recently_modified(frame):
            tokens.append(Token("default", f" {SYMBOLS['middot']} Most Recently Modified File"))

        return tokens
