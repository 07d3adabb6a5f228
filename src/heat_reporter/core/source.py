"""Best-effort access to the lines of source code around a location."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Literal

import structlog

from heat_reporter.utils.logging import LogEventNames

log = structlog.get_logger()

Context = Literal["before", "around", "after"]


class Source:
    """The most relevant lines of code surrounding a given line of a file.

    Reading never raises. A file that is missing, unreadable, a directory,
    or not valid UTF-8 simply has no lines, so a broken snippet can never
    turn into a confusing error in the middle of a test run.

    Example:
        source = Source("app/models.py", line_number=42, max_line_count=3)
        source.line          # the text of line 42
        source.line_numbers  # [41, 42, 43]
    """

    def __init__(
        self,
        filename: str | Path,
        line_number: int,
        max_line_count: int = 1,
        context: Context = "around",
    ) -> None:
        self.filename = Path(filename)
        self.line_number = int(line_number)
        self.max_line_count = max(int(max_line_count), 1)
        self.context = context

    @cached_property
    def file_lines(self) -> list[str]:
        """The lines of the file with trailing blank lines removed."""
        try:
            raw_lines = self.filename.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError, ValueError) as e:
            log.debug(LogEventNames.SOURCE_UNREADABLE, filename=str(self.filename), error=str(e))
            return []

        while raw_lines and not raw_lines[-1].strip():
            raw_lines.pop()

        return raw_lines

    @property
    def line(self) -> str | None:
        """The line of code at ``line_number``, or None if there isn't one."""
        if 1 <= self.line_number <= len(self.file_lines):
            return self.file_lines[self.line_number - 1]
        return None

    @property
    def lines(self) -> list[str]:
        """The available lines of code around the target line."""
        if self.max_line_count == 1:
            return [self.line] if self.line is not None else []

        numbers = self.line_numbers
        if not numbers:
            return []
        return self.file_lines[numbers[0] - 1 : numbers[-1]]

    @property
    def line_numbers(self) -> list[int]:
        """Line numbers matching ``lines``."""
        if self.max_line_count == 1:
            return [self.line_number] if self.line is not None else []
        return list(range(self._first_line_number(), self._last_line_number() + 1))

    def to_dict(self) -> dict[int, str]:
        """Relevant lines keyed by line number."""
        return dict(zip(self.line_numbers, self.lines, strict=False))

    def _max_line_number(self) -> int:
        return len(self.file_lines)

    def _other_lines_count(self) -> int:
        return self.max_line_count - 1

    def _first_line_offset(self) -> int:
        match self.context:
            case "before":
                return self._other_lines_count()
            case "around":
                # Preceding lines round up; they usually explain how we got here
                return -(-self._other_lines_count() // 2)
            case "after":
                return 0

    def _last_line_offset(self) -> int:
        match self.context:
            case "before":
                return 0
            case "around":
                return self._other_lines_count() // 2
            case "after":
                return self._other_lines_count()

    def _leftover_preceding_lines_count(self) -> int:
        target = self.line_number - self._first_line_offset()
        return abs(target) + 1 if target < 1 else 0

    def _leftover_trailing_lines_count(self) -> int:
        target = self.line_number + self._last_line_offset()
        maximum = self._max_line_number()
        return target - maximum if target > maximum else 0

    def _first_line_number(self) -> int:
        target = (
            self.line_number - self._first_line_offset() - self._leftover_trailing_lines_count()
        )
        return max(target, 1)

    def _last_line_number(self) -> int:
        target = (
            self.line_number + self._last_line_offset() + self._leftover_preceding_lines_count()
        )
        return min(target, self._max_line_number())
