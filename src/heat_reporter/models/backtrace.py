"""Data model for a test's backtrace and its filtered views."""

from __future__ import annotations

import traceback
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from functools import cached_property
from types import TracebackType

import structlog

from heat_reporter.utils.logging import LogEventNames

from .frame import Frame, parse_frame

log = structlog.get_logger()


class Backtrace:
    """An ordered sequence of raw backtrace lines, nearest frame first.

    The filtered views are computed on first access and then cached. The
    raw lines never change after construction, and file modification times
    are read once per instance; a file touched later in the run won't
    reorder ``recently_modified`` for a backtrace that was already examined.

    Example:
        backtrace = Backtrace([
            "/proj/lib/a.py:10:in `foo'",
            "/proj/tests/test_a.py:5:in `test_foo'",
        ])
        backtrace.final_source_code_location.line  # 10
        backtrace.final_test_location.line         # 5
    """

    def __init__(self, raw_backtrace: Iterable[str] | None = None) -> None:
        self.raw_backtrace: tuple[str, ...] = tuple(raw_backtrace or ())

    @classmethod
    def from_traceback(cls, tb: TracebackType | None) -> Backtrace:
        """Build a backtrace from a Python traceback object.

        Python orders tracebacks outermost call first, so the entries are
        reversed to put the frame that raised at the front.
        """
        if tb is None:
            return cls()
        summary = traceback.extract_tb(tb)
        return cls(
            f"{frame.filename}:{frame.lineno}:in `{frame.name}'" for frame in reversed(summary)
        )

    @classmethod
    def from_exception(cls, exc: BaseException) -> Backtrace:
        """Build a backtrace from a raised exception."""
        return cls.from_traceback(exc.__traceback__)

    def __len__(self) -> int:
        return len(self.raw_backtrace)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.locations)

    def __repr__(self) -> str:
        return f"Backtrace({list(self.raw_backtrace)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Backtrace):
            return NotImplemented
        return self.raw_backtrace == other.raw_backtrace

    def __hash__(self) -> int:
        return hash(self.raw_backtrace)

    @property
    def empty(self) -> bool:
        return not self.raw_backtrace

    @cached_property
    def locations(self) -> tuple[Frame, ...]:
        """Every parseable entry, in the original order."""
        frames: list[Frame] = []
        for raw_line in self.raw_backtrace:
            frame = parse_frame(raw_line)
            if frame is None:
                log.debug(LogEventNames.FRAME_UNPARSEABLE, raw_line=raw_line)
                continue
            frames.append(frame)
        return tuple(frames)

    @cached_property
    def project_locations(self) -> tuple[Frame, ...]:
        """Entries from the project directory, excluding vendored code."""
        return tuple(frame for frame in self.locations if frame.is_project_file)

    @cached_property
    def test_locations(self) -> tuple[Frame, ...]:
        """Project entries from test files."""
        return tuple(frame for frame in self.project_locations if frame.is_test_file)

    @cached_property
    def source_locations(self) -> tuple[Frame, ...]:
        """Project entries from non-test files."""
        return tuple(frame for frame in self.project_locations if not frame.is_test_file)

    @cached_property
    def recently_modified(self) -> tuple[Frame, ...]:
        """Project entries, most recently modified file first.

        ``sorted`` is stable, so entries sharing a modification time keep
        their backtrace order. Missing files report epoch zero and sink to
        the end.
        """
        return tuple(
            sorted(self.project_locations, key=lambda frame: frame.mtime, reverse=True)
        )

    @property
    def final_location(self) -> Frame | None:
        return _first(self.locations)

    @property
    def final_project_location(self) -> Frame | None:
        return _first(self.project_locations)

    @property
    def final_test_location(self) -> Frame | None:
        return _first(self.test_locations)

    @property
    def final_source_code_location(self) -> Frame | None:
        return _first(self.source_locations)

    @property
    def freshest_project_location(self) -> Frame | None:
        return _first(self.recently_modified)

    @property
    def preceding_location(self) -> Frame | None:
        """The second project entry, i.e. whatever called the final project location."""
        project = self.project_locations
        return project[1] if len(project) > 1 else None


def _first(frames: Sequence[Frame]) -> Frame | None:
    return frames[0] if frames else None


@dataclass(frozen=True)
class LineCount:
    """Picks how many backtrace lines to display.

    Enough lines to reach the outermost project frame, so the path from the
    test into the failing code is visible, but never more than the
    configured maximum.
    """

    locations: tuple[Frame, ...]
    maximum: int = 20

    @property
    def earliest_project_location(self) -> int | None:
        """Index of the outermost project frame, if any."""
        for index in range(len(self.locations) - 1, -1, -1):
            if self.locations[index].is_project_file:
                return index
        return None

    @property
    def limit(self) -> int:
        candidates = [self.maximum, len(self.locations)]
        earliest = self.earliest_project_location
        if earliest is not None:
            candidates.append(earliest + 1)
        return max(min(candidates), 0)
