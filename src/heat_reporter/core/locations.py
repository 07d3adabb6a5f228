"""Blame resolution: which location most likely caused a test's problem.

A backtrace usually ends in library or framework code that failed only as a
side effect. The most actionable place to look is the innermost first-party
frame, and specifically the innermost non-test frame when there is one,
since that's more likely the cause than the symptom.

Several layers of specificity are available:
- ``final``: the nearest frame of the backtrace, wherever it is
- ``test_failure``: the nearest frame from a test file
- ``source_code``: the nearest frame from project (non-test) code
- ``project``: the nearest project frame, test or source
- ``most_relevant``: source code, then test code, then ``final``

Every layer except ``source_code`` falls back to the test definition, so a
blame location always exists even when the backtrace is empty.
"""

from __future__ import annotations

from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.frame import Frame


class Locations:
    """A test definition paired with the backtrace of its failure.

    Example:
        locations = Locations(
            Frame("/proj/tests/test_a.py", 3),
            Backtrace([
                "/proj/lib/a.py:10:in `foo'",
                "/proj/tests/test_a.py:5:in `test_foo'",
            ]),
        )
        locations.most_relevant.line  # 10
        locations.broken_test         # False
    """

    def __init__(self, test_definition: Frame, backtrace: Backtrace | None = None) -> None:
        self.test_definition = test_definition
        self.backtrace = backtrace if backtrace is not None else Backtrace()

    def __str__(self) -> str:
        return self.most_relevant.short

    def __repr__(self) -> str:
        return f"Locations({self.test_definition!r}, {self.backtrace!r})"

    @property
    def backtrace_present(self) -> bool:
        """True if the backtrace has at least one usable entry."""
        return bool(self.backtrace.locations)

    @property
    def source_code(self) -> Frame | None:
        """Nearest frame from project source code (never a test), if any."""
        return self.backtrace.final_source_code_location

    @property
    def test_failure(self) -> Frame:
        """Nearest frame from a test file, falling back to the test definition."""
        return self.backtrace.final_test_location or self.test_definition

    @property
    def project(self) -> Frame:
        """Nearest project frame, falling back to the test definition."""
        return self.backtrace.final_project_location or self.test_definition

    @property
    def final(self) -> Frame:
        """Nearest frame of the backtrace, falling back to the test definition."""
        return self.backtrace.final_location or self.test_definition

    @property
    def freshest(self) -> Frame | None:
        """The most recently modified project file in the backtrace."""
        return self.backtrace.freshest_project_location

    @property
    def preceding(self) -> Frame | None:
        """The project frame that called ``project``, if any."""
        return self.backtrace.preceding_location

    @property
    def most_relevant(self) -> Frame:
        """The single best place to start looking."""
        candidates = (self.source_code, self.test_failure, self.final)
        return next(frame for frame in candidates if frame is not None)

    @property
    def broken_test(self) -> bool:
        """True when the test's own code raised, rather than the code under test.

        That's the case when the very nearest frame is itself in a test.
        """
        return self.test_failure is not None and self.test_failure == self.final

    @property
    def proper_failure(self) -> bool:
        """True when project source code is implicated and the test isn't broken."""
        return self.source_code is not None and not self.broken_test

    @property
    def heat_map_frames(self) -> list[Frame]:
        """Project locations to log against the heat map for this pair.

        The most relevant location, plus the test line that led there when
        that's a different place, deduplicated and limited to project files.
        """
        frames: list[Frame] = []
        seen: set[tuple[str, int]] = set()
        for frame in (self.most_relevant, self.test_failure):
            key = (frame.relative_filename, frame.line)
            if key in seen or not frame.is_project_file:
                continue
            seen.add(key)
            frames.append(frame)
        return frames
