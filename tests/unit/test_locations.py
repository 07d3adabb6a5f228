"""Tests for blame resolution between a test definition and its backtrace."""

from pathlib import Path

import pytest

from heat_reporter.core.locations import Locations
from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.frame import Frame


@pytest.fixture
def definition(test_file: Path) -> Frame:
    return Frame(str(test_file), 3, "test_total")


@pytest.fixture
def source_then_test(source_file: Path, test_file: Path) -> Backtrace:
    return Backtrace(
        [
            f"{source_file}:10:in `foo'",
            f"{test_file}:5:in `bar'",
        ]
    )


class TestProperFailure:
    """Test a failure raised from project source code."""

    def test_blames_source_code(self, definition: Frame, source_then_test: Backtrace) -> None:
        """Test the source frame is the most relevant location."""
        locations = Locations(definition, source_then_test)

        assert locations.source_code is not None
        assert locations.source_code.line == 10
        assert locations.test_failure.line == 5
        assert locations.most_relevant == locations.source_code
        assert not locations.broken_test
        assert locations.proper_failure

    def test_project_and_final(self, definition: Frame, source_then_test: Backtrace) -> None:
        """Test the nearest project and nearest overall frames."""
        locations = Locations(definition, source_then_test)

        assert locations.project.line == 10
        assert locations.final.line == 10
        assert locations.preceding is not None
        assert locations.preceding.line == 5
        assert locations.backtrace_present

    def test_str_is_short_location(self, definition: Frame, source_then_test: Backtrace) -> None:
        """Test the string form points at the most relevant location."""
        assert str(Locations(definition, source_then_test)) == "lib/invoice.py:10"


class TestBrokenTest:
    """Test an exception raised by the test's own code."""

    def test_reversed_backtrace_is_broken(
        self, definition: Frame, source_file: Path, test_file: Path
    ) -> None:
        """Test a test frame nearest the raise means the test itself is broken."""
        backtrace = Backtrace(
            [
                f"{test_file}:5:in `bar'",
                f"{source_file}:10:in `foo'",
            ]
        )

        locations = Locations(definition, backtrace)

        assert locations.final == locations.test_failure
        assert locations.broken_test
        assert not locations.proper_failure

    def test_empty_backtrace_falls_back_to_definition(self, definition: Frame) -> None:
        """Test every fallback lands on the test definition."""
        locations = Locations(definition, Backtrace())

        assert not locations.backtrace_present
        assert locations.source_code is None
        assert locations.test_failure == definition
        assert locations.project == definition
        assert locations.final == definition
        assert locations.most_relevant == definition
        assert locations.broken_test
        assert locations.freshest is None
        assert locations.preceding is None

    def test_default_backtrace(self, definition: Frame) -> None:
        """Test omitting the backtrace is the same as an empty one."""
        assert Locations(definition).most_relevant == definition


class TestNeitherBrokenNorProper:
    """Test failures from outside the project."""

    def test_external_frame_first(self, definition: Frame, test_file: Path) -> None:
        """Test an exception from library code called directly by the test."""
        backtrace = Backtrace(
            [
                "/usr/lib/python3.12/json/decoder.py:355:in `raw_decode'",
                f"{test_file}:5:in `bar'",
            ]
        )

        locations = Locations(definition, backtrace)

        assert locations.source_code is None
        assert locations.most_relevant == locations.test_failure
        assert locations.final.path == "/usr/lib/python3.12/json/decoder.py"
        assert not locations.broken_test
        assert not locations.proper_failure

    def test_only_external_frames(self, definition: Frame) -> None:
        """Test the test definition is blamed when nothing is from the project."""
        backtrace = Backtrace(["/usr/lib/python3.12/json/decoder.py:355:in `raw_decode'"])

        locations = Locations(definition, backtrace)

        assert locations.test_failure == definition
        assert locations.most_relevant == definition
        assert not locations.broken_test


class TestHeatMapFrames:
    """Test which locations get logged against the heat map."""

    def test_source_and_test_lines(self, definition: Frame, source_then_test: Backtrace) -> None:
        """Test a proper failure logs the source line and the test line that led there."""
        frames = Locations(definition, source_then_test).heat_map_frames

        assert [(f.relative_filename, f.line) for f in frames] == [
            ("lib/invoice.py", 10),
            ("tests/test_invoice.py", 5),
        ]

    def test_deduplicated(self, definition: Frame) -> None:
        """Test the definition is logged once when it's both fallbacks."""
        frames = Locations(definition, Backtrace()).heat_map_frames

        assert frames == [definition]

    def test_excludes_files_outside_project(self, project_dir: Path) -> None:
        """Test locations outside the project never reach the heat map."""
        definition = Frame("/elsewhere/test_thing.py", 3)

        assert Locations(definition, Backtrace()).heat_map_frames == []
