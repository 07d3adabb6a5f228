"""Tests for classifying test outcomes into issues."""

from pathlib import Path

import pytest

from heat_reporter.config import HeatSettings, configure
from heat_reporter.core.issue import Issue
from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.frame import Frame
from heat_reporter.models.issue_type import ISSUE_TYPES, IssueType
from heat_reporter.models.outcome import TestOutcome
from heat_reporter.utils.errors import OutcomeError


@pytest.fixture
def definition(test_file: Path) -> Frame:
    return Frame(str(test_file), 4, "(test definition)")


@pytest.fixture
def source_backtrace(source_file: Path, test_file: Path) -> Backtrace:
    return Backtrace([f"{source_file}:9:in `average'", f"{test_file}:9:in `test_average'"])


@pytest.fixture
def test_backtrace(source_file: Path, test_file: Path) -> Backtrace:
    return Backtrace([f"{test_file}:9:in `test_average'", f"{source_file}:9:in `average'"])


def build(definition: Frame, **kwargs) -> Issue:
    return Issue(test_location=definition, test_identifier="test_average", **kwargs)


class TestClassification:
    """Test every path through the classification order."""

    def test_error_in_source_code(self, definition: Frame, source_backtrace: Backtrace) -> None:
        """Test an exception raised by the code under test."""
        issue = build(definition, error=True, backtrace=source_backtrace)

        assert issue.type is IssueType.ERROR
        assert issue.hit

    def test_error_in_test_code_is_broken(
        self, definition: Frame, test_backtrace: Backtrace
    ) -> None:
        """Test an exception raised by the test itself."""
        issue = build(definition, error=True, backtrace=test_backtrace)

        assert issue.type is IssueType.BROKEN

    def test_error_without_backtrace_is_broken(self, definition: Frame) -> None:
        """Test an exception with nothing to go on is blamed on the test."""
        assert build(definition, error=True).type is IssueType.BROKEN

    def test_skipped(self, definition: Frame) -> None:
        """Test a skipped test."""
        assert build(definition, skipped=True).type is IssueType.SKIPPED

    def test_failure(self, definition: Frame, source_backtrace: Backtrace) -> None:
        """Test an assertion that didn't hold."""
        issue = build(definition, backtrace=source_backtrace, message="Expected 0, got 1")

        assert issue.type is IssueType.FAILURE

    @pytest.mark.parametrize(
        ("execution_time", "expected"),
        [
            (0.0, IssueType.SUCCESS),
            (0.99, IssueType.SUCCESS),
            (1.0, IssueType.SLOW),
            (2.99, IssueType.SLOW),
            (3.0, IssueType.PAINFUL),
            (42.0, IssueType.PAINFUL),
        ],
    )
    def test_passed_by_duration(
        self, definition: Frame, execution_time: float, expected: IssueType
    ) -> None:
        """Test passing tests are split by the default thresholds."""
        issue = build(definition, passed=True, execution_time=execution_time)

        assert issue.type is expected

    def test_success_is_not_a_hit(self, definition: Frame) -> None:
        """Test a fast pass isn't worth reporting."""
        issue = build(definition, passed=True, execution_time=0.01)

        assert not issue.hit

    def test_slow_failure_is_still_a_failure(self, definition: Frame) -> None:
        """Test timing only matters for tests that passed."""
        assert build(definition, execution_time=10.0).type is IssueType.FAILURE

    def test_exactly_one_type(self, definition: Frame) -> None:
        """Test every valid flag combination yields exactly one known type."""
        combinations = [
            {"passed": True},
            {"error": True},
            {"skipped": True},
            {},
        ]
        for flags in combinations:
            for execution_time in (0.0, 1.5, 5.0):
                issue = build(definition, execution_time=execution_time, **flags)
                assert issue.type in IssueType

    @pytest.mark.parametrize(
        "flags",
        [
            {"error": True, "skipped": True},
            {"passed": True, "error": True},
            {"passed": True, "skipped": True},
        ],
    )
    def test_impossible_flags_rejected(self, definition: Frame, flags: dict) -> None:
        """Test flag combinations no runner produces are refused."""
        with pytest.raises(OutcomeError):
            build(definition, **flags)


class TestThresholds:
    """Test configurable slowness thresholds."""

    def test_explicit_settings(self, definition: Frame) -> None:
        """Test thresholds handed to the constructor."""
        settings = HeatSettings(slow_threshold=0.1, painfully_slow_threshold=0.5)

        issue = build(definition, passed=True, execution_time=0.2, settings=settings)

        assert issue.type is IssueType.SLOW
        assert issue.slow_threshold == 0.1

    def test_process_wide_settings(self, definition: Frame) -> None:
        """Test the process-wide settings in effect at construction time."""
        configure(slow_threshold=0.1, painfully_slow_threshold=0.2)

        assert build(definition, passed=True, execution_time=0.15).type is IssueType.SLOW

    def test_later_changes_never_reclassify(self, definition: Frame) -> None:
        """Test an issue keeps the type it was built with."""
        issue = build(definition, passed=True, execution_time=2.0)
        assert issue.type is IssueType.SLOW

        configure(slow_threshold=5.0, painfully_slow_threshold=10.0)

        assert issue.type is IssueType.SLOW
        assert build(definition, passed=True, execution_time=2.0).type is IssueType.SUCCESS

    def test_inverted_thresholds_favor_painful(self, definition: Frame) -> None:
        """Test painfully slow wins when it's configured below slow."""
        settings = HeatSettings(slow_threshold=5.0, painfully_slow_threshold=2.0)

        issue = build(definition, passed=True, execution_time=3.0, settings=settings)

        assert issue.type is IssueType.PAINFUL

    def test_negative_thresholds_accepted(self, definition: Frame) -> None:
        """Test negative thresholds make every pass at least slow."""
        settings = HeatSettings(slow_threshold=-1.0, painfully_slow_threshold=10.0)

        issue = build(definition, passed=True, execution_time=0.0, settings=settings)

        assert issue.type is IssueType.SLOW


class TestDisplay:
    """Test display helpers."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("test_saves_records", "Saves records"),
            ("test_", "test_"),
            ("checks_totals", "checks_totals"),
            ("", "Unknown test"),
        ],
    )
    def test_test_name(self, definition: Frame, identifier: str, expected: str) -> None:
        """Test the human-friendly test name."""
        issue = Issue(test_location=definition, test_identifier=identifier)

        assert issue.test_name == expected

    def test_error_summary_is_first_line(self, definition: Frame) -> None:
        """Test long exception messages are cut to their first line."""
        issue = build(definition, error=True, message="ZeroDivisionError: division by zero\nmore")

        assert issue.summary == "ZeroDivisionError: division by zero"

    def test_failure_summary_is_whole_message(self, definition: Frame) -> None:
        """Test failure messages are kept whole."""
        issue = build(definition, message="Expected:\n 1\nActual:\n 2")

        assert issue.summary == "Expected:\n 1\nActual:\n 2"

    def test_label(self, definition: Frame) -> None:
        """Test the label for the issue's type."""
        assert build(definition, skipped=True).label == "Skipped"

    def test_labels_for_all_types(self) -> None:
        """Test every reportable type has a label."""
        assert [t.label for t in ISSUE_TYPES] == [
            "Error",
            "Broken Test",
            "Failure",
            "Skipped",
            "Passed but Very Slow",
            "Passed but Slow",
        ]

    def test_to_dict(self, definition: Frame, source_backtrace: Backtrace) -> None:
        """Test the serializable form uses project-relative paths."""
        issue = Issue(
            test_location=definition,
            test_identifier="test_average",
            test_class="TestInvoice",
            backtrace=source_backtrace,
            message="division by zero",
            assertions=2,
            execution_time=0.123456,
            error=True,
        )

        assert issue.to_dict() == {
            "type": "error",
            "label": "Error",
            "test_class": "TestInvoice",
            "test_name": "test_average",
            "execution_time": 0.1235,
            "assertions": 2,
            "summary": "division by zero",
            "location": {"file": "lib/invoice.py", "line": 9, "container": "average"},
            "test_location": {
                "file": "tests/test_invoice.py",
                "line": 4,
                "container": "(test definition)",
            },
        }


class TestFromOutcome:
    """Test building issues from runner outcome records."""

    def test_from_outcome(self, source_file: Path, test_file: Path) -> None:
        """Test every field carries over."""
        outcome = TestOutcome(
            name="test_average",
            class_name="TestInvoice",
            source_path=str(test_file),
            source_line=8,
            assertions=1,
            time=0.05,
            error=True,
            message="ZeroDivisionError: division by zero",
            backtrace=[f"{source_file}:9:in `average'", f"{test_file}:9:in `test_average'"],
        )

        issue = Issue.from_outcome(outcome)

        assert issue.type is IssueType.ERROR
        assert issue.test_class == "TestInvoice"
        assert issue.test_location == Frame(str(test_file), 8, "(test definition)")
        assert issue.locations.most_relevant.short == "lib/invoice.py:9"
        assert issue.assertions == 1

    def test_outcome_rejects_impossible_flags(self) -> None:
        """Test the outcome model validates its flags."""
        with pytest.raises(ValueError, match="both raise an error and be skipped"):
            TestOutcome(name="t", source_path="t.py", error=True, skipped=True)
