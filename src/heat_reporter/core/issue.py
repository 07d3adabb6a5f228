"""Classification of one test outcome into the issue taxonomy."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from heat_reporter.config.schema import HeatSettings
from heat_reporter.config.settings import get_settings
from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.frame import Frame
from heat_reporter.models.issue_type import IssueType
from heat_reporter.models.outcome import TestOutcome
from heat_reporter.utils.errors import OutcomeError

from .locations import Locations

TEST_NAME_PREFIX = "test_"


class Issue:
    """A single test outcome, classified.

    The type is decided once, when the issue is built, from the outcome
    flags, the blame resolution of the backtrace, and the thresholds of the
    settings in effect at that moment. Changing the settings later never
    reclassifies an existing issue.

    Classification order:
    1. raised an exception: ``broken`` if the test's own code raised,
       otherwise ``error``
    2. ``skipped``
    3. didn't pass: ``failure``
    4. passed: ``painful``, ``slow``, or ``success`` by execution time

    The painfully-slow threshold is checked before the slow one, so it wins
    when the two are configured the wrong way round.
    """

    def __init__(
        self,
        *,
        test_location: Frame,
        test_identifier: str = "",
        test_class: str = "",
        backtrace: Backtrace | Iterable[str] | None = None,
        message: str = "",
        assertions: int = 0,
        execution_time: float = 0.0,
        passed: bool = False,
        error: bool = False,
        skipped: bool = False,
        settings: HeatSettings | None = None,
    ) -> None:
        if error and skipped:
            raise OutcomeError(f"{test_identifier or 'test'} can't both error and be skipped")
        if passed and (error or skipped):
            raise OutcomeError(f"{test_identifier or 'test'} can't pass after erroring or skipping")

        settings = settings if settings is not None else get_settings()

        self.test_location = test_location
        self.test_identifier = test_identifier
        self.test_class = test_class
        self.backtrace = backtrace if isinstance(backtrace, Backtrace) else Backtrace(backtrace)
        self.message = message or ""
        self.assertions = max(int(assertions), 0)
        self.execution_time = max(float(execution_time), 0.0)
        self.passed = passed
        self.error = error
        self.skipped = skipped
        self.slow_threshold = settings.slow_threshold
        self.painfully_slow_threshold = settings.painfully_slow_threshold

        self.locations = Locations(test_location, self.backtrace)
        self._type = self._classify()

    @classmethod
    def from_outcome(cls, outcome: TestOutcome, settings: HeatSettings | None = None) -> Issue:
        """Build an issue from a runner's outcome record."""
        return cls(
            test_location=Frame(outcome.source_path, outcome.source_line, "(test definition)"),
            test_identifier=outcome.name,
            test_class=outcome.class_name,
            backtrace=Backtrace(outcome.backtrace),
            message=outcome.message,
            assertions=outcome.assertions,
            execution_time=outcome.time,
            passed=outcome.passed,
            error=outcome.error,
            skipped=outcome.skipped,
            settings=settings,
        )

    def __repr__(self) -> str:
        return f"Issue({self.type.value}, {self.test_class}#{self.test_identifier})"

    @property
    def type(self) -> IssueType:
        return self._type

    @property
    def hit(self) -> bool:
        """True for anything worth reporting on, i.e. everything but a fast pass."""
        return self._type is not IssueType.SUCCESS

    @property
    def slow(self) -> bool:
        return self.execution_time >= self.slow_threshold

    @property
    def painful(self) -> bool:
        return self.execution_time >= self.painfully_slow_threshold

    @property
    def label(self) -> str:
        return self._type.label

    @property
    def test_name(self) -> str:
        """Human-friendly test name: ``test_saves_records`` becomes ``Saves records``."""
        identifier = self.test_identifier.strip()
        if not identifier:
            return "Unknown test"
        if identifier.startswith(TEST_NAME_PREFIX):
            cleaned = identifier.removeprefix(TEST_NAME_PREFIX).replace("_", " ").strip()
            return cleaned.capitalize() if cleaned else identifier
        return identifier

    @property
    def summary(self) -> str:
        """Short description of what went wrong.

        Exception messages often carry a long multi-line dump, so errors
        keep just the first line.
        """
        message = self.message.strip()
        if self.error:
            return message.splitlines()[0].strip() if message else ""
        return message

    def _classify(self) -> IssueType:
        if self.error:
            return IssueType.BROKEN if self.locations.broken_test else IssueType.ERROR
        if self.skipped:
            return IssueType.SKIPPED
        if not self.passed:
            return IssueType.FAILURE
        if self.painful:
            return IssueType.PAINFUL
        if self.slow:
            return IssueType.SLOW
        return IssueType.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary with project-relative paths."""
        return {
            "type": self._type.value,
            "label": self.label,
            "test_class": self.test_class,
            "test_name": self.test_identifier,
            "execution_time": round(self.execution_time, 4),
            "assertions": self.assertions,
            "summary": self.summary,
            "location": self.locations.most_relevant.to_dict(),
            "test_location": self.test_location.to_dict(),
        }
