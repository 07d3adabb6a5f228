"""The reporter lifecycle: start, record each test, report.

A runner (or the CLI, replaying saved outcomes) drives it:

1. ``start()`` once, before the first test
2. ``record()`` once per finished test, printing its marker immediately
3. ``report()`` once, after the last test

Nothing the reporter does is allowed to fail the test run. A fault while
recording one test is logged, noted in the output with a request to report
it, and the run carries on with the next test.
"""

from __future__ import annotations

from typing import TextIO

import structlog

from heat_reporter.config.schema import HeatSettings
from heat_reporter.config.settings import get_settings
from heat_reporter.models.outcome import TestOutcome
from heat_reporter.output.console import Output
from heat_reporter.output.json_report import render_json
from heat_reporter.output.marker import REPORTER_MARKER
from heat_reporter.utils.errors import ReporterError
from heat_reporter.utils.logging import LogEventNames

from .issue import Issue
from .results import Results
from .timer import Timer

log = structlog.get_logger()


class HeatReporter:
    """Collects test outcomes and renders a prioritized report.

    Example:
        reporter = HeatReporter(sys.stdout)
        reporter.start()
        for outcome in outcomes:
            reporter.record(outcome)
        reporter.report()
        sys.exit(0 if reporter.passed else 1)

    Args:
        stream: Where markers and the report are written (defaults to stdout)
        settings: Settings to classify and render with (defaults to the
            process-wide settings at construction time)
    """

    def __init__(self, stream: TextIO | None = None, settings: HeatSettings | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.output = Output(
            stream,
            color=self.settings.output.color,
            backtrace_lines=self.settings.output.backtrace_lines,
            source_lines=self.settings.output.source_lines,
        )
        self.results = Results()
        self.timer = Timer()
        self.faults: list[ReporterError] = []

    @property
    def text_mode(self) -> bool:
        return self.settings.output.format == "text"

    @property
    def passed(self) -> bool:
        """Did this run pass? Skips and slow tests don't count against it."""
        return not self.results.problems

    def start(self) -> None:
        """Starts reporting on the run."""
        log.info(LogEventNames.RUN_STARTED, format=self.settings.output.format)
        self.timer.start()

    def record(self, outcome: TestOutcome | Issue) -> Issue | None:
        """Record one finished test.

        Args:
            outcome: The runner's outcome record, or an already built Issue

        Returns:
            The recorded issue, or None when recording it failed
        """
        test_name: str | None = None
        try:
            test_name = getattr(outcome, "name", None) or getattr(outcome, "test_identifier", None)
            issue = (
                outcome
                if isinstance(outcome, Issue)
                else Issue.from_outcome(outcome, self.settings)
            )
            self.results.record(issue)
            self.timer.increment_counts(issue.assertions)
            log.debug(
                LogEventNames.ISSUE_RECORDED,
                test=test_name,
                type=issue.type.value,
                location=str(issue.locations),
            )
            if self.text_mode:
                self.output.marker(issue.type)
            return issue
        except Exception as e:
            self._record_fault(ReporterError(str(e), test_name=test_name), e)
            return None

    def report(self) -> None:
        """Outputs the summary of the run."""
        self.timer.stop()

        if self.text_mode:
            self._report_text()
        else:
            self.output.write(render_json(self.results, self.timer, self.faults))
            self.output.newline()

        log.info(
            LogEventNames.RUN_FINISHED,
            passed=self.passed,
            tests=self.timer.test_count,
            total_time=round(self.timer.total_time, 4),
        )

    def listed_issues(self) -> list[Issue]:
        """The issues to detail, least critical first.

        This deliberately inverts the severity order used everywhere else
        (summary, heat map weights): the most pressing issues end up at the
        bottom, right above the summary, so they're visible without
        scrolling. As they get fixed the list shrinks until the less critical
        ones surface again. Slow tests and skips only show when nothing more
        serious happened.
        """
        results = self.results
        listed: list[Issue] = []
        if not results.problems:
            listed.extend([*results.painfuls, *results.slows, *results.skips])
        listed.extend([*results.failures, *results.brokens, *results.errors])
        return listed

    def _report_text(self) -> None:
        self.output.newline()
        self.output.newline()

        for issue in self.listed_issues():
            try:
                self.output.issue_details(issue)
            except Exception as e:
                fault = ReporterError(str(e), test_name=issue.test_identifier)
                self._record_fault(fault, e, action="rendering")

        self.output.compact_summary(self.results, self.timer)
        self.output.heat_map(self.results)
        log.debug(LogEventNames.REPORT_RENDERED, issues=len(self.results.issues))

    def _record_fault(
        self, fault: ReporterError, cause: Exception, action: str = "recording"
    ) -> None:
        self.faults.append(fault)
        log.exception(
            LogEventNames.RECORD_FAILED, test=fault.test_name, action=action, error=str(cause)
        )

        if not self.text_mode:
            # The JSON document lists faults itself; stray text would corrupt it
            return

        test_name = fault.test_name or "an unknown test"
        self.output.marker(REPORTER_MARKER)
        self.output.newline()
        self.output.diagnostic(
            f"Sorry, but the reporter encountered an error {action} '{test_name}': "
            f"{type(cause).__name__}: {cause}. The rest of the run will still be "
            "reported. Please file a bug report for heat-reporter including the "
            "details above."
        )
