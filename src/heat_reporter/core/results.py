"""Collection of every issue recorded during a run."""

from __future__ import annotations

from heat_reporter.models.issue_type import IssueType

from .heat_map import Map
from .issue import Issue


class Results:
    """The issues for a run plus the heat map built up as they arrive.

    Created when the run starts, fed one ``record`` call per finished test,
    and only read once the run is over.
    """

    def __init__(self) -> None:
        self.issues: list[Issue] = []
        self.heat_map = Map()
        self.test_count = 0
        self.assertion_count = 0
        self.success_count = 0

    def record(self, issue: Issue) -> None:
        """Add an issue and log its blame locations against the heat map.

        The heat map is updated first so an issue whose locations can't be
        logged isn't counted either.
        """
        if issue.hit:
            for frame in issue.locations.heat_map_frames:
                self.heat_map.add(
                    str(frame.absolute_pathname),
                    frame.line,
                    issue.type,
                    backtrace=issue.backtrace,
                )

        self.issues.append(issue)
        self.test_count += 1
        self.assertion_count += issue.assertions
        if issue.passed:
            self.success_count += 1

    def of_type(self, issue_type: IssueType) -> list[Issue]:
        return [issue for issue in self.issues if issue.type is issue_type]

    @property
    def errors(self) -> list[Issue]:
        return self.of_type(IssueType.ERROR)

    @property
    def brokens(self) -> list[Issue]:
        return self.of_type(IssueType.BROKEN)

    @property
    def failures(self) -> list[Issue]:
        return self.of_type(IssueType.FAILURE)

    @property
    def skips(self) -> list[Issue]:
        return self.of_type(IssueType.SKIPPED)

    @property
    def painfuls(self) -> list[Issue]:
        """Very slow tests, slowest first."""
        return self._slowest_first(IssueType.PAINFUL)

    @property
    def slows(self) -> list[Issue]:
        """Slow tests, slowest first."""
        return self._slowest_first(IssueType.SLOW)

    @property
    def problems(self) -> bool:
        """True if anything actually went wrong: an error, broken test, or failure."""
        return any(issue.type.critical for issue in self.issues)

    def statistics(self) -> dict[str, int]:
        """Counts per issue type plus the total number of tests."""
        counts = {issue_type.value: 0 for issue_type in IssueType}
        for issue in self.issues:
            counts[issue.type.value] += 1
        counts["total"] = len(self.issues)
        return counts

    def relevant_issue_types(self) -> list[IssueType]:
        """Issue types worth putting in front of the reader.

        Errors, broken tests, and failures always are. When there are real
        problems, skips and slow tests are noise that distracts from them;
        slowness is also set aside while there are skips to deal with.
        """
        issue_types = [IssueType.ERROR, IssueType.BROKEN, IssueType.FAILURE]

        if not self.problems:
            issue_types.append(IssueType.SKIPPED)
            if not self.skips:
                issue_types.extend([IssueType.PAINFUL, IssueType.SLOW])

        return issue_types

    def _slowest_first(self, issue_type: IssueType) -> list[Issue]:
        return sorted(
            self.of_type(issue_type), key=lambda issue: issue.execution_time, reverse=True
        )
