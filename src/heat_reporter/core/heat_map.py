"""Aggregation of issue locations into a ranked heat map of hot files."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from heat_reporter.models.backtrace import Backtrace
from heat_reporter.models.hit import Hit
from heat_reporter.models.issue_type import IssueType
from heat_reporter.utils.logging import LogEventNames

log = structlog.get_logger()

MAXIMUM_FILES_TO_SHOW = 5


class Map:
    """Issue hits keyed by file, in the order files were first hit.

    Structure:
        {
            "<file>": Hit(issues={error: [12, 12, 23], failure: [10]},
                          lines={12: [...], 23: [...], 10: [...]}),
        }
    """

    def __init__(self) -> None:
        self.hits: dict[str, Hit] = {}

    def __len__(self) -> int:
        return len(self.hits)

    def add(
        self,
        path: str,
        line_number: int,
        issue_type: IssueType,
        backtrace: Backtrace | None = None,
    ) -> Hit:
        """Record a hit against a file and line.

        Args:
            path: The path of the file the issue implicates
            line_number: The line number where the issue was encountered
            issue_type: The type of issue encountered
            backtrace: The backtrace that led to this line, if any

        Returns:
            The file's updated Hit
        """
        hit = self.hits.get(path)
        if hit is None:
            hit = self.hits[path] = Hit(path)

        hit.log(issue_type, line_number, backtrace)
        log.debug(LogEventNames.HEAT_MAP_HIT, path=path, line=line_number, type=issue_type.value)
        return hit

    def rank(
        self,
        issue_types: Iterable[IssueType] | None = None,
        limit: int = MAXIMUM_FILES_TO_SHOW,
    ) -> list[Hit]:
        """The hottest files, most severe first.

        A file whose only issue happened once isn't a hot spot; it has to
        have been hit more than once to qualify.

        Args:
            issue_types: Only consider these types of issue (all when None)
            limit: Maximum number of files to return

        Returns:
            Qualifying hits by weight descending, ties in first-hit order
        """
        types = list(issue_types) if issue_types is not None else None
        qualifying = [hit for hit in self.hits.values() if hit.count_for(types) > 1]
        # sorted() is stable, so equal weights keep insertion order
        ranked = sorted(qualifying, key=lambda hit: hit.weight_for(types), reverse=True)
        return ranked[:limit]

    def file_hits(self, issue_types: Iterable[IssueType] | None = None) -> list[Hit]:
        """The ranked subset of files worth showing."""
        return self.rank(issue_types)

    def to_list(self, issue_types: Iterable[IssueType] | None = None) -> list[dict[str, Any]]:
        """Serializable ranked hot spots."""
        types = list(issue_types) if issue_types is not None else None
        return [hit.to_dict(types) for hit in self.rank(types)]
