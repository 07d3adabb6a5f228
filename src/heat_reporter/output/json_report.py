"""Machine-readable run summary."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from heat_reporter.utils.errors import ReporterError

if TYPE_CHECKING:
    from heat_reporter.core.results import Results
    from heat_reporter.core.timer import Timer

REPORT_VERSION = "1.0"


def build_report(
    results: Results,
    timer: Timer,
    faults: Sequence[ReporterError] = (),
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the JSON document for a finished run.

    The heat map follows the same relevance rule as the text report: skips
    and slow tests only rank when nothing more serious happened.

    Args:
        results: The recorded results
        timer: The run's stopped timer
        faults: Tests the reporter itself failed to record
        timestamp: When the report was generated (defaults to now, UTC)

    Returns:
        A dict ready for ``json.dumps``
    """
    generated_at = timestamp or datetime.now(tz=UTC)
    return {
        "version": REPORT_VERSION,
        "status": "failed" if results.problems else "passed",
        "timestamp": generated_at.isoformat(),
        "statistics": results.statistics(),
        "timing": timer.to_dict(),
        "heat_map": results.heat_map.to_list(results.relevant_issue_types()),
        "issues": [issue.to_dict() for issue in results.issues if issue.hit],
        "reporter_errors": [{"test": fault.test_name, "error": str(fault)} for fault in faults],
    }


def render_json(
    results: Results,
    timer: Timer,
    faults: Sequence[ReporterError] = (),
    indent: int = 2,
) -> str:
    """The JSON document as a string."""
    return json.dumps(build_report(results, timer, faults), indent=indent, ensure_ascii=False)
