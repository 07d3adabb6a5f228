"""Wall-clock timing for a full test run."""

from __future__ import annotations

import time
from collections.abc import Callable

# A new or very fast suite can finish in "zero" time, and rates divide by
# the total, so it never drops below this.
MINIMUM_TOTAL_TIME = 0.01


class Timer:
    """Stopwatch for the suite plus the counts needed for throughput.

    Example:
        timer = Timer()
        timer.start()
        timer.increment_counts(3)
        timer.stop()
        timer.tests_per_second
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self.test_count = 0
        self.assertion_count = 0
        self.start_time: float | None = None
        self.stop_time: float | None = None

    def start(self) -> float:
        self.start_time = self._clock()
        return self.start_time

    def stop(self) -> float:
        self.stop_time = self._clock()
        return self.stop_time

    def increment_counts(self, assertion_count: int) -> None:
        """Record one finished test and its assertions."""
        self.test_count += 1
        self.assertion_count += assertion_count

    @property
    def delta(self) -> float:
        if self.start_time is None or self.stop_time is None:
            return 0.0
        return self.stop_time - self.start_time

    @property
    def total_time(self) -> float:
        """Run duration in seconds, never below ``MINIMUM_TOTAL_TIME``."""
        return max(self.delta, MINIMUM_TOTAL_TIME)

    @property
    def tests_per_second(self) -> float:
        return round(self.test_count / self.total_time, 2)

    @property
    def assertions_per_second(self) -> float:
        return round(self.assertion_count / self.total_time, 2)

    def to_dict(self) -> dict[str, float | int]:
        return {
            "total_time": round(self.total_time, 4),
            "tests_per_second": self.tests_per_second,
            "assertions_per_second": self.assertions_per_second,
            "test_count": self.test_count,
            "assertion_count": self.assertion_count,
        }
