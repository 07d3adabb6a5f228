"""Exception hierarchy for the heat reporter.

Nothing here is meant to escape into the host test run. Parsing and
filesystem lookups degrade to sentinel values instead of raising; the
exceptions below are for invalid runner input and configuration, and they
are caught at the per-test boundary by the reporter or surfaced by the CLI.
"""

from __future__ import annotations


class HeatError(Exception):
    """Base exception for all heat reporter errors."""


class OutcomeError(HeatError, ValueError):
    """A test outcome record has an impossible combination of values."""


class ConfigError(HeatError, ValueError):
    """Configuration could not be loaded or validated."""


class ReporterError(HeatError):
    """Recording or rendering a single test result failed.

    Attributes:
        test_name: Identifier of the test being recorded, if known.
    """

    def __init__(self, message: str, test_name: str | None = None) -> None:
        super().__init__(message)
        self.test_name = test_name


class InvalidStyleError(HeatError, ValueError):
    """A token was given a style that has no entry in the style table."""
