"""Utility functions and helpers.

- errors: Exception hierarchy
- logging: Structured logging configuration
"""

from heat_reporter.utils.errors import (
    ConfigError,
    HeatError,
    InvalidStyleError,
    OutcomeError,
    ReporterError,
)
from heat_reporter.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    # Errors
    "ConfigError",
    "HeatError",
    "InvalidStyleError",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "OutcomeError",
    "ReporterError",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
