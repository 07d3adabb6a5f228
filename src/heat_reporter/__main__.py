"""Entry point for running the heat reporter over saved test outcomes.

This module provides the ``heat-reporter`` command. It handles:
- Configuration loading (YAML file, ``HEAT_*`` environment, CLI flags)
- Logging setup
- Reading outcome records (JSON array or JSON lines)
- Replaying them through the reporter and mapping the result to an exit code

Exit codes: 0 when the run passed, 1 when it had errors, broken tests, or
failures, and 2 when the input or configuration couldn't be used.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from heat_reporter._version import __version__

if TYPE_CHECKING:
    from heat_reporter.config import HeatSettings
    from heat_reporter.models import TestOutcome

log = structlog.get_logger()

EXIT_PASSED = 0
EXIT_PROBLEMS = 1
EXIT_BAD_INPUT = 2


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from heat_reporter.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``)

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="heat-reporter",
        description="Report test outcomes by severity with a heat map of likely culprits",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "outcomes",
        help="JSON array or JSON-lines file of test outcomes ('-' reads stdin)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )

    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default=None,
        help="Report format (default: text)",
    )

    parser.add_argument(
        "--slow-threshold",
        type=float,
        default=None,
        help="Seconds after which a passing test counts as slow (default: 1.0)",
    )

    parser.add_argument(
        "--painfully-slow-threshold",
        type=float,
        default=None,
        help="Seconds after which a passing test counts as painfully slow (default: 3.0)",
    )

    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default=None,
        help="When to style the report with ANSI colors (default: auto)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> HeatSettings:
    """Combine the config file, environment, and CLI flags into settings.

    CLI flags win over the config file, which wins over the environment.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the config file is invalid
    """
    from heat_reporter.config import HeatSettings, load_config

    settings = load_config(args.config) if args.config is not None else HeatSettings()

    update: dict[str, Any] = {}
    if args.slow_threshold is not None:
        update["slow_threshold"] = args.slow_threshold
    if args.painfully_slow_threshold is not None:
        update["painfully_slow_threshold"] = args.painfully_slow_threshold

    output: dict[str, str] = {}
    if args.format is not None:
        output["format"] = args.format
    if args.color is not None:
        output["color"] = args.color

    if output:
        update["output"] = settings.output.model_copy(update=output)

    return settings.model_copy(update=update)


def load_outcomes(source: str) -> list[TestOutcome]:
    """Read outcome records from a file, or stdin when ``source`` is ``-``.

    Accepts either a single JSON array or one JSON object per line.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OutcomeError: If the content isn't UTF-8 encoded outcome records
    """
    from heat_reporter.models import TestOutcome
    from heat_reporter.utils.errors import OutcomeError
    from heat_reporter.utils.logging import LogEventNames

    try:
        if source == "-":
            text = sys.stdin.read()
        else:
            path = Path(source)
            if not path.is_file():
                raise FileNotFoundError(f"Outcomes file not found: {path}")
            text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise OutcomeError(f"Outcomes in {source} aren't valid UTF-8: {e}") from e

    try:
        if text.lstrip().startswith("["):
            records = json.loads(text)
            numbered = list(enumerate(records, start=1))
        else:
            numbered = [
                (number, json.loads(line))
                for number, line in enumerate(text.splitlines(), start=1)
                if line.strip()
            ]
    except json.JSONDecodeError as e:
        raise OutcomeError(f"Invalid JSON in {source}: {e}") from e

    outcomes: list[TestOutcome] = []
    for number, record in numbered:
        try:
            outcomes.append(TestOutcome.model_validate(record))
        except ValidationError as e:
            raise OutcomeError(f"Invalid outcome #{number} in {source}: {e}") from e

    log.info(LogEventNames.OUTCOMES_LOADED, source=source, count=len(outcomes))
    return outcomes


def run(args: argparse.Namespace) -> int:
    """Replay the outcomes through the reporter.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    from heat_reporter.config import use_settings
    from heat_reporter.core import HeatReporter
    from heat_reporter.utils.errors import ConfigError, OutcomeError
    from heat_reporter.utils.logging import LogEventNames, configure_logging

    try:
        settings = use_settings(build_settings(args))
        outcomes = load_outcomes(args.outcomes)
    except FileNotFoundError as e:
        log.error("input_file_not_found", error=str(e))
        return EXIT_BAD_INPUT
    except ConfigError as e:
        log.error(LogEventNames.CONFIG_INVALID, error=str(e))
        return EXIT_BAD_INPUT
    except OutcomeError as e:
        log.error(LogEventNames.OUTCOMES_INVALID, error=str(e))
        return EXIT_BAD_INPUT

    # Reconfigure logging from config file settings unless debugging was asked for
    if args.config is not None and not args.debug:
        configure_logging(level=settings.logging.level, log_format=settings.logging.format)

    reporter = HeatReporter(sys.stdout, settings)
    reporter.start()
    for outcome in outcomes:
        reporter.record(outcome)
    reporter.report()

    return EXIT_PASSED if reporter.passed else EXIT_PROBLEMS


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.log_format)

    try:
        return run(args)
    except KeyboardInterrupt:
        log.info("interrupted")
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
