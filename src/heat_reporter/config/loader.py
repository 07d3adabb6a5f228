"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from heat_reporter.utils.errors import ConfigError
from heat_reporter.utils.logging import LogEventNames

from .schema import HeatSettings

log = structlog.get_logger()


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ConfigError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> HeatSettings:
    """
    Load configuration from a YAML file with environment variable substitution.

    Values in the file take precedence over ``HEAT_*`` environment variables.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated HeatSettings instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If environment variables are missing or config is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    try:
        config_dict = yaml.safe_load(yaml_with_env) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        config = HeatSettings(**config_dict)
    except ValidationError as e:
        log.error(LogEventNames.CONFIG_INVALID, path=str(path), error=str(e))
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    log.info(
        LogEventNames.CONFIG_LOADED,
        path=str(path),
        slow_threshold=config.slow_threshold,
        painfully_slow_threshold=config.painfully_slow_threshold,
    )
    return config
