"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    DEFAULT_PAINFULLY_SLOW_THRESHOLD,
    DEFAULT_SLOW_THRESHOLD,
    HeatSettings,
    LoggingConfig,
    OutputConfig,
)
from .settings import configure, get_settings, reset_settings, use_settings

__all__ = [
    # Defaults
    "DEFAULT_PAINFULLY_SLOW_THRESHOLD",
    "DEFAULT_SLOW_THRESHOLD",
    # Root config
    "HeatSettings",
    # Nested configs
    "LoggingConfig",
    "OutputConfig",
    # Process-wide instance
    "configure",
    "get_settings",
    # Loader
    "load_config",
    "reset_settings",
    "use_settings",
]
