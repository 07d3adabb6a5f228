"""Process-wide default settings.

Issues read their thresholds from a ``HeatSettings`` value handed to their
constructor. When none is given they fall back to the instance held here, so
changing it only affects issues built afterwards.
"""

from __future__ import annotations

from typing import Any

import structlog

from heat_reporter.utils.logging import LogEventNames

from .schema import HeatSettings

log = structlog.get_logger()

_settings: HeatSettings | None = None


def get_settings() -> HeatSettings:
    """Get or create the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = HeatSettings()
    return _settings


def use_settings(settings: HeatSettings) -> HeatSettings:
    """Replace the process-wide settings instance.

    Args:
        settings: Settings to install

    Returns:
        The installed settings
    """
    global _settings
    _settings = settings
    log.debug(
        LogEventNames.SETTINGS_CHANGED,
        slow_threshold=settings.slow_threshold,
        painfully_slow_threshold=settings.painfully_slow_threshold,
    )
    return settings


def configure(**overrides: Any) -> HeatSettings:
    """Override individual settings on top of the current instance.

    Example:
        configure(slow_threshold=0.5, painfully_slow_threshold=2.0)

    Args:
        **overrides: Field values to replace

    Returns:
        The new process-wide settings
    """
    data = get_settings().model_dump()
    data.update(overrides)
    return use_settings(HeatSettings(**data))


def reset_settings() -> HeatSettings:
    """Restore the defaults (plus any ``HEAT_*`` environment overrides)."""
    global _settings
    _settings = None
    log.debug(LogEventNames.SETTINGS_RESET)
    return get_settings()
