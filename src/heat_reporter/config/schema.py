"""Pydantic models for configuration schema."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SLOW_THRESHOLD = 1.0
DEFAULT_PAINFULLY_SLOW_THRESHOLD = 3.0


class OutputConfig(BaseModel):
    """Report rendering configuration."""

    model_config = {"frozen": True}

    format: Literal["text", "json"] = "text"
    color: Literal["auto", "always", "never"] = "auto"
    backtrace_lines: int = Field(10, ge=1, le=100, description="Backtrace lines per issue")
    source_lines: int = Field(3, ge=1, le=25, description="Source lines per snippet")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"


class HeatSettings(BaseSettings):
    """Root configuration for the heat reporter.

    Thresholds are in seconds. They are deliberately not range-checked: a
    negative threshold is accepted as given and simply makes every passing
    test count as slow.
    """

    slow_threshold: float = DEFAULT_SLOW_THRESHOLD
    painfully_slow_threshold: float = DEFAULT_PAINFULLY_SLOW_THRESHOLD
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="HEAT_",
        env_nested_delimiter="__",
        frozen=True,
    )
