"""Data model for a completed test as reported by the runner."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TestOutcome(BaseModel):
    """Everything the reporter needs to know about one finished test.

    ``backtrace`` holds raw frame strings, nearest frame first. Field names
    are short to keep JSON-lines input files compact; ``source_path`` and
    ``source_line`` are where the test itself is defined.
    """

    # Keep pytest from trying to collect this as a test class
    __test__ = False

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    class_name: str = ""
    source_path: str
    source_line: int = 1
    assertions: int = Field(0, ge=0)
    time: float = Field(0.0, ge=0.0)
    passed: bool = False
    error: bool = False
    skipped: bool = False
    message: str = ""
    backtrace: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_flags(self) -> TestOutcome:
        """Reject flag combinations no runner can produce."""
        if self.error and self.skipped:
            raise ValueError("A test can't both raise an error and be skipped")
        if self.passed and (self.error or self.skipped):
            raise ValueError("A test that errored or was skipped can't also pass")
        return self
