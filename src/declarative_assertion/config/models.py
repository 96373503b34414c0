"""Pydantic models for declarative assertion configuration."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AssertionConfig(BaseModel):
    """Root configuration model for the assertion plugin."""

    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_dispatch: bool = Field(
        True, description="Whether to print dispatch events to the console"
    )
    log_file: Optional[Path] = Field(None, description="Optional file receiving dispatch events")
    use_colors: bool = Field(True, description="Whether to color console output")
    require_evaluation: bool = Field(
        True,
        description="Whether to fail tests that build an ApiAssertion without evaluating it",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper
