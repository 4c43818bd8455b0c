"""
underbar - Pydantic Models

Validated option and settings models used around the library: timer
parameters for the deferred decorators, logging settings read from the
environment, and performance reports produced by the utilities.
"""

import logging
import os
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TimerOptions(BaseModel):
    """Wait parameter shared by delay() and throttle()"""
    wait_ms: float = Field(
        ...,
        description="Milliseconds to wait before the deferred action runs",
        ge=0
    )

    @property
    def seconds(self) -> float:
        """Wait expressed in seconds, as timer facilities expect"""
        return self.wait_ms / 1000.0


class LibrarySettings(BaseModel):
    """Logging settings, loaded from UNDERBAR_* environment variables"""
    log_level: str = Field(
        "INFO",
        description="Root log level for setup_logging()"
    )
    log_file: Optional[str] = Field(
        None,
        description="Optional file that receives a copy of the log output"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Only accept level names the logging module knows about"""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "LibrarySettings":
        """Build settings from the process environment"""
        return cls(
            log_level=os.environ.get("UNDERBAR_LOG_LEVEL", "INFO"),
            log_file=os.environ.get("UNDERBAR_LOG_FILE") or None
        )


class PerformanceReport(BaseModel):
    """Timing and memory footprint of a single measured call"""
    operation: str = Field(..., description="Name given to the measured operation")
    execution_time_ms: float = Field(..., description="Wall time in milliseconds", ge=0)
    memory_usage_mb: float = Field(..., description="Peak traced memory in MB", ge=0)
    success: bool = Field(..., description="Whether the call returned normally")
    result_size: Optional[int] = Field(None, description="len() of the result, when it has one")
    error: Optional[str] = Field(None, description="Error message when the call raised")
    timestamp: float = Field(..., description="Epoch seconds when the measurement finished")
