"""Configuration models for the persisted stopwatch settings."""

from __future__ import annotations

from pydantic import BaseModel, Field

from stopwatch_cli.models.stopwatch.state import (
    DEFAULT_INTERVAL,
    MAX_INTERVAL,
    MIN_INTERVAL,
)


class StopwatchConfig(BaseModel):
    """Settings that survive restarts. Laps and elapsed time never do."""

    display_interval: float = Field(
        default=DEFAULT_INTERVAL,
        ge=MIN_INTERVAL,
        le=MAX_INTERVAL,
        description="Seconds between background re-renders",
    )
