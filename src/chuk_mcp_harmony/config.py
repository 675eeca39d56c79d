"""
Playback settings - scheduler timing and voicing defaults.

Settings are a pydantic model with sensible defaults. They can be overridden
from a YAML file:

    # harmony.yaml
    lookahead_seconds: 0.15
    schedule_interval_ms: 20
    octave: 3
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from chuk_mcp_harmony.constants import (
    DEFAULT_BLOCK_DURATION,
    DEFAULT_GAIN,
    DEFAULT_OCTAVE,
    DEFAULT_TEMPO,
    LOOKAHEAD_SECONDS,
    MAX_TEMPO,
    MIN_TEMPO,
    REFRESH_INTERVAL_SECONDS,
    SCHEDULE_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


class PlaybackSettings(BaseModel):
    """Timing and voicing configuration for playback."""

    lookahead_seconds: float = Field(
        LOOKAHEAD_SECONDS, gt=0, description="How far ahead of the clock notes are scheduled"
    )
    schedule_interval_ms: float = Field(
        SCHEDULE_INTERVAL_MS, gt=0, description="Cadence of the scheduling pass"
    )
    refresh_interval_s: float = Field(
        REFRESH_INTERVAL_SECONDS, gt=0, description="Cadence of playhead updates"
    )
    # B6 plus a 13th is MIDI 116; one octave higher leaves the MIDI range
    octave: int = Field(DEFAULT_OCTAVE, ge=0, le=6, description="Octave of chord roots")
    gain: float = Field(DEFAULT_GAIN, ge=0.0, le=1.0, description="Note gain (0-1)")
    default_tempo: int = Field(
        DEFAULT_TEMPO, ge=MIN_TEMPO, le=MAX_TEMPO, description="Tempo for new timelines"
    )
    default_block_duration: float = Field(
        DEFAULT_BLOCK_DURATION, gt=0, description="Duration of new chord blocks (eighths)"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def check_cadence(self) -> PlaybackSettings:
        """The scan cadence must be shorter than the lookahead window."""
        if self.schedule_interval_ms / 1000 >= self.lookahead_seconds:
            raise ValueError(
                f"schedule_interval_ms ({self.schedule_interval_ms}) must be shorter than "
                f"lookahead_seconds ({self.lookahead_seconds})"
            )
        return self

    @property
    def schedule_interval_s(self) -> float:
        return self.schedule_interval_ms / 1000


def load_settings(path: Path | None = None) -> PlaybackSettings:
    """
    Load playback settings from a YAML file.

    Args:
        path: Settings file; defaults are used if None or missing

    Returns:
        The loaded settings
    """
    if path is None or not path.exists():
        if path is not None:
            logger.info(f"Settings file not found, using defaults: {path}")
        return PlaybackSettings()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return PlaybackSettings(**data)
