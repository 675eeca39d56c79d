"""Playback scheduling for chord timelines."""

from chuk_mcp_harmony.playback.clock import AudioClock, ManualClock, MonotonicClock
from chuk_mcp_harmony.playback.preview import preview_playback
from chuk_mcp_harmony.playback.scheduler import (
    PlaybackScheduler,
    PlaybackState,
    ScheduledEvent,
    seconds_per_eighth,
)
from chuk_mcp_harmony.playback.triggers import NoteTrigger, RecordingTrigger, TriggeredNote

__all__ = [
    "AudioClock",
    "ManualClock",
    "MonotonicClock",
    "NoteTrigger",
    "PlaybackScheduler",
    "PlaybackState",
    "RecordingTrigger",
    "ScheduledEvent",
    "TriggeredNote",
    "preview_playback",
    "seconds_per_eighth",
]
