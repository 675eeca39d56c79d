"""
Offline preview - run a full playback session against a manual clock.

The scheduler is stepped at its own scan cadence instead of by timers, so the
result is exactly what a real-time session would have handed to the audio
backend, without waiting for it.
"""

from __future__ import annotations

import logging
import math

from chuk_mcp_harmony.config import PlaybackSettings
from chuk_mcp_harmony.models.timeline import ChordTimeline
from chuk_mcp_harmony.playback.clock import ManualClock
from chuk_mcp_harmony.playback.scheduler import PlaybackScheduler, PlaybackState, seconds_per_eighth
from chuk_mcp_harmony.playback.triggers import RecordingTrigger, TriggeredNote

logger = logging.getLogger(__name__)


def preview_playback(
    timeline: ChordTimeline, settings: PlaybackSettings | None = None
) -> list[TriggeredNote]:
    """
    Play a timeline once (looping disabled) and collect every triggered note.

    Args:
        timeline: Timeline to play
        settings: Playback settings (defaults if None)

    Returns:
        Triggered notes in trigger order, times in seconds from the start
    """
    settings = settings or PlaybackSettings()
    clock = ManualClock()
    trigger = RecordingTrigger()
    scheduler = PlaybackScheduler(
        clock,
        trigger,
        tempo=timeline.tempo,
        blocks=timeline.blocks,
        loop=False,
        settings=settings,
    )

    scheduler.play()
    if scheduler.state is not PlaybackState.PLAYING:
        return []

    step = settings.schedule_interval_s
    length = scheduler.total_duration() * seconds_per_eighth(timeline.tempo)
    max_steps = math.ceil(length / step) + 2

    steps = 0
    while scheduler.state is PlaybackState.PLAYING:
        if steps > max_steps:
            scheduler.stop()
            raise RuntimeError(f"Preview of '{timeline.name}' did not finish in {max_steps} steps")
        clock.advance(step)
        scheduler.schedule_ahead()
        scheduler.update_playhead()
        steps += 1

    logger.debug(f"Previewed '{timeline.name}': {len(trigger)} notes in {steps} steps")
    return trigger.notes
