"""
Playback scheduler - lookahead scheduling of chord blocks against an audio clock.

While playing, two cooperative activities run on the asyncio event loop:

- a coarse scheduling pass (every `schedule_interval_ms`) that hands every
  chord block starting inside the lookahead window to the note trigger,
  stamped with an exact clock time;
- a fine playhead update (every `refresh_interval_s`) that reports the
  current virtual time and handles the end of the timeline (loop or stop).

Virtual time is measured in eighth notes from the reference start time.
The scan cadence is shorter than the lookahead window, so no block start is
ever skipped between passes.

Without a running event loop nothing is started automatically and the
caller drives `schedule_ahead()` and `update_playhead()` directly.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_harmony.config import PlaybackSettings
from chuk_mcp_harmony.constants import DEFAULT_TEMPO
from chuk_mcp_harmony.core.chord import chord_frequencies
from chuk_mcp_harmony.models.timeline import ChordBlock
from chuk_mcp_harmony.playback.clock import AudioClock
from chuk_mcp_harmony.playback.triggers import NoteTrigger

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    """Scheduler session state."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class ScheduledEvent:
    """A block start already handed to the audio clock in this session."""

    block_id: str
    scheduled_start_time: float


def seconds_per_eighth(tempo: float) -> float:
    """Length of an eighth note in seconds: (60 / tempo) / 2."""
    return (60 / tempo) / 2


class PlaybackScheduler:
    """
    Plays a chord-block snapshot through a note trigger.

    States: stopped (initial), playing, paused. Pausing does not keep the
    playhead position; the next play() starts again from 0.

    Example:
        scheduler = PlaybackScheduler(
            clock, trigger, tempo=120, blocks=timeline.blocks,
            on_time_update=lambda t: print(f"{t:.2f} eighths"),
        )
        scheduler.play()
    """

    def __init__(
        self,
        clock: AudioClock | None = None,
        trigger: NoteTrigger | None = None,
        *,
        tempo: float = DEFAULT_TEMPO,
        blocks: Sequence[ChordBlock] = (),
        loop: bool = False,
        on_time_update: Callable[[float], None] | None = None,
        on_playback_end: Callable[[], None] | None = None,
        settings: PlaybackSettings | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            clock: Audio clock (None until the audio backend is ready)
            trigger: Note trigger (None until the audio backend is ready)
            tempo: Tempo in BPM
            blocks: Chord blocks to play (a snapshot is taken)
            loop: Restart at the end instead of stopping
            on_time_update: Called with the virtual time in eighth notes
            on_playback_end: Called once when a non-looping session ends
            settings: Timing and voicing settings
        """
        self.clock = clock
        self.trigger = trigger
        self.settings = settings or PlaybackSettings()
        self.on_time_update = on_time_update
        self.on_playback_end = on_playback_end

        self._tempo = float(tempo)
        self._blocks: tuple[ChordBlock, ...] = tuple(blocks)
        self._loop = loop

        self._state = PlaybackState.STOPPED
        self._reference_start = 0.0
        self._virtual_time = 0.0
        self._scheduled: set[ScheduledEvent] = set()
        self._tasks: list[asyncio.Task[None]] = []
        self._session = 0

    # -- properties ---------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def virtual_time(self) -> float:
        """Last computed playhead position, in eighth notes."""
        return self._virtual_time

    @property
    def scheduled_events(self) -> frozenset[ScheduledEvent]:
        return frozenset(self._scheduled)

    @property
    def audio_available(self) -> bool:
        return self.clock is not None and self.trigger is not None

    @property
    def tempo(self) -> float:
        return self._tempo

    @property
    def blocks(self) -> tuple[ChordBlock, ...]:
        return self._blocks

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def seconds_per_eighth(self) -> float:
        return seconds_per_eighth(self._tempo)

    def total_duration(self) -> float:
        """Sum of all block durations, in eighth notes."""
        return sum(block.duration for block in self._blocks)

    # -- configuration ------------------------------------------------------

    def attach_audio(self, clock: AudioClock, trigger: NoteTrigger) -> None:
        """Supply the audio backend once it becomes usable."""
        self.clock = clock
        self.trigger = trigger

    def update(
        self,
        *,
        tempo: float | None = None,
        blocks: Sequence[ChordBlock] | None = None,
        loop: bool | None = None,
    ) -> None:
        """Replace the snapshot read by subsequent passes."""
        if tempo is not None:
            self._tempo = float(tempo)
        if blocks is not None:
            self._blocks = tuple(blocks)
        if loop is not None:
            self._loop = loop

    # -- transport ----------------------------------------------------------

    def play(self) -> None:
        """
        Start playback from the beginning.

        No-op if already playing, if there are no blocks, or if the audio
        backend is not available yet.
        """
        if self._state is PlaybackState.PLAYING:
            return
        if not self._blocks:
            logger.debug("play() declined: timeline is empty")
            return
        if self.clock is None or self.trigger is None:
            logger.debug("play() declined: audio backend not available")
            return

        self._state = PlaybackState.PLAYING
        self._reference_start = self.clock.now()
        self._virtual_time = 0.0
        self._scheduled.clear()
        logger.debug(f"Playback started at {self._reference_start:.3f}s ({self._tempo} bpm)")

        self.schedule_ahead()
        self._start_activities()

    def pause(self) -> None:
        """Halt both activities. Notes already scheduled still sound."""
        if self._state is not PlaybackState.PLAYING:
            return
        self._state = PlaybackState.PAUSED
        self._cancel_activities()
        logger.debug(f"Playback paused at {self._virtual_time:.2f} eighths")

    def stop(self) -> None:
        """Halt playback and return the playhead to 0. Valid in any state."""
        self._cancel_activities()
        self._state = PlaybackState.STOPPED
        self._virtual_time = 0.0
        self._scheduled.clear()
        self._emit_time(0.0)

    # -- the two repeating activities ---------------------------------------

    def schedule_ahead(self) -> int:
        """
        Run one scheduling pass over the lookahead window.

        Returns:
            Number of blocks newly scheduled
        """
        if self._state is not PlaybackState.PLAYING or self.clock is None:
            return 0

        now = self.clock.now()
        spe = self.seconds_per_eighth
        current = (now - self._reference_start) / spe
        window_end = current + self.settings.lookahead_seconds / spe

        count = 0
        for block in self._blocks:
            event = ScheduledEvent(block.id, block.position)
            if event in self._scheduled:
                continue
            if current <= block.position < window_end:
                seconds_until_block = (block.position - current) * spe
                self._trigger_block(block, now + seconds_until_block)
                self._scheduled.add(event)
                count += 1
        return count

    def update_playhead(self) -> float:
        """
        Recompute and report the playhead, handling the end of the timeline.

        Returns:
            The virtual time reported to the time-update callback
        """
        if self._state is not PlaybackState.PLAYING or self.clock is None:
            return self._virtual_time

        current = self._current_virtual_time()
        self._virtual_time = current
        self._emit_time(current)

        if current >= self.total_duration():
            if self._loop:
                self._restart_loop()
            else:
                self._finish()
        return current

    # -- internals ----------------------------------------------------------

    def _current_virtual_time(self) -> float:
        assert self.clock is not None
        return (self.clock.now() - self._reference_start) / self.seconds_per_eighth

    def _trigger_block(self, block: ChordBlock, when: float) -> None:
        assert self.trigger is not None
        duration = block.duration * self.seconds_per_eighth
        for freq in chord_frequencies(block.root_note, block.intervals, self.settings.octave):
            self.trigger(freq, when, duration)

    def _restart_loop(self) -> None:
        assert self.clock is not None
        self._reference_start = self.clock.now()
        self._virtual_time = 0.0
        self._scheduled.clear()
        logger.debug("Loop restart")
        # Schedule immediately so the first block is not missed
        self.schedule_ahead()

    def _finish(self) -> None:
        self._state = PlaybackState.STOPPED
        self._cancel_activities()
        self._virtual_time = 0.0
        self._scheduled.clear()
        self._emit_time(0.0)
        logger.debug("Playback ended")
        if self.on_playback_end is not None:
            self.on_playback_end()

    def _emit_time(self, value: float) -> None:
        if self.on_time_update is not None:
            self.on_time_update(value)

    def _start_activities(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; scheduler is driven manually")
            return
        self._session += 1
        self._tasks = [
            loop.create_task(self._run_scheduler(self._session)),
            loop.create_task(self._run_playhead(self._session)),
        ]

    def _cancel_activities(self) -> None:
        # Loops from an older session exit on their next wake-up
        self._session += 1
        if not self._tasks:
            return
        current = asyncio.current_task()
        for task in self._tasks:
            if task is not current:
                task.cancel()
        self._tasks = []

    def _is_current(self, session: int) -> bool:
        return self._state is PlaybackState.PLAYING and self._session == session

    async def _run_scheduler(self, session: int) -> None:
        interval = self.settings.schedule_interval_s
        while self._is_current(session):
            await asyncio.sleep(interval)
            if not self._is_current(session):
                return
            self.schedule_ahead()

    async def _run_playhead(self, session: int) -> None:
        interval = self.settings.refresh_interval_s
        while self._is_current(session):
            await asyncio.sleep(interval)
            if not self._is_current(session):
                return
            self.update_playhead()
