"""
MIDI export - the end of the pipeline.

This module converts chord timelines, or notes recorded during a playback
session, to MIDI files using mido.
All operations are deterministic: same input → same output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_harmony.constants import CHORD_CHANNEL, DEFAULT_GAIN, DEFAULT_OCTAVE, EIGHTHS_PER_BEAT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_harmony.models.timeline import ChordTimeline
    from chuk_mcp_harmony.playback.triggers import TriggeredNote

logger = logging.getLogger(__name__)


# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

# The timeline grid unit
TICKS_PER_EIGHTH = TICKS_PER_BEAT // EIGHTHS_PER_BEAT

MAX_MIDI_NOTE = 127


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    This is the lowest-level representation before writing to MIDI.
    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int  # 0-127
    channel: int = CHORD_CHANNEL  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick, then by pitch for stable output
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off", x[1].note))

    # Convert to delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def velocity_float_to_int(velocity: float) -> int:
    """Convert velocity from 0.0-1.0 range to 0-127."""
    return max(0, min(127, int(velocity * 127)))


def eighths_to_ticks(eighths: float) -> int:
    """Convert a timeline position in eighth notes to ticks."""
    return round(eighths * TICKS_PER_EIGHTH)


def seconds_to_ticks(seconds: float, tempo_bpm: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert seconds to ticks at a tempo."""
    return round(seconds * tempo_bpm / 60 * ticks_per_beat)


def timeline_to_events(
    timeline: ChordTimeline,
    octave: int = DEFAULT_OCTAVE,
    velocity: float = DEFAULT_GAIN,
) -> list[MidiEvent]:
    """
    One MidiEvent per chord tone of every block in the timeline.

    Args:
        timeline: Timeline to render
        octave: Octave of the chord roots
        velocity: Note velocity (0.0-1.0)

    Returns:
        Events ordered by block, then chord tone. Tones above MIDI note 127
        are skipped.
    """
    vel = velocity_float_to_int(velocity)
    events = []
    for block in timeline.blocks:
        root_midi = block.root_note.to_midi(octave)
        start = eighths_to_ticks(block.position)
        length = eighths_to_ticks(block.duration)
        for interval in block.intervals:
            pitch = root_midi + interval
            if pitch > MAX_MIDI_NOTE:
                logger.warning(
                    f"Skipping MIDI note {pitch} above {MAX_MIDI_NOTE} in block {block.id}"
                )
                continue
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=start,
                    duration_ticks=length,
                    velocity=vel,
                )
            )
    return events


def triggered_notes_to_events(
    notes: Sequence[TriggeredNote],
    tempo_bpm: float,
    velocity: float = DEFAULT_GAIN,
) -> list[MidiEvent]:
    """
    Convert notes recorded from a playback session to MidiEvents.

    Times are relative to the first note, so a session started at any
    clock time renders from tick 0.
    """
    if not notes:
        return []

    vel = velocity_float_to_int(velocity)
    origin = min(note.start_time for note in notes)
    events = []
    for note in notes:
        if note.midi > MAX_MIDI_NOTE:
            logger.warning(f"Skipping MIDI note {note.midi} above {MAX_MIDI_NOTE}")
            continue
        events.append(
            MidiEvent(
                pitch=note.midi,
                start_ticks=seconds_to_ticks(note.start_time - origin, tempo_bpm),
                duration_ticks=seconds_to_ticks(note.duration, tempo_bpm),
                velocity=vel,
            )
        )
    return events


def timeline_to_midi(
    timeline: ChordTimeline,
    octave: int = DEFAULT_OCTAVE,
    velocity: float = DEFAULT_GAIN,
) -> MidiFile:
    """
    Render a timeline straight to a MidiFile.

    Example:
        midi = timeline_to_midi(timeline)
        midi.save("progression.mid")
    """
    events = timeline_to_events(timeline, octave=octave, velocity=velocity)
    return events_to_midi(events, tempo_bpm=timeline.tempo)
