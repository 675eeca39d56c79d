"""
Note triggers - where scheduled chord tones are sent.

A trigger receives (frequency, absolute start time, duration) for every
chord tone the scheduler plays. RecordingTrigger keeps them, so a playback
session can be inspected or rendered to MIDI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from chuk_mcp_harmony.core.pitch import frequency_to_midi

if TYPE_CHECKING:
    from chuk_mcp_harmony.compiler.midi import MidiEvent


class NoteTrigger(Protocol):
    """Play a note at an absolute clock time for a duration, all in seconds."""

    def __call__(self, frequency: float, when: float, duration: float) -> None: ...


@dataclass(frozen=True)
class TriggeredNote:
    """A single note handed to the audio backend."""

    frequency: float
    start_time: float
    duration: float

    @property
    def midi(self) -> int:
        """Nearest MIDI note number."""
        return frequency_to_midi(self.frequency)


class RecordingTrigger:
    """Collects every triggered note, in trigger order."""

    def __init__(self) -> None:
        self.notes: list[TriggeredNote] = []

    def __call__(self, frequency: float, when: float, duration: float) -> None:
        self.notes.append(TriggeredNote(frequency, when, duration))

    def clear(self) -> None:
        self.notes.clear()

    def __len__(self) -> int:
        return len(self.notes)

    def to_midi_events(self, tempo_bpm: float) -> list[MidiEvent]:
        """Recorded notes as MIDI events, starting at tick 0."""
        from chuk_mcp_harmony.compiler.midi import triggered_notes_to_events

        return triggered_notes_to_events(self.notes, tempo_bpm)
