"""
Compilation pipeline - transforms chord timelines to MIDI.

The pipeline:
    ChordTimeline (in-memory)
    → MidiEvent list (one event per chord tone, deterministic)
    → MIDI File

A recorded playback session (TriggeredNote list) can enter at the event stage.
"""

from chuk_mcp_harmony.compiler.midi import (
    TICKS_PER_BEAT,
    TICKS_PER_EIGHTH,
    MidiEvent,
    events_to_midi,
    timeline_to_events,
    timeline_to_midi,
    triggered_notes_to_events,
)

__all__ = [
    "TICKS_PER_BEAT",
    "TICKS_PER_EIGHTH",
    "MidiEvent",
    "events_to_midi",
    "timeline_to_events",
    "timeline_to_midi",
    "triggered_notes_to_events",
]
