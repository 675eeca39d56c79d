#!/usr/bin/env python3
"""
Example: Play a chord progression through the lookahead scheduler.

Builds a I-V-vi-IV timeline, runs it in real time with a printing trigger,
then writes it to a MIDI file you can open in any DAW.

Usage:
    python examples/play_progression.py
    # Creates: examples/output/pop_progression.mid
"""

import asyncio
import logging
from pathlib import Path

from chuk_mcp_harmony.compiler import timeline_to_midi
from chuk_mcp_harmony.core import midi_to_note_name
from chuk_mcp_harmony.core.pitch import frequency_to_midi
from chuk_mcp_harmony.models import ChordTimeline
from chuk_mcp_harmony.playback import MonotonicClock, PlaybackScheduler


def print_note(frequency: float, when: float, duration: float) -> None:
    """A trigger that prints instead of making sound."""
    name = midi_to_note_name(frequency_to_midi(frequency))
    print(f"  {when:6.3f}s  {name:<4} {frequency:7.2f} Hz  for {duration:.2f}s")


async def play(timeline: ChordTimeline) -> None:
    """Play the timeline once in real time."""
    finished = asyncio.Event()
    scheduler = PlaybackScheduler(
        MonotonicClock(),
        print_note,
        tempo=timeline.tempo,
        blocks=timeline.blocks,
        on_playback_end=finished.set,
    )
    scheduler.play()
    await finished.wait()


def main() -> None:
    """Build, play and export a progression."""
    logging.basicConfig(level=logging.INFO)

    timeline = ChordTimeline(name="pop-progression", key="C_major", tempo=140)
    timeline.add_block("C", [0, 4, 7])
    timeline.add_block("G", [0, 4, 7])
    timeline.add_block("A", [0, 3, 7], modifiers=["7"])
    timeline.add_block("F", [0, 4, 7], modifiers=["add9"])

    print(f"Playing {' - '.join(b.numeral for b in timeline.blocks)} at {timeline.tempo} BPM")
    asyncio.run(play(timeline))

    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)
    path = output_dir / "pop_progression.mid"
    timeline_to_midi(timeline).save(str(path))
    print(f"\nCreated: {path}")


if __name__ == "__main__":
    main()
