"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_harmony.models import ChordTimeline
from chuk_mcp_harmony.playback import ManualClock, RecordingTrigger


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def clock() -> ManualClock:
    """A manual audio clock starting at 0."""
    return ManualClock()


@pytest.fixture
def trigger() -> RecordingTrigger:
    """A trigger that records every note."""
    return RecordingTrigger()


@pytest.fixture
def c_major_timeline() -> ChordTimeline:
    """C - G in C major at 120 BPM, one measure each."""
    timeline = ChordTimeline(name="c-g", key="C_major", tempo=120)
    timeline.add_block("C", [0, 4, 7])
    timeline.add_block("G", [0, 4, 7])
    return timeline
