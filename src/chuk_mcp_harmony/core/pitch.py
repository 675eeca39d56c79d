"""
Pitch primitives - PitchClass and equal-temperament frequency math.

PitchClass represents the 12 chromatic pitches (octave-independent).
The module-level functions convert between pitch classes, MIDI note numbers,
note names ("C#4") and frequencies in Hz.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import IntEnum

# Concert pitch reference: A4 = MIDI 69 = 440 Hz
A4_FREQUENCY = 440.0
A4_MIDI = 69

# Standard 88-key piano range (A0 to C8)
PIANO_LOWEST_MIDI = 21
PIANO_HIGHEST_MIDI = 108

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

# Spellings whose letter crosses the B-C or E-F boundary
_WRAPPING_NAMES: dict[str, int] = {"Cb": 11, "Fb": 4, "E#": 5, "B#": 0}

# Octave correction for note names: Cb4 is B3, B#4 is C5
_OCTAVE_WRAP: dict[str, int] = {"Cb": -12, "B#": 12}

_NOTE_NAME_RE = re.compile(r"^([A-Ga-g][#b]?)(-?\d+)$")


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled by the enharmonic speller.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @property
    def is_black(self) -> bool:
        """True for the five pitch classes on the black piano keys."""
        return "#" in _SHARP_NAMES[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a string like 'C', 'C#', 'Db' or 'Cs'.

        Letter-wrapping spellings (Cb, Fb, E#, B#) are accepted too.
        """
        name = name.strip()

        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))

        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        if name in _WRAPPING_NAMES:
            return cls(_WRAPPING_NAMES[name])

        # Enum names (C, Cs, D, Ds, etc.)
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(f"Unknown pitch class: {name}")


def midi_to_frequency(midi: float) -> float:
    """
    Frequency in Hz for a MIDI note number.

    f = 440 * 2^((n - 69) / 12)
    """
    return A4_FREQUENCY * 2 ** ((midi - A4_MIDI) / 12)


def frequency_to_midi(frequency: float) -> int:
    """Nearest MIDI note number for a frequency (round half to even)."""
    return round(A4_MIDI + 12 * math.log2(frequency / A4_FREQUENCY))


def frequency(pitch_class: PitchClass, octave: int = 4) -> float:
    """Equal-temperament frequency of a pitch class in an octave."""
    return midi_to_frequency(pitch_class.to_midi(octave))


def midi_to_note_name(midi: int, prefer_flats: bool = False) -> str:
    """
    Note name with octave for a MIDI note number.

    MIDI 21 = A0, MIDI 60 = C4, MIDI 108 = C8.
    """
    octave = midi // 12 - 1
    return f"{PitchClass.from_midi(midi).spell(prefer_flats)}{octave}"


def note_name_to_midi(name: str) -> int:
    """
    Parse a note name like 'C4', 'F#3' or 'Bb-1' to a MIDI note number.

    Raises:
        ValueError: If the name cannot be parsed
    """
    match = _NOTE_NAME_RE.match(name.strip())
    if not match:
        raise ValueError(f"Invalid note name: {name}")
    note, octave = match.groups()
    note = note[0].upper() + note[1:]
    return PitchClass.parse(note).to_midi(int(octave)) + _OCTAVE_WRAP.get(note, 0)


@dataclass(frozen=True)
class PianoKey:
    """A single key of the piano keyboard."""

    midi: int
    name: str
    pitch_class: PitchClass
    octave: int
    frequency: float

    @property
    def is_black(self) -> bool:
        return self.pitch_class.is_black


def piano_keys(
    start_midi: int = PIANO_LOWEST_MIDI, end_midi: int = PIANO_HIGHEST_MIDI
) -> list[PianoKey]:
    """
    Generate piano key data for an inclusive MIDI range.

    The default range is the standard 88-key piano (A0 to C8).
    """
    return [
        PianoKey(
            midi=midi,
            name=midi_to_note_name(midi),
            pitch_class=PitchClass.from_midi(midi),
            octave=midi // 12 - 1,
            frequency=midi_to_frequency(midi),
        )
        for midi in range(start_midi, end_midi + 1)
    ]
