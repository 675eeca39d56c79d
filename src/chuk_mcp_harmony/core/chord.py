"""
Chord primitives - ChordType, ChordDefinition and the diatonic chord tables.

Chords are stacks of intervals measured from the root (a major triad is
0, 4, 7 semitones). Each key yields 7 diatonic triads, 7 diatonic sevenths
and 4 borrowed (modal-interchange) chords from the parallel mode.
Roman numerals are the key-relative chord labels.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .pitch import PitchClass, frequency
from .scale import Mode, scale_notes


class ChordType(str, Enum):
    """Chord qualities recognised by interval pattern."""

    MAJOR = "maj"
    MINOR = "min"
    DIMINISHED = "dim"
    MAJOR_7 = "maj7"
    MINOR_7 = "min7"
    DOMINANT_7 = "dom7"
    HALF_DIMINISHED_7 = "half-dim7"


# Intervals from the root for each chord type
CHORD_INTERVALS: dict[ChordType, tuple[int, ...]] = {
    ChordType.MAJOR: (0, 4, 7),
    ChordType.MINOR: (0, 3, 7),
    ChordType.DIMINISHED: (0, 3, 6),
    ChordType.MAJOR_7: (0, 4, 7, 11),
    ChordType.MINOR_7: (0, 3, 7, 10),
    ChordType.DOMINANT_7: (0, 4, 7, 10),
    ChordType.HALF_DIMINISHED_7: (0, 3, 6, 10),
}

_TYPE_BY_INTERVALS: dict[tuple[int, ...], ChordType] = {
    intervals: chord_type for chord_type, intervals in CHORD_INTERVALS.items()
}

# Chord symbol suffixes (C, Cm, C°, Cmaj7, Cm7, C7, Cø7)
CHORD_SYMBOL_SUFFIXES: dict[ChordType, str] = {
    ChordType.MAJOR: "",
    ChordType.MINOR: "m",
    ChordType.DIMINISHED: "°",
    ChordType.MAJOR_7: "maj7",
    ChordType.MINOR_7: "m7",
    ChordType.DOMINANT_7: "7",
    ChordType.HALF_DIMINISHED_7: "ø7",
}

# (numeral, type) per scale degree
DIATONIC_TRIADS: dict[Mode, tuple[tuple[str, ChordType], ...]] = {
    Mode.MAJOR: (
        ("I", ChordType.MAJOR),
        ("ii", ChordType.MINOR),
        ("iii", ChordType.MINOR),
        ("IV", ChordType.MAJOR),
        ("V", ChordType.MAJOR),
        ("vi", ChordType.MINOR),
        ("vii°", ChordType.DIMINISHED),
    ),
    Mode.MINOR: (
        ("i", ChordType.MINOR),
        ("ii°", ChordType.DIMINISHED),
        ("III", ChordType.MAJOR),
        ("iv", ChordType.MINOR),
        ("v", ChordType.MINOR),
        ("VI", ChordType.MAJOR),
        ("VII", ChordType.MAJOR),
    ),
}

DIATONIC_SEVENTHS: dict[Mode, tuple[tuple[str, ChordType], ...]] = {
    Mode.MAJOR: (
        ("Imaj7", ChordType.MAJOR_7),
        ("ii7", ChordType.MINOR_7),
        ("iii7", ChordType.MINOR_7),
        ("IVmaj7", ChordType.MAJOR_7),
        ("V7", ChordType.DOMINANT_7),
        ("vi7", ChordType.MINOR_7),
        ("viiø7", ChordType.HALF_DIMINISHED_7),
    ),
    Mode.MINOR: (
        ("i7", ChordType.MINOR_7),
        ("iiø7", ChordType.HALF_DIMINISHED_7),
        ("IIImaj7", ChordType.MAJOR_7),
        ("iv7", ChordType.MINOR_7),
        ("v7", ChordType.MINOR_7),
        ("VImaj7", ChordType.MAJOR_7),
        ("VII7", ChordType.DOMINANT_7),
    ),
}

# (numeral, semitones above tonic, type) borrowed from the parallel mode
BORROWED_CHORDS: dict[Mode, tuple[tuple[str, int, ChordType], ...]] = {
    # Major borrows from parallel minor
    Mode.MAJOR: (
        ("iv", 5, ChordType.MINOR),
        ("bVI", 8, ChordType.MAJOR),
        ("bVII", 10, ChordType.MAJOR),
        ("bIII", 3, ChordType.MAJOR),
    ),
    # Minor borrows from parallel major
    Mode.MINOR: (
        ("IV", 5, ChordType.MAJOR),
        ("VI", 9, ChordType.MAJOR),
        ("VII", 11, ChordType.MAJOR),
        ("III", 3, ChordType.MAJOR),
    ),
}

UNKNOWN_NUMERAL = "?"


def normalize_intervals(intervals: Sequence[int]) -> tuple[int, ...]:
    """Sort ascending and drop duplicates."""
    return tuple(sorted(set(intervals)))


@dataclass(frozen=True)
class ChordDefinition:
    """
    A chord rooted on a pitch class, labelled with its Roman numeral.

    Intervals are semitones from the root, strictly ascending.

    Immutable and hashable.
    """

    numeral: str
    chord_type: ChordType
    intervals: tuple[int, ...]
    root: PitchClass

    def __post_init__(self) -> None:
        if tuple(self.intervals) != normalize_intervals(self.intervals):
            raise ValueError(
                f"Chord intervals must be strictly ascending, got {list(self.intervals)}"
            )

    def get_pitches(self) -> list[PitchClass]:
        """Get the pitch classes of the chord tones, in interval order."""
        return [self.root.transpose(interval) for interval in self.intervals]

    def get_midi_notes(self, octave: int = 4) -> list[int]:
        """Get MIDI note numbers with the root in the given octave."""
        root_midi = self.root.to_midi(octave)
        return [root_midi + interval for interval in self.intervals]

    @property
    def symbol(self) -> str:
        """Chord symbol with sharp spelling, e.g. 'F#m'."""
        return chord_symbol(self.root, self.chord_type)

    def __str__(self) -> str:
        return f"{self.numeral}: {self.symbol}"


def _build(numeral: str, chord_type: ChordType, root: PitchClass) -> ChordDefinition:
    return ChordDefinition(numeral, chord_type, CHORD_INTERVALS[chord_type], root)


def scale_chords(tonic: PitchClass, mode: Mode) -> list[ChordDefinition]:
    """
    Get the 7 diatonic triads of a key.

    Args:
        tonic: The key's tonic
        mode: The key's mode

    Returns:
        Triads rooted on each scale note, in degree order
    """
    return [
        _build(numeral, chord_type, root)
        for root, (numeral, chord_type) in zip(
            scale_notes(tonic, mode), DIATONIC_TRIADS[mode], strict=True
        )
    ]


def seventh_chords(tonic: PitchClass, mode: Mode) -> list[ChordDefinition]:
    """Get the 7 diatonic seventh chords of a key."""
    return [
        _build(numeral, chord_type, root)
        for root, (numeral, chord_type) in zip(
            scale_notes(tonic, mode), DIATONIC_SEVENTHS[mode], strict=True
        )
    ]


def borrowed_chords(tonic: PitchClass, mode: Mode) -> list[ChordDefinition]:
    """
    Get the common borrowed chords from the parallel key (modal interchange).

    Major keys borrow iv, bVI, bVII and bIII from the parallel minor.
    Minor keys borrow IV, VI, VII and III from the parallel major.
    """
    return [
        _build(numeral, chord_type, tonic.transpose(offset))
        for numeral, offset, chord_type in BORROWED_CHORDS[mode]
    ]


def chord_type_from_intervals(intervals: Sequence[int]) -> ChordType | None:
    """Recognise a chord type from its intervals, or None if unrecognised."""
    return _TYPE_BY_INTERVALS.get(normalize_intervals(intervals))


def chord_symbol(root: PitchClass, chord_type: ChordType) -> str:
    """Chord symbol for a root and type, e.g. 'Dm', 'B°', 'G7'."""
    return f"{root.spell()}{CHORD_SYMBOL_SUFFIXES[chord_type]}"


def full_chord_name(root: PitchClass, intervals: Sequence[int]) -> str:
    """
    Chord symbol derived from intervals.

    Unrecognised interval sets are named as a plain major chord.
    """
    chord_type = chord_type_from_intervals(intervals) or ChordType.MAJOR
    return chord_symbol(root, chord_type)


def roman_numeral(
    chord_root: PitchClass,
    chord_intervals: Sequence[int],
    tonic: PitchClass,
    mode: Mode,
) -> str:
    """
    Get the Roman numeral of a chord in a key.

    Looks for a scale degree whose expected root matches the chord root and
    whose triad (then seventh) type matches the chord's intervals.

    Returns:
        The numeral (e.g. 'ii', 'V7'), or '?' when nothing matches
    """
    chord_type = chord_type_from_intervals(chord_intervals)
    if chord_type is None:
        return UNKNOWN_NUMERAL

    for chord in scale_chords(tonic, mode) + seventh_chords(tonic, mode):
        if chord.root == chord_root and chord.chord_type == chord_type:
            return chord.numeral

    return UNKNOWN_NUMERAL


def chord_frequencies(
    root: PitchClass, intervals: Sequence[int], octave: int = 4
) -> list[float]:
    """
    Frequencies of the chord tones with the root in the given octave.

    Intervals beyond the octave (9ths, 13ths) sound in higher octaves.
    """
    root_frequency = frequency(root, octave)
    return [root_frequency * 2 ** (interval / 12) for interval in intervals]
