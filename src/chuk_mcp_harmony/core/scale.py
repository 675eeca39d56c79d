"""
Scale primitives - Mode, Key and scale-degree labelling.

Scales are interval patterns from a tonic. A Key is a tonic plus a mode.
Scale degrees are 1-based positions (1-7) within the scale; chromatic
positions outside the scale get accidental labels (♭3, ♯4, ...).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_harmony.constants import ErrorMessages

from .pitch import PitchClass


class Mode(str, Enum):
    """The two supported modes."""

    MAJOR = "major"
    MINOR = "minor"


# Cumulative semitone offsets from the tonic for each degree
SCALE_INTERVALS: dict[Mode, tuple[int, ...]] = {
    Mode.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    Mode.MINOR: (0, 2, 3, 5, 7, 8, 10),  # natural minor
}

# Labels for chromatic (out-of-scale) intervals from the tonic
CHROMATIC_LABELS: dict[Mode, dict[int, str]] = {
    Mode.MAJOR: {
        1: "♭2",
        3: "♭3",
        6: "♭5",
        8: "♭6",
        10: "♭7",
    },
    Mode.MINOR: {
        1: "♭2",
        4: "3",  # raised third (parallel major)
        6: "♭5",
        9: "6",  # raised sixth (dorian/melodic)
        11: "7",  # leading tone
    },
}


def scale_notes(tonic: PitchClass, mode: Mode) -> list[PitchClass]:
    """
    Get the 7 pitch classes of a scale, starting from the tonic.

    Args:
        tonic: The tonic pitch class
        mode: Major or (natural) minor

    Returns:
        7 distinct pitch classes in scale order
    """
    return [tonic.transpose(offset) for offset in SCALE_INTERVALS[mode]]


def is_in_scale(note: PitchClass, notes: Sequence[PitchClass]) -> bool:
    """Check whether a note belongs to a scale."""
    return note in notes


def scale_degree(note: PitchClass | int, tonic: PitchClass, mode: Mode) -> int | None:
    """
    Get the 1-based scale degree of a chromatic position.

    Returns None if the position is not diatonic to the key.
    """
    interval = (int(note) - tonic.value) % 12
    intervals = SCALE_INTERVALS[mode]
    if interval in intervals:
        return intervals.index(interval) + 1
    return None


def _nearest_lower_degree(interval: int, intervals: Sequence[int]) -> int:
    for i in range(len(intervals) - 1, -1, -1):
        if intervals[i] < interval:
            return i + 1
    return 1


def scale_degree_label(chromatic_position: int, tonic: PitchClass, mode: Mode) -> str:
    """
    Get the scale-degree label for a chromatic position relative to a key.

    Diatonic positions get their degree number ("1".."7"). Chromatic positions
    use the mode's accidental lookup, falling back to a raised label built on
    the nearest lower diatonic degree.

    Examples:
        scale_degree_label(2, PitchClass.C, Mode.MAJOR)  # "2"
        scale_degree_label(3, PitchClass.C, Mode.MAJOR)  # "♭3"
        scale_degree_label(8, PitchClass.A, Mode.MINOR)  # "7"

    Args:
        chromatic_position: Position 0-11 where C=0 (any int, normalised mod 12)
        tonic: The key's tonic
        mode: The key's mode

    Returns:
        Scale degree label
    """
    degree = scale_degree(chromatic_position % 12, tonic, mode)
    if degree is not None:
        return str(degree)

    interval = (chromatic_position - tonic.value) % 12
    label = CHROMATIC_LABELS[mode].get(interval)
    if label is not None:
        return label
    return f"♯{_nearest_lower_degree(interval, SCALE_INTERVALS[mode])}"


@dataclass(frozen=True)
class Key:
    """
    A key is a tonic pitch class plus a mode.

    This is the context for resolving scale degrees to actual pitches.

    Examples:
        Key(PitchClass.C, Mode.MAJOR) = C major
        Key(PitchClass.D, Mode.MINOR) = D minor
    """

    tonic: PitchClass
    mode: Mode

    def scale_notes(self) -> list[PitchClass]:
        """Get all pitch classes in this key."""
        return scale_notes(self.tonic, self.mode)

    def degree_to_pitch(self, degree: int) -> PitchClass:
        """Resolve a 1-based scale degree to a pitch class."""
        if not 1 <= degree <= 7:
            raise ValueError(f"Degree must be 1-7, got {degree}")
        return self.tonic.transpose(SCALE_INTERVALS[self.mode][degree - 1])

    def pitch_to_degree(self, pitch: PitchClass) -> int | None:
        """Get the scale degree for a pitch class, if it's in the scale."""
        return scale_degree(pitch, self.tonic, self.mode)

    def __str__(self) -> str:
        from .spelling import spelling

        return f"{spelling(self.tonic, self.tonic, self.mode)} {self.mode.value}"

    def __repr__(self) -> str:
        return f"Key({self.tonic!r}, {self.mode!r})"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C_major', 'Bb_minor', 'F#_major'.

        Args:
            name: Key name with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.strip().split("_")
        if len(parts) != 2:
            raise ValueError(ErrorMessages.INVALID_KEY.format(key=name))

        tonic = PitchClass.parse(parts[0])
        try:
            mode = Mode(parts[1].lower())
        except ValueError:
            raise ValueError(f"Unknown mode: {parts[1]}") from None

        return cls(tonic, mode)
