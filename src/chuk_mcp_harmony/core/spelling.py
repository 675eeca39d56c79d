"""
Enharmonic spelling - letter names for pitch classes in a key context.

Diatonic notes take their spelling from literal per-key tables that follow
key-signature convention (each row uses every letter name exactly once).
Chromatic passing tones are spelled with sharps in sharp keys and flats in
flat keys.
"""

from __future__ import annotations

from collections.abc import Sequence

from .pitch import PitchClass
from .scale import Mode, scale_degree

# Sharp-named tonics whose conventional key is the flat enharmonic
# (C# -> Db, D# -> Eb, G# -> Ab, A# -> Bb) are spelled as flat keys.
MAJOR_SCALE_SPELLINGS: dict[PitchClass, tuple[str, ...]] = {
    PitchClass.C: ("C", "D", "E", "F", "G", "A", "B"),
    PitchClass.Cs: ("Db", "Eb", "F", "Gb", "Ab", "Bb", "C"),
    PitchClass.D: ("D", "E", "F#", "G", "A", "B", "C#"),
    PitchClass.Ds: ("Eb", "F", "G", "Ab", "Bb", "C", "D"),
    PitchClass.E: ("E", "F#", "G#", "A", "B", "C#", "D#"),
    PitchClass.F: ("F", "G", "A", "Bb", "C", "D", "E"),
    PitchClass.Fs: ("F#", "G#", "A#", "B", "C#", "D#", "E#"),
    PitchClass.G: ("G", "A", "B", "C", "D", "E", "F#"),
    PitchClass.Gs: ("Ab", "Bb", "C", "Db", "Eb", "F", "G"),
    PitchClass.A: ("A", "B", "C#", "D", "E", "F#", "G#"),
    PitchClass.As: ("Bb", "C", "D", "Eb", "F", "G", "A"),
    PitchClass.B: ("B", "C#", "D#", "E", "F#", "G#", "A#"),
}

# Natural minor keys share the signature of their relative major
MINOR_SCALE_SPELLINGS: dict[PitchClass, tuple[str, ...]] = {
    PitchClass.C: ("C", "D", "Eb", "F", "G", "Ab", "Bb"),
    PitchClass.Cs: ("C#", "D#", "E", "F#", "G#", "A", "B"),
    PitchClass.D: ("D", "E", "F", "G", "A", "Bb", "C"),
    PitchClass.Ds: ("Eb", "F", "Gb", "Ab", "Bb", "Cb", "Db"),
    PitchClass.E: ("E", "F#", "G", "A", "B", "C", "D"),
    PitchClass.F: ("F", "G", "Ab", "Bb", "C", "Db", "Eb"),
    PitchClass.Fs: ("F#", "G#", "A", "B", "C#", "D", "E"),
    PitchClass.G: ("G", "A", "Bb", "C", "D", "Eb", "F"),
    PitchClass.Gs: ("G#", "A#", "B", "C#", "D#", "E", "F#"),
    PitchClass.A: ("A", "B", "C", "D", "E", "F", "G"),
    PitchClass.As: ("Bb", "C", "Db", "Eb", "F", "Gb", "Ab"),
    PitchClass.B: ("B", "C#", "D", "E", "F#", "G", "A"),
}

SCALE_SPELLINGS: dict[Mode, dict[PitchClass, tuple[str, ...]]] = {
    Mode.MAJOR: MAJOR_SCALE_SPELLINGS,
    Mode.MINOR: MINOR_SCALE_SPELLINGS,
}

# Circle of fifths: C, G, D, A, E, B, F# use sharps; F, Bb, Eb, Ab, Db use flats
SHARP_KEYS: frozenset[PitchClass] = frozenset(
    {
        PitchClass.C,
        PitchClass.G,
        PitchClass.D,
        PitchClass.A,
        PitchClass.E,
        PitchClass.B,
        PitchClass.Fs,
    }
)
FLAT_KEYS: frozenset[PitchClass] = frozenset(
    {PitchClass.F, PitchClass.As, PitchClass.Ds, PitchClass.Gs, PitchClass.Cs}
)


def spelling(chromatic_index: int, tonic: PitchClass, mode: Mode) -> str:
    """
    Get the enharmonic spelling of a chromatic position in a key.

    Examples:
        spelling(1, PitchClass.Cs, Mode.MAJOR)  # "Db" (tonic of Db major)
        spelling(6, PitchClass.C, Mode.MAJOR)   # "F#" (chromatic, sharp key)
        spelling(6, PitchClass.F, Mode.MAJOR)   # "Gb" (chromatic, flat key)

    Args:
        chromatic_index: Position where C=0 (normalised mod 12)
        tonic: The key's tonic
        mode: The key's mode

    Returns:
        The spelled note name
    """
    index = chromatic_index % 12
    degree = scale_degree(index, tonic, mode)
    if degree is not None:
        return SCALE_SPELLINGS[mode][tonic][degree - 1]

    # Chromatic passing tone
    pitch = PitchClass(index)
    if tonic in SHARP_KEYS:
        return pitch.spell()
    if tonic in FLAT_KEYS:
        return pitch.spell(prefer_flats=True)
    return pitch.spell()


def spell_scale(tonic: PitchClass, mode: Mode) -> list[str]:
    """Get the conventional spelling of all 7 scale notes."""
    return list(SCALE_SPELLINGS[mode][tonic])


def spell_chord(
    root: PitchClass, intervals: Sequence[int], tonic: PitchClass, mode: Mode
) -> list[str]:
    """
    Spell each chord tone in the context of a key.

    Compound intervals (9ths, 11ths, 13ths) fold back into the octave.
    """
    return [spelling(root.value + interval, tonic, mode) for interval in intervals]

