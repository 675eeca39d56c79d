#!/usr/bin/env python3
"""
Example: Explore the harmony of a key.

Prints the scale, diatonic chords, borrowed chords and a few chord variations
for a key.

Usage:
    python examples/explore_key.py            # C major
    python examples/explore_key.py Bb_minor
"""

import sys

from chuk_mcp_harmony.core import (
    Key,
    borrowed_chords,
    display_name,
    resolve_modifiers,
    scale_chords,
    scale_degree_label,
    seventh_chords,
    spell_chord,
    spell_scale,
    spelling,
)
from chuk_mcp_harmony.core.chord import CHORD_SYMBOL_SUFFIXES


def main() -> None:
    """Print the harmony of a key."""
    key = Key.parse(sys.argv[1] if len(sys.argv) > 1 else "C_major")
    print(f"Key: {key}")
    print(f"Scale: {' '.join(spell_scale(key.tonic, key.mode))}")
    print()

    print("Degree labels (C..B):")
    print("  " + " ".join(scale_degree_label(i, key.tonic, key.mode) for i in range(12)))
    print()

    print("Diatonic chords:")
    for triad, seventh in zip(
        scale_chords(key.tonic, key.mode), seventh_chords(key.tonic, key.mode), strict=True
    ):
        notes = " ".join(spell_chord(triad.root, triad.intervals, key.tonic, key.mode))
        print(f"  {triad.numeral:<5} {notes:<12} {seventh.numeral}")
    print()

    print("Borrowed chords:")
    for chord in borrowed_chords(key.tonic, key.mode):
        root = spelling(chord.root.value, key.tonic, key.mode)
        print(f"  {chord.numeral:<5} {root}{CHORD_SYMBOL_SUFFIXES[chord.chord_type]}")
    print()

    tonic_chord = scale_chords(key.tonic, key.mode)[0]
    root = spelling(tonic_chord.root.value, key.tonic, key.mode)
    print(f"Variations of {root}:")
    for active in (["7"], ["maj7"], ["9"], ["add9"], ["sus2"], ["sus4", "9"], ["13"]):
        intervals = resolve_modifiers(tonic_chord.intervals, active)
        name = display_name(root, tonic_chord.chord_type, tonic_chord.intervals, active)
        print(f"  {name:<10} {intervals}")


if __name__ == "__main__":
    main()
