"""
Core harmony primitives - the Harmony Engine.

These are the pure, deterministic building blocks everything else composes on:
- PitchClass: the 12 chromatic pitch classes
- frequency math: equal temperament, MIDI numbers, note names
- Mode / Key: scale derivation and scale-degree labels
- spelling: enharmonic letter names in key context
- ChordDefinition: diatonic, seventh and borrowed chords, Roman numerals
- modifiers: 7ths, extensions, suspensions and their display names
"""

from chuk_mcp_harmony.core.chord import (
    ChordDefinition,
    ChordType,
    borrowed_chords,
    chord_frequencies,
    chord_symbol,
    chord_type_from_intervals,
    full_chord_name,
    roman_numeral,
    scale_chords,
    seventh_chords,
)
from chuk_mcp_harmony.core.modifiers import (
    MODIFIER_RULES,
    ModifierKind,
    ModifierRule,
    ModifierSet,
    display_name,
    resolve_modifiers,
)
from chuk_mcp_harmony.core.pitch import (
    PianoKey,
    PitchClass,
    frequency,
    frequency_to_midi,
    midi_to_frequency,
    midi_to_note_name,
    note_name_to_midi,
    piano_keys,
)
from chuk_mcp_harmony.core.scale import (
    Key,
    Mode,
    is_in_scale,
    scale_degree,
    scale_degree_label,
    scale_notes,
)
from chuk_mcp_harmony.core.spelling import spell_chord, spell_scale, spelling

__all__ = [
    # Pitch
    "PitchClass",
    "PianoKey",
    "frequency",
    "frequency_to_midi",
    "midi_to_frequency",
    "midi_to_note_name",
    "note_name_to_midi",
    "piano_keys",
    # Scale
    "Mode",
    "Key",
    "is_in_scale",
    "scale_degree",
    "scale_degree_label",
    "scale_notes",
    # Spelling
    "spelling",
    "spell_scale",
    "spell_chord",
    # Chord
    "ChordType",
    "ChordDefinition",
    "borrowed_chords",
    "chord_frequencies",
    "chord_symbol",
    "chord_type_from_intervals",
    "full_chord_name",
    "roman_numeral",
    "scale_chords",
    "seventh_chords",
    # Modifiers
    "MODIFIER_RULES",
    "ModifierKind",
    "ModifierRule",
    "ModifierSet",
    "display_name",
    "resolve_modifiers",
]
