"""
Harmony tools - MCP tools for scale and chord theory.

Tools for deriving scales, diatonic and borrowed chords, chord modifiers,
Roman numerals and note spellings. All of them are stateless.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_harmony.core import (
    ChordDefinition,
    Key,
    PitchClass,
    borrowed_chords,
    chord_frequencies,
    chord_type_from_intervals,
    display_name,
    resolve_modifiers,
    roman_numeral,
    scale_chords,
    scale_degree_label,
    seventh_chords,
    spell_chord,
    spell_scale,
    spelling,
)
from chuk_mcp_harmony.core.chord import ChordType
from chuk_mcp_harmony.core.modifiers import MODIFIER_RULES

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _chord_to_dict(chord: ChordDefinition, key: Key) -> dict[str, Any]:
    return {
        "numeral": chord.numeral,
        "root": spelling(chord.root.value, key.tonic, key.mode),
        "type": chord.chord_type.value,
        "intervals": list(chord.intervals),
        "notes": spell_chord(chord.root, chord.intervals, key.tonic, key.mode),
        "midi": chord.get_midi_notes(),
    }


def register_harmony_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register harmony theory tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_scale(key: str) -> str:
        """
        Get the notes of a major or natural minor scale.

        Args:
            key: Key (e.g., 'C_major', 'Bb_minor', 'F#_major')

        Returns:
            JSON string with spelled scale notes and pitch classes

        Example:
            music_get_scale(key="Eb_major")
        """
        try:
            k = Key.parse(key)
            notes = k.scale_notes()
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "notes": spell_scale(k.tonic, k.mode),
                    "pitch_classes": [note.value for note in notes],
                }
            )
        except Exception as e:
            logger.exception("Failed to get scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_scale"] = music_get_scale

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_scale_chords(key: str, sevenths: bool = False) -> str:
        """
        Get the seven diatonic chords of a key.

        Args:
            key: Key (e.g., 'C_major', 'A_minor')
            sevenths: Return seventh chords instead of triads

        Returns:
            JSON string with numeral, root, type, intervals and notes per chord

        Example:
            music_get_scale_chords(key="G_major", sevenths=True)
        """
        try:
            k = Key.parse(key)
            chords = (
                seventh_chords(k.tonic, k.mode) if sevenths else scale_chords(k.tonic, k.mode)
            )
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "chords": [_chord_to_dict(chord, k) for chord in chords],
                }
            )
        except Exception as e:
            logger.exception("Failed to get scale chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_scale_chords"] = music_get_scale_chords

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_borrowed_chords(key: str) -> str:
        """
        Get the common borrowed chords from the parallel key.

        Major keys borrow iv, bVI, bVII and bIII from the parallel minor;
        minor keys borrow IV, VI, VII and III from the parallel major.

        Args:
            key: Key (e.g., 'C_major')

        Returns:
            JSON string with the borrowed chords

        Example:
            music_get_borrowed_chords(key="C_major")
        """
        try:
            k = Key.parse(key)
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "chords": [
                        _chord_to_dict(chord, k) for chord in borrowed_chords(k.tonic, k.mode)
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to get borrowed chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_borrowed_chords"] = music_get_borrowed_chords

    @mcp.tool  # type: ignore[arg-type]
    async def music_apply_modifiers(
        root: str,
        intervals: list[int],
        modifiers: list[str],
    ) -> str:
        """
        Apply chord modifiers (7ths, extensions, suspensions) to a chord.

        Modifiers apply in the order given; unknown labels are ignored.
        Available labels: 7, maj7, 6, sus2, sus4, dim, 9, maj9, 11, 13, add9, aug.

        Args:
            root: Chord root (e.g., 'C', 'F#', 'Bb')
            intervals: Base chord intervals in semitones (e.g., [0, 4, 7])
            modifiers: Modifier labels to apply

        Returns:
            JSON string with the resulting intervals, name and frequencies

        Example:
            music_apply_modifiers(root="A", intervals=[0, 3, 7], modifiers=["7", "9"])
        """
        try:
            pc = PitchClass.parse(root)
            resolved = resolve_modifiers(intervals, modifiers)
            base_type = chord_type_from_intervals(intervals) or ChordType.MAJOR
            return json.dumps(
                {
                    "status": "success",
                    "root": pc.spell(),
                    "intervals": resolved,
                    "name": display_name(pc, base_type, intervals, modifiers),
                    "frequencies": [round(f, 2) for f in chord_frequencies(pc, resolved)],
                    "available_modifiers": [rule.label for rule in MODIFIER_RULES],
                }
            )
        except Exception as e:
            logger.exception("Failed to apply modifiers")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_apply_modifiers"] = music_apply_modifiers

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_roman_numeral(key: str, root: str, intervals: list[int]) -> str:
        """
        Get the Roman numeral of a chord in a key.

        Returns '?' for chords that are not diatonic triads or sevenths.

        Args:
            key: Key (e.g., 'C_major')
            root: Chord root (e.g., 'D')
            intervals: Chord intervals in semitones (e.g., [0, 3, 7])

        Returns:
            JSON string with the numeral

        Example:
            music_get_roman_numeral(key="C_major", root="G", intervals=[0, 4, 7, 10])
        """
        try:
            k = Key.parse(key)
            pc = PitchClass.parse(root)
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "numeral": roman_numeral(pc, intervals, k.tonic, k.mode),
                }
            )
        except Exception as e:
            logger.exception("Failed to get Roman numeral")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_roman_numeral"] = music_get_roman_numeral

    @mcp.tool  # type: ignore[arg-type]
    async def music_spell_note(key: str, note: str) -> str:
        """
        Spell a note the way it is written in a key.

        Args:
            key: Key (e.g., 'Db_major')
            note: Note in any spelling (e.g., 'C#')

        Returns:
            JSON string with the spelled note

        Example:
            music_spell_note(key="F_major", note="A#")  # "Bb"
        """
        try:
            k = Key.parse(key)
            pc = PitchClass.parse(note)
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "note": spelling(pc.value, k.tonic, k.mode),
                }
            )
        except Exception as e:
            logger.exception("Failed to spell note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_spell_note"] = music_spell_note

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_scale_degree_label(key: str, note: str) -> str:
        """
        Get the scale-degree label of a note in a key.

        Scale notes are labelled 1-7; chromatic notes get altered labels
        such as '♭3' or '♭5'.

        Args:
            key: Key (e.g., 'C_major')
            note: Note name (e.g., 'Eb')

        Returns:
            JSON string with the label

        Example:
            music_get_scale_degree_label(key="C_major", note="F#")
        """
        try:
            k = Key.parse(key)
            pc = PitchClass.parse(note)
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "label": scale_degree_label(pc.value, k.tonic, k.mode),
                }
            )
        except Exception as e:
            logger.exception("Failed to get scale degree label")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_scale_degree_label"] = music_get_scale_degree_label

    return tools
