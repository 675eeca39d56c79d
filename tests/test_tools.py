"""
Tests for MCP tools.

Tests the MCP tool implementations for harmony theory, timeline editing,
playback preview and MIDI export.
"""

import json
from pathlib import Path

import pytest

from chuk_mcp_harmony.core import MODIFIER_RULES
from chuk_mcp_harmony.timeline import TimelineManager
from chuk_mcp_harmony.tools import (
    register_harmony_tools,
    register_playback_tools,
    register_timeline_tools,
)


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def harmony_tools():
    """Registered harmony tools."""
    return register_harmony_tools(MockMCPServer("test"))


@pytest.fixture
def manager():
    """A fresh timeline manager."""
    return TimelineManager()


@pytest.fixture
def timeline_tools(manager: TimelineManager):
    """Registered timeline tools."""
    return register_timeline_tools(MockMCPServer("test"), manager)


@pytest.fixture
def playback_tools(manager: TimelineManager, temp_dir: Path):
    """Registered playback tools writing to a temp dir."""
    return register_playback_tools(MockMCPServer("test"), manager, temp_dir)


class TestRegistration:
    """Tests for tool registration."""

    def test_tools_registered_on_server(self, manager: TimelineManager, temp_dir: Path):
        """Every returned tool is also registered on the server."""
        mcp = MockMCPServer("test")
        tools = {}
        tools.update(register_harmony_tools(mcp))
        tools.update(register_timeline_tools(mcp, manager))
        tools.update(register_playback_tools(mcp, manager, temp_dir))

        assert set(tools) == set(mcp.tools)
        assert len(tools) == 20


class TestHarmonyTools:
    """Tests for harmony tools."""

    @pytest.mark.asyncio
    async def test_get_scale(self, harmony_tools):
        """Scale notes are spelled in the key."""
        data = json.loads(await harmony_tools["music_get_scale"](key="F_major"))
        assert data["status"] == "success"
        assert data["notes"] == ["F", "G", "A", "Bb", "C", "D", "E"]
        assert data["key"] == "F major"

    @pytest.mark.asyncio
    async def test_get_scale_invalid_key(self, harmony_tools):
        """Invalid keys return an error status."""
        data = json.loads(await harmony_tools["music_get_scale"](key="H_major"))
        assert data["status"] == "error"
        assert "H" in data["message"]

    @pytest.mark.asyncio
    async def test_get_scale_chords(self, harmony_tools):
        """Diatonic triads of C major."""
        data = json.loads(await harmony_tools["music_get_scale_chords"](key="C_major"))
        chords = data["chords"]
        assert [c["numeral"] for c in chords] == ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
        assert chords[4]["notes"] == ["G", "B", "D"]
        assert chords[4]["midi"] == [67, 71, 74]

    @pytest.mark.asyncio
    async def test_get_scale_sevenths(self, harmony_tools):
        data = json.loads(
            await harmony_tools["music_get_scale_chords"](key="C_major", sevenths=True)
        )
        assert data["chords"][4]["numeral"] == "V7"
        assert data["chords"][4]["notes"] == ["G", "B", "D", "F"]

    @pytest.mark.asyncio
    async def test_get_borrowed_chords(self, harmony_tools):
        """Borrowed chords are spelled with the key's accidentals."""
        data = json.loads(await harmony_tools["music_get_borrowed_chords"](key="C_major"))
        chords = data["chords"]
        assert [c["numeral"] for c in chords] == ["iv", "bVI", "bVII", "bIII"]
        assert chords[0]["root"] == "F"
        assert chords[0]["type"] == "min"

    @pytest.mark.asyncio
    async def test_apply_modifiers(self, harmony_tools):
        data = json.loads(
            await harmony_tools["music_apply_modifiers"](
                root="A", intervals=[0, 3, 7], modifiers=["7", "9"]
            )
        )
        assert data["status"] == "success"
        assert data["intervals"] == [0, 3, 7, 10, 14]
        assert data["name"] == "Am9"
        assert len(data["frequencies"]) == 5
        assert data["frequencies"][0] == pytest.approx(440.0)

    @pytest.mark.asyncio
    async def test_apply_modifiers_unknown_label(self, harmony_tools):
        data = json.loads(
            await harmony_tools["music_apply_modifiers"](
                root="C", intervals=[0, 4, 7], modifiers=["b5"]
            )
        )
        assert data["intervals"] == [0, 4, 7]
        assert data["name"] == "C"

    def test_apply_modifiers_lists_every_label(self, harmony_tools):
        """The tool description names exactly the available modifiers."""
        doc = harmony_tools["music_apply_modifiers"].__doc__
        line = next(ln for ln in doc.splitlines() if "Available labels:" in ln)
        listed = line.split(":", 1)[1].strip().rstrip(".").split(", ")
        assert listed == [rule.label for rule in MODIFIER_RULES]

    @pytest.mark.asyncio
    async def test_get_roman_numeral(self, harmony_tools):
        data = json.loads(
            await harmony_tools["music_get_roman_numeral"](
                key="C_major", root="G", intervals=[0, 4, 7, 10]
            )
        )
        assert data["numeral"] == "V7"

        data = json.loads(
            await harmony_tools["music_get_roman_numeral"](
                key="C_major", root="D", intervals=[0, 4, 7]
            )
        )
        assert data["numeral"] == "?"

    @pytest.mark.asyncio
    async def test_spell_note(self, harmony_tools):
        data = json.loads(await harmony_tools["music_spell_note"](key="F_major", note="A#"))
        assert data["note"] == "Bb"

    @pytest.mark.asyncio
    async def test_scale_degree_label(self, harmony_tools):
        data = json.loads(
            await harmony_tools["music_get_scale_degree_label"](key="C_major", note="Eb")
        )
        assert data["label"] == "♭3"


class TestTimelineTools:
    """Tests for timeline tools."""

    @pytest.mark.asyncio
    async def test_create_timeline(self, timeline_tools):
        data = json.loads(
            await timeline_tools["music_create_timeline"](name="song", key="G_major", tempo=96)
        )
        assert data["status"] == "success"
        assert data["timeline"]["tempo"] == 96
        assert data["timeline"]["blocks"] == []

    @pytest.mark.asyncio
    async def test_create_duplicate(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")
        data = json.loads(await timeline_tools["music_create_timeline"](name="song"))
        assert data["status"] == "error"
        assert "already exists" in data["message"]

    @pytest.mark.asyncio
    async def test_create_invalid_tempo(self, timeline_tools):
        data = json.loads(await timeline_tools["music_create_timeline"](name="song", tempo=300))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_get_missing_timeline(self, timeline_tools):
        data = json.loads(await timeline_tools["music_get_timeline"](name="nope"))
        assert data["status"] == "error"
        assert "not found" in data["message"]

    @pytest.mark.asyncio
    async def test_add_chords(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")

        first = json.loads(
            await timeline_tools["music_add_chord"](timeline="song", root="C", intervals=[0, 4, 7])
        )
        second = json.loads(
            await timeline_tools["music_add_chord"](
                timeline="song", root="G", intervals=[0, 4, 7], modifiers=["7"]
            )
        )

        assert first["status"] == "success"
        assert first["name"] == "C"
        assert first["block"]["position"] == 0
        assert second["name"] == "G7"
        assert second["block"]["numeral"] == "V"
        assert second["block"]["intervals"] == [0, 4, 7, 10]
        assert second["block"]["position"] == 8

    @pytest.mark.asyncio
    async def test_add_chord_with_key_spelled_root(self, timeline_tools):
        """Roots spelled the way the key spells them are accepted."""
        await timeline_tools["music_create_timeline"](name="dark", key="Eb_minor")

        data = json.loads(
            await timeline_tools["music_add_chord"](timeline="dark", root="Cb", intervals=[0, 4, 7])
        )

        assert data["status"] == "success"
        assert data["block"]["root"] == "B"
        assert data["block"]["numeral"] == "VI"

    @pytest.mark.asyncio
    async def test_edit_blocks(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")
        added = []
        for root in ("C", "F", "G"):
            result = await timeline_tools["music_add_chord"](
                timeline="song", root=root, intervals=[0, 4, 7]
            )
            added.append(json.loads(result)["block"]["id"])

        resized = json.loads(
            await timeline_tools["music_resize_chord"](
                timeline="song", block_id=added[0], duration=4
            )
        )
        assert resized["block"]["duration"] == 4

        reordered = json.loads(
            await timeline_tools["music_reorder_chord"](timeline="song", from_index=2, to_index=0)
        )
        blocks = reordered["timeline"]["blocks"]
        assert [b["root"] for b in blocks] == ["G", "C", "F"]
        assert [b["position"] for b in blocks] == [0, 8, 12]

        moved = json.loads(
            await timeline_tools["music_move_chord"](timeline="song", block_id=added[1], position=2)
        )
        assert moved["block"]["position"] == 2

        removed = json.loads(
            await timeline_tools["music_remove_chord"](timeline="song", block_id=added[2])
        )
        assert len(removed["timeline"]["blocks"]) == 2

    @pytest.mark.asyncio
    async def test_remove_missing_block(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")
        data = json.loads(
            await timeline_tools["music_remove_chord"](timeline="song", block_id="nope")
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_reorder_out_of_range(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")
        data = json.loads(
            await timeline_tools["music_reorder_chord"](timeline="song", from_index=0, to_index=1)
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_tempo_and_loop(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="song")

        tempo = json.loads(await timeline_tools["music_set_tempo"](timeline="song", tempo=150))
        assert tempo["tempo"] == 150
        bad = json.loads(await timeline_tools["music_set_tempo"](timeline="song", tempo=20))
        assert bad["status"] == "error"
        assert bad["message"].startswith("Invalid tempo: 20")

        loop = json.loads(await timeline_tools["music_set_loop"](timeline="song", loop=True))
        assert loop["loop"] is True

    @pytest.mark.asyncio
    async def test_list_and_delete(self, timeline_tools):
        await timeline_tools["music_create_timeline"](name="b-side")
        await timeline_tools["music_create_timeline"](name="a-side")

        listed = json.loads(await timeline_tools["music_list_timelines"]())
        assert [t["name"] for t in listed["timelines"]] == ["a-side", "b-side"]

        deleted = json.loads(await timeline_tools["music_delete_timeline"](name="a-side"))
        assert deleted["status"] == "success"
        again = json.loads(await timeline_tools["music_delete_timeline"](name="a-side"))
        assert again["status"] == "error"


class TestPlaybackTools:
    """Tests for playback and export tools."""

    @pytest.mark.asyncio
    async def test_preview(self, timeline_tools, playback_tools):
        await timeline_tools["music_create_timeline"](name="song", tempo=120)
        await timeline_tools["music_add_chord"](timeline="song", root="C", intervals=[0, 4, 7])

        data = json.loads(await playback_tools["music_preview_playback"](timeline="song"))

        assert data["status"] == "success"
        assert data["seconds_per_eighth"] == pytest.approx(0.25)
        assert data["total_seconds"] == pytest.approx(2.0)
        assert [n["note"] for n in data["notes"]] == ["C4", "E4", "G4"]
        assert [n["frequency"] for n in data["notes"]] == [261.63, 329.63, 392.0]
        assert all(n["duration"] == 2.0 for n in data["notes"])

    @pytest.mark.asyncio
    async def test_preview_empty_timeline(self, timeline_tools, playback_tools):
        await timeline_tools["music_create_timeline"](name="song")
        data = json.loads(await playback_tools["music_preview_playback"](timeline="song"))
        assert data["status"] == "error"
        assert "no chord blocks" in data["message"]

    @pytest.mark.asyncio
    async def test_preview_missing_timeline(self, playback_tools):
        data = json.loads(await playback_tools["music_preview_playback"](timeline="nope"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_compile_midi(self, timeline_tools, playback_tools, temp_dir: Path):
        await timeline_tools["music_create_timeline"](name="song")
        await timeline_tools["music_add_chord"](timeline="song", root="C", intervals=[0, 4, 7])
        await timeline_tools["music_add_chord"](timeline="song", root="G", intervals=[0, 4, 7])

        data = json.loads(await playback_tools["music_compile_midi"](timeline="song"))

        assert data["status"] == "success"
        assert data["compilation"]["total_events"] == 6
        assert Path(data["path"]) == temp_dir / "song.mid"
        assert Path(data["path"]).exists()

    @pytest.mark.asyncio
    async def test_compile_from_playback(self, timeline_tools, playback_tools, temp_dir: Path):
        await timeline_tools["music_create_timeline"](name="song")
        await timeline_tools["music_add_chord"](timeline="song", root="A", intervals=[0, 3, 7])

        data = json.loads(
            await playback_tools["music_compile_midi"](
                timeline="song", output_name="take-1", from_playback=True
            )
        )

        assert data["status"] == "success"
        assert data["compilation"]["total_events"] == 3
        assert (temp_dir / "take-1.mid").exists()
