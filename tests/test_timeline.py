"""
Tests for the chord timeline model and the timeline manager.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_harmony.config import PlaybackSettings
from chuk_mcp_harmony.core import PitchClass
from chuk_mcp_harmony.models import ChordBlock, ChordTimeline
from chuk_mcp_harmony.timeline import TimelineManager


class TestChordBlock:
    """Tests for ChordBlock validation."""

    def test_defaults(self) -> None:
        block = ChordBlock(root_note=PitchClass.C, intervals=[0, 4, 7])
        assert block.position == 0
        assert block.duration == 8
        assert block.numeral == "?"
        assert block.modifiers == []
        assert block.end == 8

    def test_root_from_string(self) -> None:
        block = ChordBlock(root_note="F#", intervals=[0, 4, 7])
        assert block.root_note == PitchClass.Fs

    def test_intervals_normalised(self) -> None:
        block = ChordBlock(root_note="C", intervals=[7, 0, 4, 4])
        assert block.intervals == [0, 4, 7]

    def test_unique_ids(self) -> None:
        a = ChordBlock(root_note="C", intervals=[0, 4, 7])
        b = ChordBlock(root_note="C", intervals=[0, 4, 7])
        assert a.id != b.id

    def test_invalid_values(self) -> None:
        with pytest.raises(ValidationError):
            ChordBlock(root_note="C", intervals=[-1, 4, 7])
        with pytest.raises(ValidationError):
            ChordBlock(root_note="C", intervals=[])
        with pytest.raises(ValidationError):
            ChordBlock(root_note="C", intervals=[0, 4, 7], duration=0)
        with pytest.raises(ValidationError):
            ChordBlock(root_note="C", intervals=[0, 4, 7], position=-1)

    def test_to_dict(self) -> None:
        block = ChordBlock(root_note="A#", intervals=[0, 4, 7], numeral="bVII")
        data = block.to_dict()
        assert data["root"] == "A#"
        assert data["numeral"] == "bVII"


class TestChordTimeline:
    """Tests for ChordTimeline editing."""

    def test_defaults(self) -> None:
        timeline = ChordTimeline(name="sketch")
        assert timeline.key == "C_major"
        assert timeline.tempo == 120
        assert timeline.loop is False
        assert timeline.total_duration() == 0

    def test_validation(self) -> None:
        with pytest.raises(ValidationError):
            ChordTimeline(name="sketch", tempo=200)
        with pytest.raises(ValidationError):
            ChordTimeline(name="sketch", tempo=59)
        with pytest.raises(ValidationError):
            ChordTimeline(name="bad name!")
        with pytest.raises(ValidationError):
            ChordTimeline(name="sketch", key="H_major")

    def test_add_block_appends(self) -> None:
        timeline = ChordTimeline(name="sketch")
        first = timeline.add_block("C", [0, 4, 7])
        second = timeline.add_block("G", [0, 4, 7], duration=4)
        assert first.position == 0
        assert second.position == 8
        assert timeline.total_duration() == 12

    def test_add_block_numeral_from_key(self) -> None:
        timeline = ChordTimeline(name="sketch", key="A_minor")
        assert timeline.add_block("E", [0, 3, 7]).numeral == "v"
        assert timeline.add_block("F", [0, 4, 7]).numeral == "VI"
        assert timeline.add_block("F#", [0, 4, 7]).numeral == "?"

    def test_add_block_explicit_numeral(self) -> None:
        timeline = ChordTimeline(name="sketch")
        assert timeline.add_block("G#", [0, 4, 7], numeral="bVI").numeral == "bVI"

    def test_add_block_with_modifiers(self) -> None:
        """Modifiers resolve into stored intervals; the numeral uses the base chord."""
        timeline = ChordTimeline(name="sketch")
        block = timeline.add_block("G", [0, 4, 7], modifiers=["7"])
        assert block.intervals == [0, 4, 7, 10]
        assert block.modifiers == ["7"]
        assert block.numeral == "V"

    def test_remove_block(self) -> None:
        timeline = ChordTimeline(name="sketch")
        first = timeline.add_block("C", [0, 4, 7])
        second = timeline.add_block("F", [0, 4, 7])
        assert timeline.remove_block(first.id) is True
        assert timeline.remove_block("missing") is False
        # Remaining blocks keep their positions
        assert timeline.blocks == [second]
        assert second.position == 8

    def test_resize_block(self) -> None:
        timeline = ChordTimeline(name="sketch")
        block = timeline.add_block("C", [0, 4, 7])
        assert timeline.resize_block(block.id, 4) is block
        assert block.duration == 4
        assert timeline.resize_block("missing", 4) is None
        with pytest.raises(ValueError, match="positive"):
            timeline.resize_block(block.id, 0)

    def test_reorder_repacks(self) -> None:
        timeline = ChordTimeline(name="sketch")
        a = timeline.add_block("C", [0, 4, 7], duration=8)
        b = timeline.add_block("F", [0, 4, 7], duration=4)
        c = timeline.add_block("G", [0, 4, 7], duration=2)

        timeline.reorder_block(0, 2)

        assert timeline.blocks == [b, c, a]
        assert [blk.position for blk in timeline.blocks] == [0, 4, 6]

    def test_reorder_out_of_range(self) -> None:
        timeline = ChordTimeline(name="sketch")
        timeline.add_block("C", [0, 4, 7])
        with pytest.raises(IndexError, match="Index 3 is out of range for 1 chord blocks"):
            timeline.reorder_block(0, 3)

    def test_move_block_sorts_and_clamps(self) -> None:
        timeline = ChordTimeline(name="sketch")
        a = timeline.add_block("C", [0, 4, 7])
        b = timeline.add_block("G", [0, 4, 7])

        timeline.move_block(a.id, 20)
        assert timeline.blocks == [b, a]

        timeline.move_block(a.id, -3)
        assert a.position == 0
        assert timeline.blocks[0] is a
        assert timeline.move_block("missing", 0) is None

    def test_move_allows_overlap(self) -> None:
        timeline = ChordTimeline(name="sketch")
        timeline.add_block("C", [0, 4, 7])
        b = timeline.add_block("G", [0, 4, 7])
        timeline.move_block(b.id, 4)
        assert b.position == 4

    def test_block_index_at(self) -> None:
        timeline = ChordTimeline(name="sketch")
        timeline.add_block("C", [0, 4, 7])
        timeline.add_block("G", [0, 4, 7])
        assert timeline.block_index_at(0) == 0
        assert timeline.block_index_at(9) == 1
        assert timeline.block_index_at(16) is None

    def test_clear(self, c_major_timeline: ChordTimeline) -> None:
        c_major_timeline.clear()
        assert c_major_timeline.blocks == []

    def test_to_dict(self, c_major_timeline: ChordTimeline) -> None:
        data = c_major_timeline.to_dict()
        assert data["total_duration"] == 16
        assert [b["numeral"] for b in data["blocks"]] == ["I", "V"]


class TestTimelineManager:
    """Tests for TimelineManager."""

    @pytest.mark.asyncio
    async def test_create_and_get(self) -> None:
        manager = TimelineManager()
        timeline = await manager.create("sketch", key="G_major", tempo=90)
        assert await manager.get("sketch") is timeline
        assert await manager.get("missing") is None

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        with pytest.raises(ValueError, match="already exists"):
            await manager.create("sketch")

    @pytest.mark.asyncio
    async def test_default_tempo_from_settings(self) -> None:
        manager = TimelineManager(PlaybackSettings(default_tempo=96))
        timeline = await manager.create("sketch")
        assert timeline.tempo == 96

    @pytest.mark.asyncio
    async def test_list_sorted(self) -> None:
        manager = TimelineManager()
        await manager.create("verse")
        await manager.create("chorus")
        names = [t.name for t in await manager.list_timelines()]
        assert names == ["chorus", "verse"]

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        assert await manager.delete("sketch") is True
        assert await manager.delete("sketch") is False

    @pytest.mark.asyncio
    async def test_duplicate_is_deep(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        await manager.add_chord("sketch", "C", [0, 4, 7])

        copy = await manager.duplicate("sketch", "sketch-2")
        copy.blocks[0].duration = 2

        original = await manager.require("sketch")
        assert copy.name == "sketch-2"
        assert original.blocks[0].duration == 8

    @pytest.mark.asyncio
    async def test_duplicate_missing(self) -> None:
        manager = TimelineManager()
        with pytest.raises(ValueError, match="not found"):
            await manager.duplicate("missing", "copy")

    @pytest.mark.asyncio
    async def test_add_chord_default_duration(self) -> None:
        manager = TimelineManager(PlaybackSettings(default_block_duration=4))
        await manager.create("sketch")
        block = await manager.add_chord("sketch", "D", [0, 3, 7])
        assert block.duration == 4
        assert block.numeral == "ii"

    @pytest.mark.asyncio
    async def test_edit_missing_block(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        with pytest.raises(ValueError, match="not found"):
            await manager.remove_chord("sketch", "missing")
        with pytest.raises(ValueError, match="not found"):
            await manager.resize_chord("sketch", "missing", 4)
        with pytest.raises(ValueError, match="not found"):
            await manager.move_chord("sketch", "missing", 4)

    @pytest.mark.asyncio
    async def test_set_tempo_validated(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        timeline = await manager.set_tempo("sketch", 140)
        assert timeline.tempo == 140
        with pytest.raises(ValueError, match="Invalid tempo: 300. Must be between 60 and 180 BPM"):
            await manager.set_tempo("sketch", 300)
        assert timeline.tempo == 140

    @pytest.mark.asyncio
    async def test_set_loop(self) -> None:
        manager = TimelineManager()
        await manager.create("sketch")
        timeline = await manager.set_loop("sketch", True)
        assert timeline.loop is True
