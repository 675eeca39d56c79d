"""
Timeline tools - MCP tools for building chord timelines.

Tools for creating timelines and adding, removing, resizing and moving
chord blocks.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_harmony.constants import ErrorMessages, SuccessMessages
from chuk_mcp_harmony.core import display_name
from chuk_mcp_harmony.core.chord import ChordType, chord_type_from_intervals
from chuk_mcp_harmony.timeline import TimelineManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_timeline_tools(
    mcp: ChukMCPServer,
    manager: TimelineManager,
) -> dict[str, Any]:
    """
    Register timeline editing tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The timeline manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_create_timeline(
        name: str,
        key: str = "C_major",
        tempo: int | None = None,
        loop: bool = False,
    ) -> str:
        """
        Create a new, empty chord timeline.

        Args:
            name: Unique name for the timeline
            key: Musical key (e.g., 'C_major', 'A_minor')
            tempo: Tempo in BPM (60-180, default 120)
            loop: Restart at the end during playback

        Returns:
            JSON string with timeline details

        Example:
            music_create_timeline(name="pop-loop", key="G_major", tempo=96)
        """
        try:
            timeline = await manager.create(name=name, key=key, tempo=tempo, loop=loop)
            return json.dumps(
                {
                    "status": "success",
                    "timeline": timeline.to_dict(),
                    "message": SuccessMessages.TIMELINE_CREATED.format(name=name),
                }
            )
        except Exception as e:
            logger.exception("Failed to create timeline")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_create_timeline"] = music_create_timeline

    @mcp.tool  # type: ignore[arg-type]
    async def music_get_timeline(name: str) -> str:
        """
        Get timeline details including every chord block.

        Args:
            name: Timeline name

        Returns:
            JSON string with timeline details
        """
        try:
            timeline = await manager.get(name)
            if timeline is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.TIMELINE_NOT_FOUND.format(name=name),
                    }
                )
            return json.dumps({"status": "success", "timeline": timeline.to_dict()})
        except Exception as e:
            logger.exception("Failed to get timeline")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_get_timeline"] = music_get_timeline

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_timelines() -> str:
        """
        List all timelines.

        Returns:
            JSON string with name, key, tempo and block count per timeline
        """
        try:
            timelines = await manager.list_timelines()
            return json.dumps(
                {
                    "status": "success",
                    "timelines": [
                        {
                            "name": t.name,
                            "key": t.key,
                            "tempo": t.tempo,
                            "blocks": len(t.blocks),
                            "total_duration": t.total_duration(),
                        }
                        for t in timelines
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list timelines")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_timelines"] = music_list_timelines

    @mcp.tool  # type: ignore[arg-type]
    async def music_delete_timeline(name: str) -> str:
        """
        Delete a timeline.

        Args:
            name: Timeline name

        Returns:
            JSON string with deletion result
        """
        try:
            if not await manager.delete(name):
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.TIMELINE_NOT_FOUND.format(name=name),
                    }
                )
            return json.dumps(
                {"status": "success", "message": SuccessMessages.TIMELINE_DELETED.format(name=name)}
            )
        except Exception as e:
            logger.exception("Failed to delete timeline")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_delete_timeline"] = music_delete_timeline

    @mcp.tool  # type: ignore[arg-type]
    async def music_add_chord(
        timeline: str,
        root: str,
        intervals: list[int],
        duration: float | None = None,
        modifiers: list[str] | None = None,
    ) -> str:
        """
        Append a chord block at the end of a timeline.

        The Roman numeral is computed from the timeline's key. Modifiers are
        applied to the base intervals before the block is stored.

        Args:
            timeline: Timeline name
            root: Chord root (e.g., 'C', 'F#', 'Bb')
            intervals: Base chord intervals (e.g., [0, 4, 7] for major)
            duration: Length in eighth notes (default 8, one measure)
            modifiers: Optional modifier labels (e.g., ['7', 'sus4'])

        Returns:
            JSON string with the created block

        Example:
            music_add_chord(timeline="pop-loop", root="A", intervals=[0, 3, 7])
        """
        try:
            labels = modifiers or []
            block = await manager.add_chord(timeline, root, intervals, duration, labels)
            base_type = chord_type_from_intervals(intervals) or ChordType.MAJOR
            name = display_name(block.root_note, base_type, intervals, labels)
            return json.dumps(
                {
                    "status": "success",
                    "block": block.to_dict(),
                    "name": name,
                    "message": SuccessMessages.CHORD_ADDED.format(
                        chord=name, position=block.position
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to add chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_add_chord"] = music_add_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_remove_chord(timeline: str, block_id: str) -> str:
        """
        Remove a chord block. Other blocks keep their positions.

        Args:
            timeline: Timeline name
            block_id: Id of the block to remove

        Returns:
            JSON string with the remaining blocks
        """
        try:
            tl = await manager.remove_chord(timeline, block_id)
            return json.dumps(
                {
                    "status": "success",
                    "timeline": tl.to_dict(),
                    "message": SuccessMessages.CHORD_REMOVED.format(block_id=block_id),
                }
            )
        except Exception as e:
            logger.exception("Failed to remove chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_remove_chord"] = music_remove_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_resize_chord(timeline: str, block_id: str, duration: float) -> str:
        """
        Change the length of a chord block.

        Args:
            timeline: Timeline name
            block_id: Id of the block
            duration: New length in eighth notes (> 0)

        Returns:
            JSON string with the updated block
        """
        try:
            block = await manager.resize_chord(timeline, block_id, duration)
            return json.dumps({"status": "success", "block": block.to_dict()})
        except Exception as e:
            logger.exception("Failed to resize chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_resize_chord"] = music_resize_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_reorder_chord(timeline: str, from_index: int, to_index: int) -> str:
        """
        Move a chord block to another index.

        Afterwards all blocks are packed end to end from position 0.

        Args:
            timeline: Timeline name
            from_index: Current index (0-based)
            to_index: Target index (0-based)

        Returns:
            JSON string with the reordered timeline
        """
        try:
            tl = await manager.reorder_chord(timeline, from_index, to_index)
            return json.dumps({"status": "success", "timeline": tl.to_dict()})
        except Exception as e:
            logger.exception("Failed to reorder chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_reorder_chord"] = music_reorder_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_move_chord(timeline: str, block_id: str, position: float) -> str:
        """
        Place a chord block at an absolute position.

        Blocks may overlap after a move; overlapping chords sound together.

        Args:
            timeline: Timeline name
            block_id: Id of the block
            position: New start in eighth notes (negative values clamp to 0)

        Returns:
            JSON string with the moved block
        """
        try:
            block = await manager.move_chord(timeline, block_id, position)
            return json.dumps({"status": "success", "block": block.to_dict()})
        except Exception as e:
            logger.exception("Failed to move chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_move_chord"] = music_move_chord

    @mcp.tool  # type: ignore[arg-type]
    async def music_set_tempo(timeline: str, tempo: int) -> str:
        """
        Set the tempo of a timeline.

        Args:
            timeline: Timeline name
            tempo: Tempo in BPM (60-180)

        Returns:
            JSON string with the new tempo
        """
        try:
            tl = await manager.set_tempo(timeline, tempo)
            return json.dumps({"status": "success", "timeline": tl.name, "tempo": tl.tempo})
        except Exception as e:
            logger.exception("Failed to set tempo")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_set_tempo"] = music_set_tempo

    @mcp.tool  # type: ignore[arg-type]
    async def music_set_loop(timeline: str, loop: bool) -> str:
        """
        Turn looping on or off for a timeline.

        Args:
            timeline: Timeline name
            loop: Restart at the end during playback

        Returns:
            JSON string with the new loop flag
        """
        try:
            tl = await manager.set_loop(timeline, loop)
            return json.dumps({"status": "success", "timeline": tl.name, "loop": tl.loop})
        except Exception as e:
            logger.exception("Failed to set loop")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_set_loop"] = music_set_loop

    return tools
