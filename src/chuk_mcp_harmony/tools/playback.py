"""
Playback tools - MCP tools for previewing and exporting timelines.

The preview runs the real lookahead scheduler against a manual clock and
reports every note it would send to the audio backend. MIDI export writes
standard MIDI files to the output directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_harmony.compiler import events_to_midi, timeline_to_events, triggered_notes_to_events
from chuk_mcp_harmony.config import PlaybackSettings
from chuk_mcp_harmony.constants import ErrorMessages, SuccessMessages
from chuk_mcp_harmony.core import midi_to_note_name
from chuk_mcp_harmony.playback import preview_playback, seconds_per_eighth
from chuk_mcp_harmony.timeline import TimelineManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_playback_tools(
    mcp: ChukMCPServer,
    manager: TimelineManager,
    output_dir: Path,
    settings: PlaybackSettings | None = None,
) -> dict[str, Any]:
    """
    Register playback and export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The timeline manager
        output_dir: Directory for output files
        settings: Playback settings

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    settings = settings or manager.settings

    @mcp.tool  # type: ignore[arg-type]
    async def music_preview_playback(timeline: str) -> str:
        """
        Simulate playing a timeline once and list the scheduled notes.

        Runs the lookahead scheduler offline. Each note carries its start
        time and duration in seconds from the start of playback.

        Args:
            timeline: Timeline name

        Returns:
            JSON string with the triggered notes

        Example:
            music_preview_playback(timeline="pop-loop")
        """
        try:
            tl = await manager.get(timeline)
            if tl is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.TIMELINE_NOT_FOUND.format(name=timeline),
                    }
                )
            if not tl.blocks:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.EMPTY_TIMELINE.format(name=timeline),
                    }
                )

            notes = preview_playback(tl, settings)
            return json.dumps(
                {
                    "status": "success",
                    "tempo": tl.tempo,
                    "seconds_per_eighth": seconds_per_eighth(tl.tempo),
                    "total_seconds": tl.total_duration() * seconds_per_eighth(tl.tempo),
                    "notes": [
                        {
                            "note": midi_to_note_name(note.midi),
                            "frequency": round(note.frequency, 2),
                            "start": round(note.start_time, 4),
                            "duration": round(note.duration, 4),
                        }
                        for note in notes
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to preview playback")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_preview_playback"] = music_preview_playback

    @mcp.tool  # type: ignore[arg-type]
    async def music_compile_midi(
        timeline: str,
        output_name: str | None = None,
        from_playback: bool = False,
    ) -> str:
        """
        Compile a timeline to a MIDI file.

        By default blocks are rendered from their grid positions. With
        from_playback, the notes the scheduler triggers during a preview are
        rendered instead.

        Args:
            timeline: Timeline name
            output_name: Optional output filename (without .mid extension)
            from_playback: Render a recorded playback session

        Returns:
            JSON string with compilation result and file path

        Example:
            music_compile_midi(timeline="pop-loop")
        """
        try:
            tl = await manager.get(timeline)
            if tl is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.TIMELINE_NOT_FOUND.format(name=timeline),
                    }
                )

            if from_playback:
                notes = preview_playback(tl, settings)
                events = triggered_notes_to_events(notes, tl.tempo, velocity=settings.gain)
            else:
                events = timeline_to_events(tl, octave=settings.octave, velocity=settings.gain)

            midi = events_to_midi(events, tempo_bpm=tl.tempo)

            filename = f"{output_name or timeline}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)
            midi.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "compilation": {
                        "blocks": len(tl.blocks),
                        "total_events": len(events),
                        "tempo": tl.tempo,
                    },
                    "message": SuccessMessages.TIMELINE_COMPILED.format(
                        name=timeline, path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to compile MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_compile_midi"] = music_compile_midi

    return tools
