#!/usr/bin/env python3
"""
Async Harmony MCP Server using chuk-mcp-server

This server provides MCP tools for exploring harmony and sketching chord
progressions. Chords are placed on an eighth-note timeline and played back
with a lookahead scheduler.

The server provides tools for:
- Scales, diatonic chords and borrowed chords in any major or minor key
- Chord modifiers (7ths, extensions, suspensions) and chord naming
- Roman numerals, scale-degree labels and note spelling
- Building and editing chord timelines
- Previewing playback and compiling timelines to MIDI files

Playback settings are read from the YAML file named by the
CHUK_HARMONY_CONFIG environment variable, if set.
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_harmony.config import load_settings
from chuk_mcp_harmony.timeline import TimelineManager
from chuk_mcp_harmony.tools import (
    register_harmony_tools,
    register_playback_tools,
    register_timeline_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHUK_HARMONY_CONFIG"

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-harmony")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
OUTPUT_DIR = BASE_PATH / "output"
CONFIG_PATH = Path(os.environ[CONFIG_ENV_VAR]) if os.environ.get(CONFIG_ENV_VAR) else None

# Settings and managers
settings = load_settings(CONFIG_PATH)
timeline_manager = TimelineManager(settings)

# Register all tools
harmony_tools = register_harmony_tools(mcp)
timeline_tools = register_timeline_tools(mcp, timeline_manager)
playback_tools = register_playback_tools(mcp, timeline_manager, OUTPUT_DIR, settings)

# Export tool functions for direct access
music_get_scale = harmony_tools["music_get_scale"]
music_get_scale_chords = harmony_tools["music_get_scale_chords"]
music_get_borrowed_chords = harmony_tools["music_get_borrowed_chords"]
music_apply_modifiers = harmony_tools["music_apply_modifiers"]
music_get_roman_numeral = harmony_tools["music_get_roman_numeral"]
music_spell_note = harmony_tools["music_spell_note"]
music_get_scale_degree_label = harmony_tools["music_get_scale_degree_label"]

music_create_timeline = timeline_tools["music_create_timeline"]
music_get_timeline = timeline_tools["music_get_timeline"]
music_list_timelines = timeline_tools["music_list_timelines"]
music_delete_timeline = timeline_tools["music_delete_timeline"]
music_add_chord = timeline_tools["music_add_chord"]
music_remove_chord = timeline_tools["music_remove_chord"]
music_resize_chord = timeline_tools["music_resize_chord"]
music_reorder_chord = timeline_tools["music_reorder_chord"]
music_move_chord = timeline_tools["music_move_chord"]
music_set_tempo = timeline_tools["music_set_tempo"]
music_set_loop = timeline_tools["music_set_loop"]

music_preview_playback = playback_tools["music_preview_playback"]
music_compile_midi = playback_tools["music_compile_midi"]

logger.info("CHUK Harmony MCP Server initialized")
logger.info(f"  Config: {CONFIG_PATH or 'defaults'}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
