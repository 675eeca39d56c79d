"""
MCP tool implementations.

Tools are organized by domain:
- harmony - Scales, chords, modifiers, numerals and spelling
- timeline - Timeline lifecycle and chord block editing
- playback - Playback preview and MIDI export
"""

from chuk_mcp_harmony.tools.harmony import register_harmony_tools
from chuk_mcp_harmony.tools.playback import register_playback_tools
from chuk_mcp_harmony.tools.timeline import register_timeline_tools

__all__ = [
    "register_harmony_tools",
    "register_playback_tools",
    "register_timeline_tools",
]
