"""
Pydantic models for the harmony system.

This module provides:
- ChordTimeline: Ordered chord blocks with key, tempo and loop flag
- ChordBlock: A chord placed on the eighth-note grid
"""

from chuk_mcp_harmony.models.timeline import ChordBlock, ChordTimeline

__all__ = [
    "ChordBlock",
    "ChordTimeline",
]
