"""
Timeline management - the chord sequences users build and play.

This module provides:
- TimelineManager: Lifecycle management for chord timelines
"""

from chuk_mcp_harmony.timeline.manager import TimelineManager

__all__ = ["TimelineManager"]
