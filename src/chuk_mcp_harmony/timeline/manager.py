"""
Timeline Manager - handles chord timeline lifecycle.

Provides async operations for creating, finding, copying and editing
timelines. Timelines live in memory for the lifetime of the server.
"""

from __future__ import annotations

from collections.abc import Sequence

from chuk_mcp_harmony.config import PlaybackSettings
from chuk_mcp_harmony.constants import MAX_TEMPO, MIN_TEMPO, ErrorMessages
from chuk_mcp_harmony.models.timeline import ChordBlock, ChordTimeline


class TimelineManager:
    """
    Manages chord timelines keyed by name.

    All operations are async so tools can await them uniformly.
    """

    def __init__(self, settings: PlaybackSettings | None = None):
        """
        Initialize the manager.

        Args:
            settings: Defaults for new timelines and blocks
        """
        self.settings = settings or PlaybackSettings()
        self._cache: dict[str, ChordTimeline] = {}

    async def create(
        self,
        name: str,
        key: str = "C_major",
        tempo: int | None = None,
        loop: bool = False,
    ) -> ChordTimeline:
        """
        Create a new, empty timeline.

        Args:
            name: Timeline name
            key: Key (e.g., 'C_major', 'Bb_minor')
            tempo: Tempo in BPM (default from settings)
            loop: Restart at the end during playback

        Returns:
            The created ChordTimeline
        """
        if name in self._cache:
            raise ValueError(ErrorMessages.TIMELINE_EXISTS.format(name=name))

        timeline = ChordTimeline(
            name=name,
            key=key,
            tempo=tempo if tempo is not None else self.settings.default_tempo,
            loop=loop,
        )
        self._cache[name] = timeline
        return timeline

    async def get(self, name: str) -> ChordTimeline | None:
        """Get a timeline by name, or None if not found."""
        return self._cache.get(name)

    async def require(self, name: str) -> ChordTimeline:
        """Get a timeline by name, raising ValueError if not found."""
        timeline = await self.get(name)
        if timeline is None:
            raise ValueError(ErrorMessages.TIMELINE_NOT_FOUND.format(name=name))
        return timeline

    async def list_timelines(self) -> list[ChordTimeline]:
        """List all timelines, sorted by name."""
        return sorted(self._cache.values(), key=lambda t: t.name)

    async def delete(self, name: str) -> bool:
        """
        Delete a timeline.

        Returns:
            True if deleted, False if not found
        """
        return self._cache.pop(name, None) is not None

    async def duplicate(self, name: str, new_name: str) -> ChordTimeline:
        """
        Copy a timeline under a new name. Blocks are deep-copied.

        Args:
            name: Original timeline name
            new_name: New timeline name

        Returns:
            The duplicated ChordTimeline
        """
        original = await self.require(name)
        if new_name in self._cache:
            raise ValueError(ErrorMessages.TIMELINE_EXISTS.format(name=new_name))

        copy = original.model_copy(update={"name": new_name}, deep=True)
        self._cache[new_name] = copy
        return copy

    # Convenience methods for timeline operations

    async def add_chord(
        self,
        name: str,
        root: str,
        intervals: Sequence[int],
        duration: float | None = None,
        modifiers: Sequence[str] = (),
    ) -> ChordBlock:
        """
        Append a chord block to a timeline.

        Args:
            name: Timeline name
            root: Chord root note name
            intervals: Base chord intervals
            duration: Length in eighth notes (default from settings)
            modifiers: Modifier labels to apply

        Returns:
            The created ChordBlock
        """
        timeline = await self.require(name)
        if duration is None:
            duration = self.settings.default_block_duration
        return timeline.add_block(root, intervals, duration=duration, modifiers=modifiers)

    async def remove_chord(self, name: str, block_id: str) -> ChordTimeline:
        timeline = await self.require(name)
        if not timeline.remove_block(block_id):
            raise ValueError(ErrorMessages.BLOCK_NOT_FOUND.format(block_id=block_id, name=name))
        return timeline

    async def resize_chord(self, name: str, block_id: str, duration: float) -> ChordBlock:
        timeline = await self.require(name)
        block = timeline.resize_block(block_id, duration)
        if block is None:
            raise ValueError(ErrorMessages.BLOCK_NOT_FOUND.format(block_id=block_id, name=name))
        return block

    async def move_chord(self, name: str, block_id: str, position: float) -> ChordBlock:
        timeline = await self.require(name)
        block = timeline.move_block(block_id, position)
        if block is None:
            raise ValueError(ErrorMessages.BLOCK_NOT_FOUND.format(block_id=block_id, name=name))
        return block

    async def reorder_chord(self, name: str, from_index: int, to_index: int) -> ChordTimeline:
        timeline = await self.require(name)
        timeline.reorder_block(from_index, to_index)
        return timeline

    async def set_tempo(self, name: str, tempo: int) -> ChordTimeline:
        """Change a timeline's tempo (validated against the tempo range)."""
        timeline = await self.require(name)
        if not MIN_TEMPO <= tempo <= MAX_TEMPO:
            raise ValueError(
                ErrorMessages.INVALID_TEMPO.format(
                    tempo=tempo, min_tempo=MIN_TEMPO, max_tempo=MAX_TEMPO
                )
            )
        timeline.tempo = tempo
        return timeline

    async def set_loop(self, name: str, loop: bool) -> ChordTimeline:
        timeline = await self.require(name)
        timeline.loop = loop
        return timeline
