"""
Timeline model - the ordered chord blocks a user builds and plays back.

A ChordTimeline contains:
- Global context (key, tempo, loop flag)
- Chord blocks positioned on an eighth-note grid

Reordering packs blocks into a contiguous sequence. Moving a block sets its
position directly and re-sorts; moved blocks may overlap their neighbours.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_harmony.constants import (
    DEFAULT_BLOCK_DURATION,
    DEFAULT_TEMPO,
    MAX_TEMPO,
    MIN_TEMPO,
    ErrorMessages,
)
from chuk_mcp_harmony.core.chord import normalize_intervals, roman_numeral
from chuk_mcp_harmony.core.modifiers import resolve_modifiers
from chuk_mcp_harmony.core.pitch import PitchClass
from chuk_mcp_harmony.core.scale import Key


def _new_block_id() -> str:
    return uuid4().hex[:12]


class ChordBlock(BaseModel):
    """
    A chord placed on the timeline.

    Position and duration are in eighth notes.
    """

    id: str = Field(default_factory=_new_block_id, description="Unique block id")
    root_note: PitchClass = Field(..., description="Chord root")
    intervals: list[int] = Field(..., min_length=1, description="Semitones from root")
    numeral: str = Field("?", description="Roman numeral in the timeline key")
    position: float = Field(0, ge=0, description="Start, in eighth notes")
    duration: float = Field(DEFAULT_BLOCK_DURATION, gt=0, description="Length, in eighth notes")
    modifiers: list[str] = Field(default_factory=list, description="Applied modifier labels")

    @field_validator("root_note", mode="before")
    @classmethod
    def parse_root(cls, v: Any) -> Any:
        """Accept note names like 'F#' or 'Bb'."""
        if isinstance(v, str):
            return PitchClass.parse(v)
        return v

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: list[int]) -> list[int]:
        """Keep intervals sorted ascending without duplicates."""
        if any(i < 0 for i in v):
            raise ValueError(f"Intervals must be non-negative, got {v}")
        return list(normalize_intervals(v))

    @property
    def end(self) -> float:
        """End position, in eighth notes."""
        return self.position + self.duration

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "root": self.root_note.spell(),
            "intervals": self.intervals,
            "numeral": self.numeral,
            "position": self.position,
            "duration": self.duration,
            "modifiers": self.modifiers,
        }


class ChordTimeline(BaseModel):
    """
    An ordered sequence of chord blocks with its playback context.

    This is the document the playback scheduler reads a snapshot of.
    """

    name: str = Field(..., description="Timeline name")
    key: str = Field("C_major", description="Key (e.g., 'C_major', 'Bb_minor')")
    tempo: int = Field(DEFAULT_TEMPO, ge=MIN_TEMPO, le=MAX_TEMPO, description="Tempo in BPM")
    loop: bool = Field(False, description="Restart at the end of the timeline")
    blocks: list[ChordBlock] = Field(default_factory=list, description="Chord blocks")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate key format."""
        Key.parse(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.replace("_", "").replace("-", "").isalnum():
            raise ValueError(f"Invalid timeline name: {v}")
        return v

    def get_key(self) -> Key:
        """Get parsed Key object."""
        return Key.parse(self.key)

    def total_duration(self) -> float:
        """Sum of all block durations, in eighth notes."""
        return sum(block.duration for block in self.blocks)

    def get_block(self, block_id: str) -> ChordBlock | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def add_block(
        self,
        root: PitchClass | str,
        intervals: Sequence[int],
        duration: float | None = None,
        numeral: str | None = None,
        modifiers: Sequence[str] = (),
    ) -> ChordBlock:
        """
        Append a chord block at the end of the timeline.

        Args:
            root: Chord root
            intervals: Base chord intervals (before modifiers)
            duration: Length in eighth notes (default: one measure)
            numeral: Roman numeral (default: computed from the timeline key)
            modifiers: Modifier labels to apply, in order

        Returns:
            The created block
        """
        if isinstance(root, str):
            root = PitchClass.parse(root)

        if numeral is None:
            key = self.get_key()
            numeral = roman_numeral(root, intervals, key.tonic, key.mode)

        end = max((block.end for block in self.blocks), default=0)
        block = ChordBlock(
            root_note=root,
            intervals=resolve_modifiers(intervals, modifiers),
            numeral=numeral,
            position=end,
            duration=duration if duration is not None else DEFAULT_BLOCK_DURATION,
            modifiers=list(modifiers),
        )
        self.blocks.append(block)
        return block

    def remove_block(self, block_id: str) -> bool:
        """
        Remove a block by id.

        Returns True if removed, False if not found.
        """
        for i, block in enumerate(self.blocks):
            if block.id == block_id:
                self.blocks.pop(i)
                return True
        return False

    def resize_block(self, block_id: str, duration: float) -> ChordBlock | None:
        """Change a block's duration. Other blocks keep their positions."""
        block = self.get_block(block_id)
        if block is None:
            return None
        if duration <= 0:
            raise ValueError(f"Duration must be positive, got {duration}")
        block.duration = duration
        return block

    def reorder_block(self, from_index: int, to_index: int) -> None:
        """
        Move a block to a new index and repack all positions.

        After reordering, blocks form a contiguous, non-overlapping sequence
        starting at 0.
        """
        count = len(self.blocks)
        for index in (from_index, to_index):
            if not 0 <= index < count:
                raise IndexError(ErrorMessages.INVALID_INDEX.format(index=index, count=count))

        block = self.blocks.pop(from_index)
        self.blocks.insert(to_index, block)
        self._repack()

    def move_block(self, block_id: str, position: float) -> ChordBlock | None:
        """
        Place a block at an absolute position and re-sort by position.

        Overlap with other blocks is allowed; overlapping chords sound together.
        """
        block = self.get_block(block_id)
        if block is None:
            return None
        block.position = max(0.0, position)
        self.blocks.sort(key=lambda b: b.position)
        return block

    def block_index_at(self, time: float) -> int | None:
        """Index of the first block sounding at a time, if any."""
        for i, block in enumerate(self.blocks):
            if block.position <= time < block.end:
                return i
        return None

    def clear(self) -> None:
        self.blocks.clear()

    def _repack(self) -> None:
        position = 0.0
        for block in self.blocks:
            block.position = position
            position += block.duration

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "tempo": self.tempo,
            "loop": self.loop,
            "total_duration": self.total_duration(),
            "blocks": [block.to_dict() for block in self.blocks],
        }
