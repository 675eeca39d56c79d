"""
Chord modifiers - 7ths, extensions, suspensions and altered triads.

A modifier is a labelled transformation of a chord's intervals. Active
modifiers are an ordered sequence of labels: they are applied in order, so
when two replace-all rules are active (sus2 and sus4) the later one wins.

Display names follow a precedence cascade: dim > aug > sus > extensions,
where the highest extension implies the lower ones (a 13th contains the 9th
and 11th, so the chord is just named '13').
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .chord import CHORD_SYMBOL_SUFFIXES, ChordType, chord_type_from_intervals
from .pitch import PitchClass

logger = logging.getLogger(__name__)


class ModifierKind(str, Enum):
    """How a modifier transforms the current intervals."""

    ADD_SINGLE = "add_single"
    ADD_MULTIPLE = "add_multiple"
    REMOVE_SINGLE = "remove_single"
    REPLACE_ALL = "replace_all"


@dataclass(frozen=True)
class ModifierRule:
    """A labelled interval transformation."""

    label: str
    kind: ModifierKind
    intervals: tuple[int, ...]

    def apply(self, current: list[int]) -> list[int]:
        """Apply this rule to a working interval list, returning the new list."""
        if self.kind is ModifierKind.REPLACE_ALL:
            return list(self.intervals)
        if self.kind is ModifierKind.REMOVE_SINGLE:
            return [i for i in current if i not in self.intervals]
        result = list(current)
        for interval in self.intervals:
            if interval not in result:
                result.append(interval)
        return result


# The fixed catalogue, in palette order (semitones from root, 12 = octave)
MODIFIER_RULES: tuple[ModifierRule, ...] = (
    ModifierRule("7", ModifierKind.ADD_SINGLE, (10,)),  # b7
    ModifierRule("maj7", ModifierKind.ADD_SINGLE, (11,)),
    ModifierRule("6", ModifierKind.ADD_SINGLE, (9,)),
    ModifierRule("sus2", ModifierKind.REPLACE_ALL, (0, 2, 7)),
    ModifierRule("sus4", ModifierKind.REPLACE_ALL, (0, 5, 7)),
    ModifierRule("dim", ModifierKind.REPLACE_ALL, (0, 3, 6)),
    ModifierRule("9", ModifierKind.ADD_MULTIPLE, (10, 14)),
    ModifierRule("maj9", ModifierKind.ADD_MULTIPLE, (11, 14)),
    ModifierRule("11", ModifierKind.ADD_MULTIPLE, (10, 14, 17)),
    ModifierRule("13", ModifierKind.ADD_MULTIPLE, (10, 14, 21)),
    ModifierRule("add9", ModifierKind.ADD_SINGLE, (14,)),  # 9th without the 7th
    ModifierRule("aug", ModifierKind.REPLACE_ALL, (0, 4, 8)),
)

MODIFIERS_BY_LABEL: dict[str, ModifierRule] = {rule.label: rule for rule in MODIFIER_RULES}

# Highest extension first; the first active one names the chord
EXTENSION_PRIORITY: tuple[str, ...] = ("13", "11", "maj9", "9", "maj7", "7", "6", "add9")

_QUALITY_SUFFIXES: dict[ChordType, str] = {
    ChordType.MINOR: "m",
    ChordType.DIMINISHED: "°",
}


def get_modifier(label: str) -> ModifierRule | None:
    """Look up a modifier rule by label."""
    return MODIFIERS_BY_LABEL.get(label)


def resolve_modifiers(base_intervals: Sequence[int], active: Iterable[str]) -> list[int]:
    """
    Apply active modifiers to a base chord.

    Args:
        base_intervals: Intervals of the unmodified chord
        active: Active modifier labels, in the order they were applied

    Returns:
        Final intervals, sorted ascending without duplicates
    """
    intervals = list(base_intervals)
    for label in active:
        rule = MODIFIERS_BY_LABEL.get(label)
        if rule is None:
            logger.debug("Ignoring unknown modifier %r", label)
            continue
        intervals = rule.apply(intervals)
    return sorted(set(intervals))


def display_name(
    root: PitchClass | str,
    base_type: ChordType,
    base_intervals: Sequence[int],
    active: Sequence[str],
) -> str:
    """
    Get the display name for a chord with modifiers applied.

    Examples:
        display_name(PitchClass.C, ChordType.MAJOR, [0, 4, 7], ["add9"])  # "Cadd9"
        display_name(PitchClass.A, ChordType.MINOR, [0, 3, 7], ["7", "9"])  # "Am9"
        display_name(PitchClass.G, ChordType.MAJOR, [0, 4, 7], ["sus4", "9"])  # "Gsus49"

    Args:
        root: Root pitch class, or an already-spelled root name
        base_type: Quality of the unmodified chord
        base_intervals: Intervals of the unmodified chord
        active: Active modifier labels, in the order they were applied

    Returns:
        The chord name
    """
    if isinstance(root, PitchClass):
        root = root.spell()

    if not active:
        chord_type = chord_type_from_intervals(base_intervals) or ChordType.MAJOR
        return root + CHORD_SYMBOL_SUFFIXES[chord_type]

    if "dim" in active:
        return f"{root}°"

    if "aug" in active:
        return f"{root}+"

    sus_labels = [label for label in active if label.startswith("sus")]
    if sus_labels:
        # The last suspension applied is the one that sounds
        name = root + sus_labels[-1]
        extensions = [
            label for label in active if not label.startswith("sus") and "7" not in label
        ]
        return name + "".join(extensions)

    name = root + _QUALITY_SUFFIXES.get(base_type, "")
    for label in EXTENSION_PRIORITY:
        if label in active:
            return name + label
    return name


@dataclass
class ModifierSet:
    """
    Toggleable modifier state for one chord.

    Holds the base intervals and the ordered list of active labels, and
    recomputes the resolved intervals on demand.
    """

    base_intervals: tuple[int, ...]
    active: list[str] = field(default_factory=list)

    def toggle(self, label: str) -> bool:
        """
        Toggle a modifier on or off.

        Unknown labels are ignored.

        Returns:
            True if the modifier is now active
        """
        if label not in MODIFIERS_BY_LABEL:
            logger.warning("Unknown modifier: %s", label)
            return False
        if label in self.active:
            self.active.remove(label)
            return False
        self.active.append(label)
        return True

    def reset(self) -> None:
        """Clear all modifiers."""
        self.active.clear()

    def is_active(self, label: str) -> bool:
        return label in self.active

    @property
    def intervals(self) -> list[int]:
        """The base chord with all active modifiers applied."""
        return resolve_modifiers(self.base_intervals, self.active)

    def name(self, root: PitchClass, base_type: ChordType) -> str:
        return display_name(root, base_type, self.base_intervals, self.active)
