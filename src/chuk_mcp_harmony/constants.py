"""
Constants and message templates for the harmony system.

No magic strings - use enums, module constants and message templates.
"""

# Timeline grid: all positions and durations are in eighth notes
EIGHTHS_PER_BEAT = 2
BEATS_PER_MEASURE = 4
EIGHTHS_PER_MEASURE = EIGHTHS_PER_BEAT * BEATS_PER_MEASURE

# Tempo range enforced on timelines (BPM)
MIN_TEMPO = 60
MAX_TEMPO = 180
DEFAULT_TEMPO = 120

# New chord blocks default to one 4/4 measure
DEFAULT_BLOCK_DURATION = EIGHTHS_PER_MEASURE

# Lookahead scheduling defaults
LOOKAHEAD_SECONDS = 0.1
SCHEDULE_INTERVAL_MS = 25
REFRESH_INTERVAL_SECONDS = 1 / 60

# Chord voicing defaults
DEFAULT_OCTAVE = 4
DEFAULT_GAIN = 0.6

# Channel used for chord playback in exported MIDI
CHORD_CHANNEL = 0


class ErrorMessages:
    """Standardized error messages."""

    TIMELINE_NOT_FOUND = "Timeline '{name}' not found."
    TIMELINE_EXISTS = "Timeline '{name}' already exists."
    BLOCK_NOT_FOUND = "Chord block '{block_id}' not found in timeline '{name}'."
    INVALID_KEY = "Invalid key: '{key}'. Expected format like 'C_major' or 'Bb_minor'."
    INVALID_TEMPO = "Invalid tempo: {tempo}. Must be between {min_tempo} and {max_tempo} BPM."
    INVALID_INDEX = "Index {index} is out of range for {count} chord blocks."
    EMPTY_TIMELINE = "Timeline '{name}' has no chord blocks."


class SuccessMessages:
    """Standardized success messages."""

    TIMELINE_CREATED = "Created timeline '{name}'."
    TIMELINE_DELETED = "Deleted timeline '{name}'."
    CHORD_ADDED = "Added {chord} at position {position}."
    CHORD_REMOVED = "Removed chord block '{block_id}'."
    TIMELINE_COMPILED = "Compiled timeline '{name}' to {path}."
