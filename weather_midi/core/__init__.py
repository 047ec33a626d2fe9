"""Core types and constants for Weather MIDI."""

from .events import NoteEvent, Pattern, RhythmicPattern, MelodicPattern, Track
from .errors import WeatherMidiError, SourceUnavailable, InvalidInput
from .constants import (
    TICKS_PER_QUARTER,
    TICKS_PER_BAR,
    DRUM_CHANNEL,
    DEFAULT_TEMPO,
)

__all__ = [
    "NoteEvent",
    "Pattern",
    "RhythmicPattern",
    "MelodicPattern",
    "Track",
    "WeatherMidiError",
    "SourceUnavailable",
    "InvalidInput",
    "TICKS_PER_QUARTER",
    "TICKS_PER_BAR",
    "DRUM_CHANNEL",
    "DEFAULT_TEMPO",
]
