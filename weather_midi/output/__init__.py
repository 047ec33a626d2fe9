"""Output layer - Track assembly and MIDI export.

- Track assembly (patterns to absolute-tick events)
- Standard MIDI File writing
- Reading written files back for inspection
"""

from .assembly import AbsoluteEvent, AssembledTrack, TrackAssembler
from .midi import (
    MIDIFileWriter,
    WriteResult,
    MIDISummary,
    duration_seconds,
    summarize_midi,
    tempo_to_microseconds,
)

__all__ = [
    "AbsoluteEvent",
    "AssembledTrack",
    "TrackAssembler",
    "MIDIFileWriter",
    "WriteResult",
    "MIDISummary",
    "duration_seconds",
    "summarize_midi",
    "tempo_to_microseconds",
]
