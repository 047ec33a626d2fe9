"""Note events, patterns and tracks - the symbolic unit of a MIDI sequence."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional

from .constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_ROOT,
    DRUM_CHANNEL,
    MIDI_MAX,
    MIDI_MIN,
    TICKS_PER_BAR,
)

if TYPE_CHECKING:
    from ..input.records import SignalRecord
    from ..theory.scales import ScaleType


def clamp(value: int, low: int, high: int) -> int:
    """Clamp an integer to [low, high]."""
    return max(low, min(high, int(value)))


@dataclass(frozen=True)
class NoteEvent:
    """A single timed note inside a pattern.

    Values outside the legal MIDI ranges are clamped, never rejected.
    """

    pitch: int  # MIDI pitch (0-127)
    offset: int  # Ticks from the start of the owning pattern
    duration: int  # Ticks, always >= 1
    velocity: int = 100  # MIDI velocity (0-127)
    channel: int = 0  # MIDI channel (0-15)

    def __post_init__(self):
        object.__setattr__(self, "pitch", clamp(self.pitch, MIDI_MIN, MIDI_MAX))
        object.__setattr__(self, "offset", max(0, int(self.offset)))
        object.__setattr__(self, "duration", max(1, int(self.duration)))
        object.__setattr__(self, "velocity", clamp(self.velocity, MIDI_MIN, MIDI_MAX))
        object.__setattr__(self, "channel", clamp(self.channel, CHANNEL_MIN, CHANNEL_MAX))

    @property
    def end(self) -> int:
        """Tick (relative to the pattern) at which the note stops."""
        return self.offset + self.duration


@dataclass
class Pattern:
    """One bar of events for a single musical role.

    ``length_ticks`` drives sequencing even when no event reaches it, so an
    empty pattern is a valid stretch of silence. Anything the serializer
    needs goes through ``length_ticks`` and ``ordered_events()``.
    """

    length_ticks: int = TICKS_PER_BAR
    events: List[NoteEvent] = field(default_factory=list)
    source: Optional["SignalRecord"] = None
    bar_index: int = 0

    def add(self, event: NoteEvent) -> None:
        self.events.append(event)

    def ordered_events(self) -> List[NoteEvent]:
        """Events sorted by offset; ties keep insertion order."""
        return sorted(self.events, key=lambda e: e.offset)

    def __len__(self) -> int:
        return len(self.events)


@dataclass
class RhythmicPattern(Pattern):
    """A bar of percussion hits."""

    def hits_for(self, pitch: int) -> List[NoteEvent]:
        """All hits on one drum sound, in offset order."""
        return [e for e in self.ordered_events() if e.pitch == pitch]


@dataclass
class MelodicPattern(Pattern):
    """A bar of melodic material in one scale and register."""

    scale: Optional["ScaleType"] = None
    root_note: int = DEFAULT_ROOT


@dataclass
class Track:
    """A named, channel-scoped sequence of patterns."""

    name: str = "Track"
    channel: int = 0
    instrument: Optional[int] = None  # GM program, None for drums
    patterns: List[Pattern] = field(default_factory=list)

    @classmethod
    def drum(cls, name: str, patterns: Iterable[Pattern]) -> "Track":
        """Create a drum track (channel 10, no program change)."""
        return cls(name=name, channel=DRUM_CHANNEL, instrument=None, patterns=list(patterns))

    @classmethod
    def instrument_track(
        cls,
        name: str,
        channel: int,
        instrument: int,
        patterns: Iterable[Pattern],
    ) -> "Track":
        """Create a melodic track on ``channel`` playing GM ``instrument``."""
        return cls(
            name=name,
            channel=clamp(channel, CHANNEL_MIN, CHANNEL_MAX),
            instrument=clamp(instrument, MIDI_MIN, MIDI_MAX),
            patterns=list(patterns),
        )

    @property
    def is_drum(self) -> bool:
        return self.channel == DRUM_CHANNEL

    @property
    def length_ticks(self) -> int:
        """Total duration in ticks: the sum of all pattern lengths."""
        return sum(p.length_ticks for p in self.patterns)

    @property
    def note_count(self) -> int:
        return sum(len(p.events) for p in self.patterns)
