"""Track assembly - Lay patterns end to end on an absolute tick timeline."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.constants import DRUM_CHANNEL
from ..core.events import NoteEvent, Track


@dataclass(frozen=True)
class AbsoluteEvent:
    """A note event placed at an absolute tick within its track."""

    tick: int
    event: NoteEvent

    @property
    def end_tick(self) -> int:
        return self.tick + self.event.duration


@dataclass
class AssembledTrack:
    """A track flattened to absolute-tick events, ready for serialization."""

    name: str
    channel: int
    instrument: Optional[int]
    events: List[AbsoluteEvent] = field(default_factory=list)
    end_tick: int = 0
    pattern_count: int = 0

    @property
    def is_drum(self) -> bool:
        return self.channel == DRUM_CHANNEL

    @property
    def note_count(self) -> int:
        return len(self.events)


class TrackAssembler:
    """Concatenate a track's patterns using a running tick cursor.

    Pattern ``k`` starts at the sum of the declared lengths of patterns
    ``0..k-1``, whether or not any event fills those lengths.
    """

    @staticmethod
    def pattern_starts(track: Track) -> List[int]:
        """Absolute start tick of every pattern on the track."""
        starts = []
        cursor = 0
        for pattern in track.patterns:
            starts.append(cursor)
            cursor += pattern.length_ticks
        return starts

    def assemble(self, track: Track) -> AssembledTrack:
        """
        Flatten a track to absolute events.

        Args:
            track: Track to assemble (not modified)

        Returns:
            AssembledTrack with events sorted by absolute tick; events on the
            same tick keep their pattern order
        """
        events = []
        cursor = 0
        for pattern in track.patterns:
            for event in pattern.ordered_events():
                events.append(AbsoluteEvent(tick=cursor + event.offset, event=event))
            cursor += pattern.length_ticks

        events.sort(key=lambda e: e.tick)

        return AssembledTrack(
            name=track.name,
            channel=track.channel,
            instrument=track.instrument,
            events=events,
            end_tick=cursor,
            pattern_count=len(track.patterns),
        )
