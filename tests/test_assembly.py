"""Tests for track assembly onto the absolute tick timeline."""

from weather_midi.core import constants as C
from weather_midi.core.events import NoteEvent, Pattern, Track
from weather_midi.output import TrackAssembler


def pattern_with(*offsets, length=C.TICKS_PER_BAR, pitch=60):
    pattern = Pattern(length_ticks=length)
    for offset in offsets:
        pattern.add(NoteEvent(pitch=pitch, offset=offset, duration=120))
    return pattern


class TestTrackAssembler:
    """Tests for TrackAssembler."""

    def test_cursor_advances_by_declared_length(self):
        track = Track(name="t", patterns=[pattern_with(0), pattern_with(0, length=960), pattern_with(10)])
        assembled = TrackAssembler().assemble(track)

        assert [e.tick for e in assembled.events] == [0, 1920, 2890]
        assert assembled.end_tick == 1920 + 960 + 1920
        assert TrackAssembler.pattern_starts(track) == [0, 1920, 2880]

    def test_empty_patterns_are_silent_spans(self):
        track = Track(name="t", patterns=[Pattern(), Pattern(), pattern_with(0)])
        assembled = TrackAssembler().assemble(track)

        assert [e.tick for e in assembled.events] == [3840]
        assert assembled.end_tick == 5760
        assert assembled.pattern_count == 3

    def test_pattern_spans_do_not_overlap(self, varied_records):
        from weather_midi.generation import MappingEngine, RhythmicGenerator

        patterns = MappingEngine(bars_per_record=2).map(varied_records, RhythmicGenerator())
        track = Track.drum("drums", patterns)
        assembler = TrackAssembler()
        starts = assembler.pattern_starts(track)

        cursor = 0
        for i, pattern in enumerate(patterns):
            for event in pattern.events:
                tick = cursor + event.offset
                for later in starts[i + 1:]:
                    assert tick < later
            cursor += pattern.length_ticks

    def test_events_sorted_with_stable_ties(self):
        pattern = Pattern()
        pattern.add(NoteEvent(pitch=64, offset=480, duration=10))
        pattern.add(NoteEvent(pitch=60, offset=0, duration=10))
        pattern.add(NoteEvent(pitch=67, offset=480, duration=10))
        assembled = TrackAssembler().assemble(Track(name="t", patterns=[pattern]))

        assert [(e.tick, e.event.pitch) for e in assembled.events] == [(0, 60), (480, 64), (480, 67)]

    def test_track_not_modified(self):
        pattern = pattern_with(100, 0)
        track = Track(name="t", patterns=[pattern])
        TrackAssembler().assemble(track)
        assert [e.offset for e in pattern.events] == [100, 0]

    def test_drum_track_metadata(self):
        assembled = TrackAssembler().assemble(Track.drum("Drums", [pattern_with(0)]))
        assert assembled.is_drum
        assert assembled.instrument is None
        assert assembled.note_count == 1
