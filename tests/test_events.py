"""Tests for note events, patterns and tracks."""

import pytest

from weather_midi.core import constants as C
from weather_midi.core.events import MelodicPattern, NoteEvent, Pattern, RhythmicPattern, Track


class TestNoteEvent:
    """Tests for NoteEvent."""

    def test_creation(self):
        note = NoteEvent(pitch=60, offset=480, duration=240, velocity=80, channel=2)
        assert note.end == 720

    @pytest.mark.parametrize(
        "kwargs,field,expected",
        [
            ({"pitch": 140}, "pitch", 127),
            ({"pitch": -3}, "pitch", 0),
            ({"velocity": 200}, "velocity", 127),
            ({"velocity": -20}, "velocity", 0),
            ({"channel": 16}, "channel", 15),
            ({"offset": -10}, "offset", 0),
            ({"duration": 0}, "duration", 1),
        ],
    )
    def test_out_of_range_values_clamped(self, kwargs, field, expected):
        params = {"pitch": 60, "offset": 0, "duration": 120}
        params.update(kwargs)
        assert getattr(NoteEvent(**params), field) == expected

    def test_immutable(self):
        note = NoteEvent(pitch=60, offset=0, duration=1)
        with pytest.raises(AttributeError):
            note.pitch = 61


class TestPattern:
    """Tests for pattern variants."""

    def test_ordered_events_stable(self):
        pattern = Pattern()
        pattern.add(NoteEvent(pitch=62, offset=240, duration=10))
        pattern.add(NoteEvent(pitch=60, offset=0, duration=10))
        pattern.add(NoteEvent(pitch=64, offset=240, duration=10))
        assert [e.pitch for e in pattern.ordered_events()] == [60, 62, 64]
        assert len(pattern) == 3

    def test_default_length_is_one_bar(self):
        assert Pattern().length_ticks == C.TICKS_PER_BAR
        assert MelodicPattern().root_note == C.DEFAULT_ROOT

    def test_hits_for(self):
        pattern = RhythmicPattern()
        pattern.add(NoteEvent(pitch=C.SNARE, offset=480, duration=10))
        pattern.add(NoteEvent(pitch=C.KICK, offset=0, duration=10))
        assert [e.offset for e in pattern.hits_for(C.KICK)] == [0]


class TestTrack:
    """Tests for Track constructors."""

    def test_drum_track(self):
        track = Track.drum("Drums", [Pattern(), Pattern(length_ticks=960)])
        assert track.is_drum
        assert track.instrument is None
        assert track.length_ticks == 2880

    def test_instrument_track_clamps(self):
        track = Track.instrument_track("Pad", channel=22, instrument=300, patterns=[])
        assert (track.channel, track.instrument) == (15, 127)
        assert track.note_count == 0
