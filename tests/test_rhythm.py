"""Tests for the rhythmic (drum) generator."""

import pytest

from conftest import make_record
from weather_midi.analysis import NormalizationBounds
from weather_midi.core import constants as C
from weather_midi.core.events import RhythmicPattern
from weather_midi.generation import MappingEngine, RhythmicGenerator


@pytest.fixture
def generator():
    return RhythmicGenerator()


def empty_bar():
    return RhythmicPattern(length_ticks=C.TICKS_PER_BAR)


class TestKick:
    """Tests for temperature-driven kick density."""

    def test_base_pulse_only_when_cool(self, generator):
        pattern = empty_bar()
        generator.add_kick(pattern, 0.0, bar_index=0)
        hits = pattern.hits_for(C.KICK)
        assert [h.offset for h in hits] == [0, 960]
        assert [h.velocity for h in hits] == [80, 70]

    @pytest.mark.parametrize(
        "temp_norm,bar_index,expected",
        [
            (0.55, 0, 3),
            (0.70, 0, 4),
            (0.85, 0, 4),
            (0.85, 1, 5),
            (0.5499, 1, 2),
        ],
    )
    def test_threshold_reaches_band(self, generator, temp_norm, bar_index, expected):
        """A value exactly on a threshold gets that band's extra hits."""
        pattern = empty_bar()
        generator.add_kick(pattern, temp_norm, bar_index)
        assert len(pattern.hits_for(C.KICK)) == expected

    def test_extra_hit_positions(self, generator):
        pattern = empty_bar()
        generator.add_kick(pattern, 1.0, bar_index=1)
        assert [h.offset for h in pattern.hits_for(C.KICK)] == [0, 720, 960, 1680, 1800]


class TestHihat:
    """Tests for wind-driven hi-hats."""

    def test_eighths_when_calm(self, generator):
        pattern = empty_bar()
        generator.add_hihat(pattern, 0.0)
        closed = pattern.hits_for(C.CLOSED_HIHAT)
        assert len(closed) == 8
        assert [h.offset for h in closed] == [i * 240 for i in range(8)]
        assert pattern.hits_for(C.OPEN_HIHAT) == []

    def test_beat_accents(self, generator):
        pattern = empty_bar()
        generator.add_hihat(pattern, 0.0)
        velocities = [h.velocity for h in pattern.hits_for(C.CLOSED_HIHAT)]
        assert velocities == [75, 60, 75, 60, 75, 60, 75, 60]

    def test_open_hats_from_threshold(self, generator):
        pattern = empty_bar()
        generator.add_hihat(pattern, 0.4)
        assert len(pattern) == 8
        assert [h.offset for h in pattern.hits_for(C.OPEN_HIHAT)] == [480, 1440]

    def test_sixteenths_from_threshold(self, generator):
        pattern = empty_bar()
        generator.add_hihat(pattern, 0.5)
        assert len(pattern) == 16
        assert len(pattern.hits_for(C.OPEN_HIHAT)) == 4

    def test_velocity_never_exceeds_midi_max(self, generator):
        pattern = empty_bar()
        generator.add_hihat(pattern, 1.0)
        assert max(e.velocity for e in pattern.events) <= 127


class TestSnare:
    """Tests for humidity-driven snare."""

    def test_backbeat(self, generator):
        pattern = empty_bar()
        generator.add_snare(pattern, 0.0, bar_index=0)
        assert [h.offset for h in pattern.hits_for(C.SNARE)] == [480, 1440]

    @pytest.mark.parametrize(
        "humidity_norm,expected_ghosts",
        [(0.54, []), (0.55, [360]), (0.70, [360, 1320])],
    )
    def test_ghost_notes(self, generator, humidity_norm, expected_ghosts):
        pattern = empty_bar()
        generator.add_snare(pattern, humidity_norm, bar_index=0)
        ghosts = [h.offset for h in pattern.hits_for(C.SNARE) if h.velocity == 40]
        assert ghosts == expected_ghosts

    def test_fill_on_fourth_bar_only(self, generator):
        for bar_index, expected in [(0, 4), (2, 4), (3, 6), (7, 6)]:
            pattern = empty_bar()
            generator.add_snare(pattern, 0.80, bar_index)
            assert len(pattern.hits_for(C.SNARE)) == expected

    def test_no_fill_below_threshold(self, generator):
        pattern = empty_bar()
        generator.add_snare(pattern, 0.79, bar_index=3)
        assert 1680 not in [h.offset for h in pattern.hits_for(C.SNARE)]


class TestCymbals:
    """Tests for precipitation-driven cymbals."""

    def test_dry_is_silent(self, generator):
        pattern = empty_bar()
        generator.add_cymbals(pattern, 0.0, bar_index=0)
        assert len(pattern) == 0

    def test_light_rain_crash_on_first_bar(self, generator):
        pattern = empty_bar()
        generator.add_cymbals(pattern, 0.01, bar_index=0)
        assert len(pattern.hits_for(C.CRASH_CYMBAL)) == 1
        assert pattern.hits_for(C.RIDE_CYMBAL) == []

    def test_second_crash(self, generator):
        for precip, expected in [(0.29, 0), (0.3, 1)]:
            pattern = empty_bar()
            generator.add_cymbals(pattern, precip, bar_index=2)
            assert len(pattern.hits_for(C.CRASH_CYMBAL)) == expected

    def test_ride_from_threshold(self, generator):
        pattern = empty_bar()
        generator.add_cymbals(pattern, 0.5, bar_index=1)
        assert [h.offset for h in pattern.hits_for(C.RIDE_CYMBAL)] == [0, 480, 960, 1440]


class TestGenerate:
    """Tests for whole-bar generation."""

    def test_every_hit_on_drum_channel(self, generator, varied_records):
        bounds = NormalizationBounds.from_records(varied_records)
        for record in varied_records:
            pattern = generator.generate(record, bounds, 0)
            assert pattern.length_ticks == C.TICKS_PER_BAR
            assert all(e.channel == C.DRUM_CHANNEL for e in pattern.events)
            assert all(e.offset < C.TICKS_PER_BAR for e in pattern.events)

    def test_identical_records_produce_base_groove(self, generator, calm_records):
        """Two identical mild, still, dry hours give only the base groove."""
        engine = MappingEngine(bars_per_record=1)
        patterns = engine.map(calm_records, generator)

        assert len(patterns) == 2
        for pattern in patterns:
            assert [h.offset for h in pattern.hits_for(C.KICK)] == [0, 960]
            assert [h.offset for h in pattern.hits_for(C.SNARE)] == [480, 1440]
            assert pattern.hits_for(C.OPEN_HIHAT) == []
            assert pattern.hits_for(C.CRASH_CYMBAL) == []
            assert pattern.hits_for(C.RIDE_CYMBAL) == []

        first, second = (
            [(e.pitch, e.offset, e.velocity) for e in p.ordered_events()] for p in patterns
        )
        assert first == second

    def test_heavy_rain_brings_crashes_and_ride(self, generator):
        record = make_record(precipitation=6.0)
        engine = MappingEngine(bars_per_record=3)
        patterns = engine.map([record], generator)

        bar0, bar1, bar2 = patterns
        assert len(bar0.hits_for(C.CRASH_CYMBAL)) >= 1
        assert len(bar0.hits_for(C.RIDE_CYMBAL)) == 4
        assert bar1.hits_for(C.CRASH_CYMBAL) == []
        assert len(bar2.hits_for(C.CRASH_CYMBAL)) == 1
