"""Tests for scales and scale-degree arithmetic."""

import math

import pytest

from weather_midi.theory import (
    ScaleType,
    SCALE_INTERVALS,
    get_note,
    get_scale_notes,
    scale_length,
    select_scale_by_temperature,
)


class TestGetNote:
    """Tests for degree-to-pitch conversion."""

    def test_root_is_degree_zero(self):
        for scale in ScaleType:
            assert get_note(scale, 0, 60) == 60

    def test_major_scale_degrees(self):
        pitches = [get_note(ScaleType.MAJOR, d, 60) for d in range(8)]
        assert pitches == [60, 62, 64, 65, 67, 69, 71, 72]

    @pytest.mark.parametrize("scale", list(ScaleType))
    @pytest.mark.parametrize("k", [-2, -1, 1, 3])
    def test_pitch_is_periodic_in_scale_length(self, scale, k):
        """Shifting by k scale lengths moves exactly k octaves."""
        n = scale_length(scale)
        for degree in range(-n, 2 * n):
            assert get_note(scale, degree + k * n, 48) == get_note(scale, degree, 48) + 12 * k

    def test_negative_degree_walks_below_root(self):
        # One step below C in minor is B-flat
        assert get_note(ScaleType.MINOR, -1, 60) == 58
        assert get_note(ScaleType.PENTATONIC, -5, 60) == 48

    def test_result_is_not_clamped(self):
        assert get_note(ScaleType.MAJOR, 14, 120) == 144


class TestScaleNotes:
    """Tests for scale note listing."""

    def test_two_octaves_of_pentatonic(self):
        notes = get_scale_notes(ScaleType.PENTATONIC, 60, octaves=2)
        assert len(notes) == 10
        assert notes[0] == 60
        assert notes[5] == 72

    def test_notes_capped_at_midi_max(self):
        notes = get_scale_notes(ScaleType.MAJOR, 120, octaves=2)
        assert max(notes) <= 127

    def test_every_scale_starts_on_root(self):
        for scale, intervals in SCALE_INTERVALS.items():
            assert intervals[0] == 0
            assert list(intervals) == sorted(intervals)


class TestScaleSelection:
    """Tests for temperature to scale mapping."""

    @pytest.mark.parametrize(
        "temperature,expected",
        [
            (-15.0, ScaleType.MINOR),
            (-0.1, ScaleType.MINOR),
            (0.0, ScaleType.DORIAN),
            (9.9, ScaleType.DORIAN),
            (10.0, ScaleType.PENTATONIC),
            (20.0, ScaleType.LYDIAN),
            (29.9, ScaleType.LYDIAN),
            (30.0, ScaleType.MAJOR),
            (42.0, ScaleType.MAJOR),
        ],
    )
    def test_bands(self, temperature, expected):
        assert select_scale_by_temperature(temperature) == expected

    def test_nan_temperature_is_neutral(self):
        assert select_scale_by_temperature(math.nan) == ScaleType.PENTATONIC
