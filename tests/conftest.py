"""Shared fixtures for Weather MIDI tests."""

from datetime import datetime, timedelta

import numpy as np
import pytest

from weather_midi.input.records import SignalRecord


def make_record(hour=12, temperature=20.0, humidity=50.0, precipitation=0.0, wind_speed=0.0):
    """Build a record on a fixed day at ``hour``."""
    return SignalRecord(
        time=datetime(2024, 6, 1) + timedelta(hours=hour),
        temperature=temperature,
        humidity=humidity,
        precipitation=precipitation,
        wind_speed=wind_speed,
    )


@pytest.fixture
def calm_records():
    """Two identical mild, still, dry hours."""
    return [make_record(hour=12), make_record(hour=13)]


@pytest.fixture
def varied_records():
    """A day of changing weather."""
    return [
        make_record(hour=h, temperature=5 + h, humidity=40 + 2 * h,
                    precipitation=0.2 * (h % 5), wind_speed=1.5 * h)
        for h in range(24)
    ]


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def hourly_payload():
    """Open-Meteo style ``hourly`` block for three hours."""
    return {
        "time": ["2024-06-01T00:00", "2024-06-01T01:00", "2024-06-01T02:00"],
        "temperature_2m": [12.5, 11.9, 11.2],
        "relative_humidity_2m": [80, 82, 85],
        "precipitation": [0.0, 0.4, 1.2],
        "wind_speed_10m": [5.1, 7.8, 12.0],
    }
