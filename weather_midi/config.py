"""Run configuration."""

from dataclasses import dataclass
from typing import Optional

from .core.events import clamp as _clamp


@dataclass
class RunConfig:
    """Configuration for one weather-to-MIDI run.

    Out-of-range values are clamped, never rejected.

    Attributes:
        latitude: Latitude of the location (default: New York)
        longitude: Longitude of the location (default: New York)
        output_file: Output MIDI file path
        tempo: Tempo in BPM (40-300)
        hours: Hours of forecast to use (1-168)
        bars_per_hour: Bars generated per hour of weather (1-16)
        enable_melody: Add an ambient melody track
        melody_channel: MIDI channel for the melody (0-15)
        melody_instrument: GM program for the melody (0-127, default: 89 = Pad 2 warm)
        seed: Random seed for melody jitter (None = different every run)
    """

    latitude: float = 40.7128
    longitude: float = -74.0060
    output_file: str = "weather_drums.mid"
    tempo: int = 120
    hours: int = 24
    bars_per_hour: int = 4
    enable_melody: bool = False
    melody_channel: int = 0
    melody_instrument: int = 89
    seed: Optional[int] = None

    def __post_init__(self):
        self.latitude = float(self.latitude)
        self.longitude = float(self.longitude)
        self.tempo = _clamp(self.tempo, 40, 300)
        self.hours = _clamp(self.hours, 1, 168)
        self.bars_per_hour = _clamp(self.bars_per_hour, 1, 16)
        self.melody_channel = _clamp(self.melody_channel, 0, 15)
        self.melody_instrument = _clamp(self.melody_instrument, 0, 127)
