"""Series-wide normalization of weather measurements.

Bounds are computed once over the whole forecast and shared read-only by
every generator call, so a given reading maps to the same 0-1 value no
matter which bar asks for it.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..core.errors import InvalidInput
from ..input.records import SignalRecord

TEMPERATURE_FALLBACK = 0.5  # midpoint when every hour has the same temperature
MIN_WIND_SPAN = 1.0  # km/h
MIN_PRECIPITATION_SPAN = 0.1  # mm
HUMIDITY_RANGE = (0.0, 100.0)


@dataclass(frozen=True)
class MeasurementRange:
    """Linear map from a raw measurement to [0, 1].

    A zero-width (or inverted) range returns ``fallback`` instead of dividing.
    """

    lower: float
    upper: float
    fallback: float = 0.5

    @property
    def is_degenerate(self) -> bool:
        return not self.upper > self.lower

    def normalize(self, value: float) -> float:
        if self.is_degenerate:
            return self.fallback
        scaled = (value - self.lower) / (self.upper - self.lower)
        if np.isnan(scaled):
            return self.fallback
        return float(np.clip(scaled, 0.0, 1.0))


@dataclass(frozen=True)
class NormalizationBounds:
    """Per-measurement ranges for one forecast series."""

    temperature: MeasurementRange
    humidity: MeasurementRange
    wind_speed: MeasurementRange
    precipitation: MeasurementRange

    @classmethod
    def from_records(cls, records: Sequence[SignalRecord]) -> "NormalizationBounds":
        """
        Compute bounds over a whole series.

        Raises:
            InvalidInput: If the series is empty
        """
        if len(records) == 0:
            raise InvalidInput("Cannot normalize an empty weather series")

        temperature = np.array([r.temperature for r in records], dtype=float)
        wind = np.array([r.wind_speed for r in records], dtype=float)
        precipitation = np.array([r.precipitation for r in records], dtype=float)

        return cls(
            temperature=MeasurementRange(
                float(temperature.min()), float(temperature.max()), TEMPERATURE_FALLBACK
            ),
            humidity=MeasurementRange(*HUMIDITY_RANGE, fallback=0.5),
            wind_speed=MeasurementRange(
                0.0, max(float(wind.max()), MIN_WIND_SPAN), fallback=0.0
            ),
            precipitation=MeasurementRange(
                0.0, max(float(precipitation.max()), MIN_PRECIPITATION_SPAN), fallback=0.0
            ),
        )

    def temperature_norm(self, record: SignalRecord) -> float:
        return self.temperature.normalize(record.temperature)

    def humidity_norm(self, record: SignalRecord) -> float:
        return self.humidity.normalize(record.humidity)

    def wind_norm(self, record: SignalRecord) -> float:
        return self.wind_speed.normalize(record.wind_speed)

    def precipitation_norm(self, record: SignalRecord) -> float:
        return self.precipitation.normalize(record.precipitation)


@dataclass
class WeatherSummary:
    """Aggregate view of a series, for reporting."""

    hours: int
    average_temperature: float
    max_wind_speed: float
    total_precipitation: float
    average_humidity: float

    @classmethod
    def from_records(cls, records: Sequence[SignalRecord]) -> "WeatherSummary":
        if len(records) == 0:
            return cls(0, 0.0, 0.0, 0.0, 0.0)
        return cls(
            hours=len(records),
            average_temperature=float(np.mean([r.temperature for r in records])),
            max_wind_speed=float(np.max([r.wind_speed for r in records])),
            total_precipitation=float(np.sum([r.precipitation for r in records])),
            average_humidity=float(np.mean([r.humidity for r in records])),
        )
