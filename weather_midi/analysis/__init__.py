"""Analysis layer - Normalization and summaries of weather series."""

from .normalize import MeasurementRange, NormalizationBounds, WeatherSummary

__all__ = [
    "MeasurementRange",
    "NormalizationBounds",
    "WeatherSummary",
]
