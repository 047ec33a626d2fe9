"""Input layer - Weather data retrieval and record parsing."""

from .records import SignalRecord, records_from_hourly
from .open_meteo import OpenMeteoClient

__all__ = [
    "SignalRecord",
    "records_from_hourly",
    "OpenMeteoClient",
]
