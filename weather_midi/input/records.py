"""Signal records - one sampled hour of weather."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..core.errors import SourceUnavailable

# Defaults used when the source has fewer samples than timestamps
DEFAULT_TEMPERATURE = 0.0
DEFAULT_HUMIDITY = 50.0
DEFAULT_PRECIPITATION = 0.0
DEFAULT_WIND_SPEED = 0.0

# Open-Meteo hourly variable names
HOURLY_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "precipitation",
    "wind_speed_10m",
)


@dataclass(frozen=True)
class SignalRecord:
    """Represents a single hour of weather data."""

    time: datetime
    temperature: float = DEFAULT_TEMPERATURE  # Celsius
    humidity: float = DEFAULT_HUMIDITY  # Percentage (0-100)
    precipitation: float = DEFAULT_PRECIPITATION  # mm
    wind_speed: float = DEFAULT_WIND_SPEED  # km/h

    @property
    def hour(self) -> int:
        """Hour of day (0-23)."""
        return self.time.hour


def _sample(values: Sequence[Any], index: int, default: float) -> float:
    """Value at ``index``, or ``default`` when missing or null."""
    if index >= len(values) or values[index] is None:
        return default
    return float(values[index])


def records_from_hourly(
    hourly: Dict[str, Any], limit: Optional[int] = None
) -> List[SignalRecord]:
    """
    Flatten Open-Meteo ``hourly`` arrays into records.

    Args:
        hourly: The ``hourly`` block of an Open-Meteo forecast response
        limit: Keep at most this many records

    Returns:
        Records in timestamp order of the payload

    Raises:
        SourceUnavailable: If timestamps are missing or cannot be parsed
    """
    times = hourly.get("time")
    if not isinstance(times, list):
        raise SourceUnavailable("Invalid response from weather API: no hourly timestamps")

    temperature = hourly.get("temperature_2m") or []
    humidity = hourly.get("relative_humidity_2m") or []
    precipitation = hourly.get("precipitation") or []
    wind_speed = hourly.get("wind_speed_10m") or []

    records = []
    for i, stamp in enumerate(times):
        try:
            time = datetime.fromisoformat(str(stamp))
            record = SignalRecord(
                time=time,
                temperature=_sample(temperature, i, DEFAULT_TEMPERATURE),
                humidity=_sample(humidity, i, DEFAULT_HUMIDITY),
                precipitation=_sample(precipitation, i, DEFAULT_PRECIPITATION),
                wind_speed=_sample(wind_speed, i, DEFAULT_WIND_SPEED),
            )
        except (TypeError, ValueError) as e:
            raise SourceUnavailable(f"Malformed hourly sample {i}: {e}") from e
        records.append(record)

    if limit is not None:
        records = records[:limit]
    return records
