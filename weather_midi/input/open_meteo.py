"""Open-Meteo hourly forecast client."""

from typing import List, Optional

import requests

from ..core.errors import SourceUnavailable
from .records import HOURLY_FIELDS, SignalRecord, records_from_hourly

BASE_URL = "https://api.open-meteo.com/v1/forecast"
MIN_HOURS = 1
MAX_HOURS = 168  # one week


class OpenMeteoClient:
    """Fetches hourly weather records from the Open-Meteo API."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        base_url: str = BASE_URL,
    ):
        """
        Initialize OpenMeteoClient.

        Args:
            session: HTTP session to reuse (a new one is created if None)
            timeout: Request timeout in seconds
            base_url: Forecast endpoint
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.base_url = base_url

    def build_params(self, latitude: float, longitude: float, hours: int) -> dict:
        """Query parameters for a forecast request."""
        return {
            "latitude": f"{latitude:.4f}",
            "longitude": f"{longitude:.4f}",
            "hourly": ",".join(HOURLY_FIELDS),
            "forecast_hours": str(hours),
        }

    def fetch_hourly(
        self, latitude: float, longitude: float, hours: int = 48
    ) -> List[SignalRecord]:
        """
        Fetch hourly weather for a location.

        Args:
            latitude: Latitude of the location
            longitude: Longitude of the location
            hours: Hours of forecast to retrieve (clamped to 1-168)

        Returns:
            At most ``hours`` records, in forecast order

        Raises:
            SourceUnavailable: On network errors, HTTP errors or a malformed payload
        """
        hours = max(MIN_HOURS, min(MAX_HOURS, int(hours)))
        params = self.build_params(latitude, longitude, hours)

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise SourceUnavailable(f"Failed to fetch weather data: {e}") from e
        except ValueError as e:
            raise SourceUnavailable(f"Weather API returned invalid JSON: {e}") from e

        hourly = payload.get("hourly") if isinstance(payload, dict) else None
        if not isinstance(hourly, dict):
            raise SourceUnavailable("Invalid response from weather API")

        return records_from_hourly(hourly, limit=hours)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "OpenMeteoClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
