"""Exception types raised by the Weather MIDI pipeline."""


class WeatherMidiError(Exception):
    """Base class for pipeline errors."""


class SourceUnavailable(WeatherMidiError):
    """The weather data source failed or returned a malformed payload."""


class InvalidInput(WeatherMidiError):
    """A pipeline stage received input it cannot work with (e.g. no tracks)."""
