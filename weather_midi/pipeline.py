"""End-to-end pipeline: fetch, normalize, generate, assemble, write.

Each stage completes before the next starts, and the first error aborts the
run unchanged. No file is written unless every stage succeeds.
"""

import warnings
from typing import List, Optional, Sequence

import numpy as np

from .analysis.normalize import WeatherSummary
from .config import RunConfig
from .core.errors import InvalidInput
from .core.events import Track
from .generation import MappingEngine, MelodicGenerator, RhythmicGenerator
from .input.open_meteo import OpenMeteoClient
from .input.records import SignalRecord
from .output.midi import MIDIFileWriter, WriteResult
from .reporting import PipelineReporter

DRUM_TRACK_NAME = "Weather Drums"
MELODY_TRACK_NAME = "Weather Melody"


def build_tracks(
    records: Sequence[SignalRecord],
    config: RunConfig,
    rng: Optional[np.random.Generator] = None,
    reporter: Optional[PipelineReporter] = None,
) -> List[Track]:
    """
    Generate the drum track and, if enabled, the melody track.

    Args:
        records: Ordered weather series (must not be empty)
        config: Run configuration
        rng: Random generator shared by every melody bar
        reporter: Optional observer

    Returns:
        Drum track first, then the melody track when enabled

    Raises:
        InvalidInput: If ``records`` is empty
    """
    reporter = reporter or PipelineReporter()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    engine = MappingEngine(bars_per_record=config.bars_per_hour)
    bounds = engine.compute_bounds(records)

    drums = RhythmicGenerator()
    drum_patterns = engine.map(records, drums, bounds)
    reporter.patterns_generated(drums.role, len(drum_patterns))
    tracks = [Track.drum(DRUM_TRACK_NAME, drum_patterns)]

    if config.enable_melody:
        melody = MelodicGenerator(channel=config.melody_channel, rng=rng)
        melody_patterns = engine.map(records, melody, bounds)
        reporter.patterns_generated(melody.role, len(melody_patterns))
        tracks.append(
            Track.instrument_track(
                MELODY_TRACK_NAME,
                config.melody_channel,
                config.melody_instrument,
                melody_patterns,
            )
        )

    return tracks


class WeatherMidiPipeline:
    """Turn a location's hourly forecast into a MIDI file."""

    def __init__(
        self,
        config: RunConfig,
        source: Optional[OpenMeteoClient] = None,
        reporter: Optional[PipelineReporter] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize WeatherMidiPipeline.

        Args:
            config: Run configuration
            source: Weather data source (anything with ``fetch_hourly``)
            reporter: Optional observer for progress output
            rng: Random generator (seeded from ``config.seed`` if None)
        """
        self.config = config
        self.source = source
        self.reporter = reporter or PipelineReporter()
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

    def fetch(self) -> List[SignalRecord]:
        """Retrieve the weather series (raises SourceUnavailable on failure).

        A client created here is closed afterwards; an injected source stays
        open for its owner.
        """
        if self.source is not None:
            records = self._fetch_from(self.source)
        else:
            with OpenMeteoClient() as client:
                records = self._fetch_from(client)

        if not records:
            raise InvalidInput("Weather source returned no records")
        if len(records) < self.config.hours:
            warnings.warn(
                f"Requested {self.config.hours} hours, source returned {len(records)}"
            )
        return records

    def _fetch_from(self, source) -> List[SignalRecord]:
        return source.fetch_hourly(
            self.config.latitude, self.config.longitude, self.config.hours
        )

    def run(self) -> WriteResult:
        """Run every stage and write the output file."""
        self.reporter.stage_started("Fetching weather data")
        records = self.fetch()
        self.reporter.stage_finished("Fetching weather data")
        self.reporter.source_loaded(records, WeatherSummary.from_records(records))

        self.reporter.stage_started("Generating patterns")
        tracks = build_tracks(records, self.config, rng=self.rng, reporter=self.reporter)
        self.reporter.stage_finished("Generating patterns")

        self.reporter.stage_started("Writing MIDI file")
        writer = MIDIFileWriter(tempo=self.config.tempo, reporter=self.reporter)
        result = writer.write(self.config.output_file, tracks)
        self.reporter.stage_finished("Writing MIDI file")

        return result
