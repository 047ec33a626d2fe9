"""Weather MIDI - Hourly forecasts turned into drum and melody MIDI files.

Architecture Layers:
    1. input/       - Weather retrieval (Open-Meteo) and record parsing
    2. analysis/    - Series-wide normalization and summaries
    3. theory/      - Scales and pitch arithmetic
    4. generation/  - Weather to patterns (drums, melody, mapping engine)
    5. output/      - Track assembly and Standard MIDI File export
"""

__version__ = "0.1.0"

# Core types
from .core import (
    NoteEvent,
    Pattern,
    RhythmicPattern,
    MelodicPattern,
    Track,
    WeatherMidiError,
    SourceUnavailable,
    InvalidInput,
)

# Input layer
from .input import SignalRecord, OpenMeteoClient

# Analysis layer
from .analysis import NormalizationBounds, WeatherSummary

# Theory layer
from .theory import ScaleType, get_note, select_scale_by_temperature

# Generation layer
from .generation import RhythmicGenerator, MelodicGenerator, MappingEngine

# Output layer
from .output import TrackAssembler, MIDIFileWriter, summarize_midi

# Pipeline
from .config import RunConfig
from .pipeline import WeatherMidiPipeline, build_tracks

__all__ = [
    # Core
    "NoteEvent",
    "Pattern",
    "RhythmicPattern",
    "MelodicPattern",
    "Track",
    "WeatherMidiError",
    "SourceUnavailable",
    "InvalidInput",
    # Input
    "SignalRecord",
    "OpenMeteoClient",
    # Analysis
    "NormalizationBounds",
    "WeatherSummary",
    # Theory
    "ScaleType",
    "get_note",
    "select_scale_by_temperature",
    # Generation
    "RhythmicGenerator",
    "MelodicGenerator",
    "MappingEngine",
    # Output
    "TrackAssembler",
    "MIDIFileWriter",
    "summarize_midi",
    # Pipeline
    "RunConfig",
    "WeatherMidiPipeline",
    "build_tracks",
]
