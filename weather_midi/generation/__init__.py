"""Generation layer - Weather records to musical patterns.

- Rhythmic generator (drums)
- Melodic generator (ambient pads, arpeggios, falling notes)
- Mapping engine (series-wide normalization, record-then-bar fold)
"""

from .base import PatternGenerator
from .rhythm import RhythmicGenerator
from .melody import MelodicGenerator, octave_shift_for_hour
from .mapper import MappingEngine

__all__ = [
    "PatternGenerator",
    "RhythmicGenerator",
    "MelodicGenerator",
    "octave_shift_for_hour",
    "MappingEngine",
]
