"""Mapping engine - Fold a weather series into per-bar patterns."""

from typing import List, Optional, Sequence

from ..analysis.normalize import NormalizationBounds
from ..core.errors import InvalidInput
from ..core.events import Pattern
from ..input.records import SignalRecord
from .base import PatternGenerator

MIN_BARS = 1
MAX_BARS = 16


class MappingEngine:
    """Drive a generator over a whole series, ``bars_per_record`` bars per hour.

    Output order is record-then-bar: every bar of hour 0, then every bar of
    hour 1, and so on.
    """

    def __init__(self, bars_per_record: int = 4):
        """
        Initialize MappingEngine.

        Args:
            bars_per_record: Bars generated for each record (clamped to 1-16)
        """
        self.bars_per_record = max(MIN_BARS, min(MAX_BARS, int(bars_per_record)))

    @staticmethod
    def compute_bounds(records: Sequence[SignalRecord]) -> NormalizationBounds:
        """Series-wide normalization bounds (raises InvalidInput when empty)."""
        return NormalizationBounds.from_records(records)

    def map(
        self,
        records: Sequence[SignalRecord],
        generator: PatternGenerator,
        bounds: Optional[NormalizationBounds] = None,
    ) -> List[Pattern]:
        """
        Generate patterns for every bar of every record.

        Args:
            records: Ordered weather series
            generator: Pattern generator invoked once per bar
            bounds: Precomputed bounds (computed from ``records`` if None)

        Returns:
            ``len(records) * bars_per_record`` patterns in record-then-bar order

        Raises:
            InvalidInput: If the series is empty
        """
        if len(records) == 0:
            raise InvalidInput("Cannot map an empty weather series")

        if bounds is None:
            bounds = self.compute_bounds(records)

        patterns = []
        for record in records:
            for bar in range(self.bars_per_record):
                pattern = generator.generate(record, bounds, bar)
                pattern.source = record
                pattern.bar_index = bar
                patterns.append(pattern)

        return patterns
