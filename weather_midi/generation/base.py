"""Base classes for pattern generation."""

from abc import ABC, abstractmethod

from ..analysis.normalize import NormalizationBounds
from ..core.events import Pattern
from ..input.records import SignalRecord


class PatternGenerator(ABC):
    """Abstract base class for per-bar pattern generators."""

    #: Label used when reporting generated patterns
    role: str = "pattern"

    @abstractmethod
    def generate(
        self, record: SignalRecord, bounds: NormalizationBounds, bar_index: int
    ) -> Pattern:
        """
        Generate one bar for a weather record.

        Args:
            record: The hour of weather driving this bar
            bounds: Series-wide normalization bounds
            bar_index: Index of the bar within the record's allotted bars

        Returns:
            A pattern owning its events
        """
        pass
