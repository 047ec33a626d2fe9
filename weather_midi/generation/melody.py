"""Melodic generator - Weather to ambient melody.

Mapping:
- Temperature   -> scale (cold = minor, warm = major/lydian)
- Time of day   -> octave register (night = lower, midday = higher)
- Humidity      -> pad sustain and chord fullness
- Wind speed    -> arpeggio density
- Precipitation -> falling "raindrop" notes
"""

from typing import Optional, Tuple

import numpy as np

from ..analysis.normalize import NormalizationBounds
from ..core import constants as C
from ..core.events import MelodicPattern, NoteEvent
from ..input.records import SignalRecord
from ..theory.scales import get_note, scale_length, select_scale_by_temperature
from .base import PatternGenerator

# (start hour inclusive, end hour exclusive, octave shift)
OCTAVE_SCHEDULE: Tuple[Tuple[int, int, int], ...] = (
    (0, 6, -1),  # late night
    (6, 10, 0),  # morning
    (10, 16, 1),  # midday
    (16, 20, 0),  # evening
    (20, 24, -1),  # night
)

# (lower bound, notes per bar, note duration in ticks)
ARPEGGIO_TIERS: Tuple[Tuple[float, int, int], ...] = (
    (0.75, 8, C.TICKS_PER_8TH - C.TICKS_PER_16TH),
    (0.5, 4, C.TICKS_PER_QUARTER - C.TICKS_PER_16TH),
    (0.3, 2, C.TICKS_PER_HALF - C.TICKS_PER_8TH),
    (0.15, 1, C.TICKS_PER_BAR - C.TICKS_PER_QUARTER),
)


def octave_shift_for_hour(hour: int) -> int:
    """Octave shift for an hour of the day (night = lower, day = higher)."""
    hour = hour % 24
    for start, end, shift in OCTAVE_SCHEDULE:
        if start <= hour < end:
            return shift
    return 0


class MelodicGenerator(PatternGenerator):
    """Generate one bar of ambient melody per call.

    Velocity jitter and raindrop timing draw from a single
    ``numpy.random.Generator``; pass a seeded one for reproducible output.
    """

    role = "melody"

    # Pads
    PAD_THIRD_THRESHOLD = 0.6
    PAD_OCTAVE_THRESHOLD = 0.85

    # Arpeggio
    ARPEGGIO_MIN = 0.15
    ARPEGGIO_DEGREES = 5
    ARPEGGIO_JITTER = (-5, 5)
    ARPEGGIO_VELOCITY_RANGE = (30, 100)

    # Falling notes
    RAIN_MIN = 0.1
    RAIN_RUMBLE_THRESHOLD = 0.5
    RAIN_TOP_DEGREE = 10
    RAIN_JITTER = (-10, 4)
    RUMBLE_FLOOR = 24

    def __init__(
        self,
        channel: int = 0,
        base_root: int = C.DEFAULT_MELODY_ROOT,
        rng: Optional[np.random.Generator] = None,
        bar_ticks: int = C.TICKS_PER_BAR,
    ):
        """
        Initialize MelodicGenerator.

        Args:
            channel: MIDI channel for every note (0-15)
            base_root: Root note before the time-of-day octave shift
            rng: Random generator for jitter (unseeded if None)
            bar_ticks: Pattern length in ticks
        """
        self.channel = channel
        self.base_root = base_root
        self.rng = rng if rng is not None else np.random.default_rng()
        self.bar_ticks = bar_ticks

    def generate(
        self, record: SignalRecord, bounds: NormalizationBounds, bar_index: int
    ) -> MelodicPattern:
        scale = select_scale_by_temperature(record.temperature)
        root = self.base_root + octave_shift_for_hour(record.hour) * 12

        pattern = MelodicPattern(
            length_ticks=self.bar_ticks,
            source=record,
            bar_index=bar_index,
            scale=scale,
            root_note=root,
        )

        self.add_pads(pattern, bounds.humidity_norm(record), bounds.temperature_norm(record))
        self.add_arpeggio(pattern, bounds.wind_norm(record), bar_index)
        self.add_falling_notes(pattern, bounds.precipitation_norm(record))

        return pattern

    def _note(
        self, pattern: MelodicPattern, pitch: int, position: int, duration: int, velocity: int
    ) -> None:
        pattern.add(
            NoteEvent(
                pitch=pitch,
                offset=position,
                duration=duration,
                velocity=velocity,
                channel=self.channel,
            )
        )

    def _jitter(self, bounds: Tuple[int, int]) -> int:
        low, high = bounds
        return int(self.rng.integers(low, high + 1))

    def add_pads(self, pattern: MelodicPattern, humidity_norm: float, temp_norm: float) -> None:
        """Sustained root-and-fifth chord; humid hours sustain longer and fill out."""
        scale, root = pattern.scale, pattern.root_note
        base_velocity = 50 + int(temp_norm * 20)
        sustain = C.TICKS_PER_HALF + int(humidity_norm * C.TICKS_PER_HALF)

        self._note(pattern, root, 0, sustain, base_velocity)

        # Degree 4 is a fifth (or close to it) in every scale
        offset = C.TICKS_PER_8TH
        self._note(pattern, get_note(scale, 4, root), offset, sustain - offset, base_velocity - 10)

        if humidity_norm >= self.PAD_THIRD_THRESHOLD:
            offset = C.TICKS_PER_QUARTER
            self._note(pattern, get_note(scale, 2, root), offset, sustain - offset, base_velocity - 15)

        if humidity_norm >= self.PAD_OCTAVE_THRESHOLD:
            offset = C.TICKS_PER_QUARTER + C.TICKS_PER_8TH
            self._note(pattern, root + 12, offset, sustain - offset, base_velocity - 20)

    def arpeggio_tier(self, wind_norm: float) -> Optional[Tuple[int, int]]:
        """(notes per bar, note duration) for a wind value, None when calm."""
        if wind_norm < self.ARPEGGIO_MIN:
            return None
        for lower, notes, duration in ARPEGGIO_TIERS:
            if wind_norm >= lower:
                return notes, duration
        return None

    def add_arpeggio(self, pattern: MelodicPattern, wind_norm: float, bar_index: int) -> None:
        """Wind sets arpeggio density; direction alternates bar to bar."""
        tier = self.arpeggio_tier(wind_norm)
        if tier is None:
            return

        notes_per_bar, duration = tier
        scale, root = pattern.scale, pattern.root_note
        velocity = 45 + int(wind_norm * 30)
        step = self.bar_ticks // notes_per_bar
        ascending = bar_index % 2 == 0
        low, high = self.ARPEGGIO_VELOCITY_RANGE

        for i in range(notes_per_bar):
            cycle = i % self.ARPEGGIO_DEGREES
            degree = cycle + 1 if ascending else self.ARPEGGIO_DEGREES - cycle

            # Second half an octave up
            if i >= notes_per_bar // 2:
                degree += scale_length(scale)

            note_velocity = max(low, min(high, velocity + self._jitter(self.ARPEGGIO_JITTER)))
            self._note(pattern, get_note(scale, degree, root), i * step, duration, note_velocity)

    def add_falling_notes(self, pattern: MelodicPattern, precip_norm: float) -> None:
        """Rain scatters descending notes across the bar; heavy rain adds a low rumble."""
        if precip_norm < self.RAIN_MIN:
            return

        scale, root = pattern.scale, pattern.root_note
        velocity = 40 + int(precip_norm * 35)
        count = 1 + int(precip_norm * 3)

        for i in range(count):
            degree = self.RAIN_TOP_DEGREE - i * 2
            position = int(self.bar_ticks * (0.1 + self.rng.random() * 0.8))
            duration = C.TICKS_PER_QUARTER + int(self.rng.integers(0, C.TICKS_PER_QUARTER))
            self._note(
                pattern,
                get_note(scale, degree, root),
                position,
                duration,
                velocity + self._jitter(self.RAIN_JITTER),
            )

        if precip_norm >= self.RAIN_RUMBLE_THRESHOLD:
            self._note(
                pattern,
                max(self.RUMBLE_FLOOR, root - 12),
                C.TICKS_PER_HALF,
                C.TICKS_PER_HALF,
                velocity - 15,
            )
