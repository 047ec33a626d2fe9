"""Rhythmic generator - Weather to drum patterns.

Each weather measurement drives one drum voice:
- Temperature   -> kick density (warmer = busier)
- Wind speed    -> hi-hat subdivision (windy = 16th notes, open hats)
- Humidity      -> snare ghost notes and fills
- Precipitation -> crash and ride cymbals

Thresholds are closed lower bounds: a value exactly on a threshold reaches
that band.
"""

from ..analysis.normalize import NormalizationBounds
from ..core import constants as C
from ..core.events import NoteEvent, RhythmicPattern
from ..input.records import SignalRecord
from .base import PatternGenerator


class RhythmicGenerator(PatternGenerator):
    """Generate one bar of drums per call."""

    role = "drums"

    # Kick: extra hits on the "and" of 2, the "and" of 4, then a double on odd bars
    KICK_BANDS = (0.55, 0.70, 0.85)

    # Hi-hat: open hats from the first threshold, 16ths from the second
    HIHAT_OPEN_THRESHOLD = 0.4
    HIHAT_16TH_THRESHOLD = 0.5

    # Snare: ghost before beat 2, ghost before beat 4, fill every 4th bar
    SNARE_GHOST_BANDS = (0.55, 0.70)
    SNARE_FILL_THRESHOLD = 0.80
    SNARE_FILL_PERIOD = 4
    GHOST_VELOCITY = 40

    # Cymbals: silent below the first value
    CYMBAL_MIN = 0.01
    SECOND_CRASH_THRESHOLD = 0.3
    SECOND_CRASH_BAR = 2
    RIDE_THRESHOLD = 0.5

    def __init__(
        self,
        bar_ticks: int = C.TICKS_PER_BAR,
        hit_duration: int = C.DEFAULT_DRUM_DURATION,
    ):
        """
        Initialize RhythmicGenerator.

        Args:
            bar_ticks: Pattern length in ticks (one 4/4 bar)
            hit_duration: Duration of every drum hit in ticks
        """
        self.bar_ticks = bar_ticks
        self.hit_duration = hit_duration

    def generate(
        self, record: SignalRecord, bounds: NormalizationBounds, bar_index: int
    ) -> RhythmicPattern:
        pattern = RhythmicPattern(length_ticks=self.bar_ticks, source=record, bar_index=bar_index)

        self.add_kick(pattern, bounds.temperature_norm(record), bar_index)
        self.add_hihat(pattern, bounds.wind_norm(record))
        self.add_snare(pattern, bounds.humidity_norm(record), bar_index)
        self.add_cymbals(pattern, bounds.precipitation_norm(record), bar_index)

        return pattern

    def _hit(self, pattern: RhythmicPattern, note: int, position: int, velocity: int) -> None:
        pattern.add(
            NoteEvent(
                pitch=note,
                offset=position,
                duration=self.hit_duration,
                velocity=velocity,
                channel=C.DRUM_CHANNEL,
            )
        )

    def add_kick(self, pattern: RhythmicPattern, temp_norm: float, bar_index: int) -> None:
        """Higher temperature = more kick hits."""
        base_velocity = 80 + int(temp_norm * 40)  # 80-120
        and_of_2, and_of_4, double = self.KICK_BANDS

        self._hit(pattern, C.KICK, 0, base_velocity)
        self._hit(pattern, C.KICK, C.TICKS_PER_QUARTER * 2, base_velocity - 10)

        if temp_norm >= and_of_2:
            self._hit(pattern, C.KICK, C.TICKS_PER_QUARTER + C.TICKS_PER_8TH, base_velocity - 20)

        if temp_norm >= and_of_4:
            self._hit(pattern, C.KICK, C.TICKS_PER_QUARTER * 3 + C.TICKS_PER_8TH, base_velocity - 20)

        if temp_norm >= double and bar_index % 2 == 1:
            self._hit(
                pattern,
                C.KICK,
                C.TICKS_PER_QUARTER * 3 + C.TICKS_PER_16TH * 3,
                base_velocity - 15,
            )

    def add_hihat(self, pattern: RhythmicPattern, wind_norm: float) -> None:
        """Higher wind = busier hi-hats (8ths to 16ths)."""
        velocity = 60 + int(wind_norm * 40)  # 60-100
        divisions = 16 if wind_norm >= self.HIHAT_16TH_THRESHOLD else 8
        step = self.bar_ticks // divisions
        beat_every = divisions // 4

        for i in range(divisions):
            note = C.CLOSED_HIHAT
            hit_velocity = velocity

            if wind_norm >= self.HIHAT_OPEN_THRESHOLD and i % 4 == 2:
                note = C.OPEN_HIHAT
                hit_velocity = velocity + 10

            # Accent on the beat
            if i % beat_every == 0:
                hit_velocity = min(C.MIDI_MAX, hit_velocity + 15)

            self._hit(pattern, note, i * step, hit_velocity)

    def add_snare(self, pattern: RhythmicPattern, humidity_norm: float, bar_index: int) -> None:
        """Higher humidity = more ghost notes and fills."""
        base_velocity = 90 + int(humidity_norm * 30)  # 90-120
        beat_2 = C.TICKS_PER_QUARTER
        beat_4 = C.TICKS_PER_QUARTER * 3
        ghost_2, ghost_4 = self.SNARE_GHOST_BANDS

        self._hit(pattern, C.SNARE, beat_2, base_velocity)
        self._hit(pattern, C.SNARE, beat_4, base_velocity)

        if humidity_norm >= ghost_2:
            self._hit(pattern, C.SNARE, beat_2 - C.TICKS_PER_16TH, self.GHOST_VELOCITY)

        if humidity_norm >= ghost_4:
            self._hit(pattern, C.SNARE, beat_4 - C.TICKS_PER_16TH, self.GHOST_VELOCITY)

        if (
            humidity_norm >= self.SNARE_FILL_THRESHOLD
            and bar_index % self.SNARE_FILL_PERIOD == self.SNARE_FILL_PERIOD - 1
        ):
            self._hit(pattern, C.SNARE, beat_4 + C.TICKS_PER_8TH, 70)
            self._hit(pattern, C.SNARE, beat_4 + C.TICKS_PER_8TH + C.TICKS_PER_16TH, 65)

    def add_cymbals(self, pattern: RhythmicPattern, precip_norm: float, bar_index: int) -> None:
        """Precipitation brings in crashes and a ride figure."""
        if precip_norm < self.CYMBAL_MIN:
            return

        velocity = 70 + int(precip_norm * 50)  # 70-120

        if bar_index == 0:
            self._hit(pattern, C.CRASH_CYMBAL, 0, velocity)

        if precip_norm >= self.SECOND_CRASH_THRESHOLD and bar_index == self.SECOND_CRASH_BAR:
            self._hit(pattern, C.CRASH_CYMBAL, 0, velocity - 10)

        if precip_norm >= self.RIDE_THRESHOLD:
            ride_velocity = 50 + int(precip_norm * 30)
            for beat in range(4):
                self._hit(pattern, C.RIDE_CYMBAL, beat * C.TICKS_PER_QUARTER, ride_velocity)
