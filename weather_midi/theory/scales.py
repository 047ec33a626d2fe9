"""Scales and scale-degree arithmetic.

Scale degrees are integers of any sign: degree 0 is the root, degrees past
the end of the interval list continue into the next octave and negative
degrees walk down below the root.
"""

import math
from enum import Enum
from typing import Dict, List, Tuple

from ..core.constants import DEFAULT_ROOT, MIDI_MAX

OCTAVE = 12


class ScaleType(Enum):
    """Scales used for ambient melody, ordered roughly cold to warm."""
    MINOR = "minor"  # Aeolian, dark
    DORIAN = "dorian"  # Minor with raised 6th, melancholic
    PENTATONIC = "pentatonic"  # Neutral, floating
    LYDIAN = "lydian"  # Major with raised 4th, dreamy
    MAJOR = "major"  # Ionian, bright
    WHOLE_TONE = "whole_tone"  # Ethereal, ambiguous


SCALE_INTERVALS: Dict[ScaleType, Tuple[int, ...]] = {
    ScaleType.MINOR: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.DORIAN: (0, 2, 3, 5, 7, 9, 10),
    ScaleType.PENTATONIC: (0, 2, 4, 7, 9),
    ScaleType.LYDIAN: (0, 2, 4, 6, 7, 9, 11),
    ScaleType.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.WHOLE_TONE: (0, 2, 4, 6, 8, 10),
}

# Upper bounds (exclusive) in Celsius; anything at or above the last bound is MAJOR
TEMPERATURE_BANDS: Tuple[Tuple[float, ScaleType], ...] = (
    (0.0, ScaleType.MINOR),
    (10.0, ScaleType.DORIAN),
    (20.0, ScaleType.PENTATONIC),
    (30.0, ScaleType.LYDIAN),
)


def scale_length(scale: ScaleType) -> int:
    """Number of degrees in one octave of the scale."""
    return len(SCALE_INTERVALS[scale])


def get_note(scale: ScaleType, degree: int, root: int = DEFAULT_ROOT) -> int:
    """
    Get the MIDI pitch of a scale degree.

    Args:
        scale: The scale type
        degree: Scale degree (0 = root, negative or beyond the scale
            length shifts by whole octaves)
        root: Root MIDI note (default C4 = 60)

    Returns:
        Absolute MIDI pitch (not clamped)
    """
    intervals = SCALE_INTERVALS[scale]
    octave_shift, index = divmod(degree, len(intervals))
    return root + octave_shift * OCTAVE + intervals[index]


def get_scale_notes(
    scale: ScaleType, root: int = DEFAULT_ROOT, octaves: int = 2
) -> List[int]:
    """Get all notes of a scale across ``octaves`` octaves, up to MIDI 127."""
    notes = []
    for octave in range(octaves):
        for interval in SCALE_INTERVALS[scale]:
            note = root + octave * OCTAVE + interval
            if note <= MIDI_MAX:
                notes.append(note)
    return notes


def select_scale_by_temperature(temperature_celsius: float) -> ScaleType:
    """Pick a scale from temperature: cold = minor, warm = major."""
    if math.isnan(temperature_celsius):
        return ScaleType.PENTATONIC
    for upper, scale in TEMPERATURE_BANDS:
        if temperature_celsius < upper:
            return scale
    return ScaleType.MAJOR
