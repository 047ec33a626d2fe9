"""Theory layer - Scales and pitch arithmetic."""

from .scales import (
    ScaleType,
    SCALE_INTERVALS,
    get_note,
    get_scale_notes,
    scale_length,
    select_scale_by_temperature,
)

__all__ = [
    "ScaleType",
    "SCALE_INTERVALS",
    "get_note",
    "get_scale_notes",
    "scale_length",
    "select_scale_by_temperature",
]
