"""Global constants for Weather MIDI."""

# Timing (4/4, ticks per quarter note)
TICKS_PER_QUARTER = 480
TICKS_PER_BAR = TICKS_PER_QUARTER * 4
TICKS_PER_HALF = TICKS_PER_QUARTER * 2
TICKS_PER_8TH = TICKS_PER_QUARTER // 2
TICKS_PER_16TH = TICKS_PER_QUARTER // 4

# Musical defaults
DEFAULT_TEMPO = 120
DEFAULT_ROOT = 60  # C4
DEFAULT_MELODY_ROOT = 48  # C3, ambient register
DEFAULT_DRUM_DURATION = 120

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
CHANNEL_MIN = 0
CHANNEL_MAX = 15
DRUM_CHANNEL = 9  # channel 10 in 1-based numbering

# General MIDI percussion note numbers
KICK = 36
SNARE = 38
CLOSED_HIHAT = 42
OPEN_HIHAT = 46
CRASH_CYMBAL = 49
RIDE_CYMBAL = 51
