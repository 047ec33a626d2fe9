"""MIDI export functionality.

Tracks are flattened by :class:`TrackAssembler` and written as a type 1
Standard MIDI File. ``mido`` handles the byte-level encoding: chunk headers,
variable-length delta times and running status.
"""

import io
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import mido
import pretty_midi

from ..core.constants import DEFAULT_TEMPO, TICKS_PER_QUARTER
from ..core.errors import InvalidInput
from ..core.events import Track
from ..reporting import PipelineReporter
from .assembly import AssembledTrack, TrackAssembler

MIN_TEMPO = 40
MAX_TEMPO = 300


def tempo_to_microseconds(bpm: int) -> int:
    """Microseconds per quarter note for a tempo in BPM."""
    return 60_000_000 // int(bpm)


def duration_seconds(ticks: int, ticks_per_quarter: int, bpm: float) -> float:
    """Wall-clock length of ``ticks`` at a constant tempo."""
    return ticks / ticks_per_quarter * 60.0 / bpm


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _encode(midi: mido.MidiFile) -> bytes:
    buffer = io.BytesIO()
    midi.save(file=buffer)
    return buffer.getvalue()


@dataclass
class WriteResult:
    """Outcome of writing a MIDI file."""

    path: Optional[Path]
    track_count: int
    note_count: int
    max_ticks: int
    tempo: int
    ticks_per_quarter: int = TICKS_PER_QUARTER

    @property
    def duration_seconds(self) -> float:
        return duration_seconds(self.max_ticks, self.ticks_per_quarter, self.tempo)


class MIDIFileWriter:
    """Serialize tracks to a Standard MIDI File."""

    def __init__(
        self,
        tempo: int = DEFAULT_TEMPO,
        ticks_per_quarter: int = TICKS_PER_QUARTER,
        reporter: Optional[PipelineReporter] = None,
    ):
        """
        Initialize MIDIFileWriter.

        Args:
            tempo: Tempo in BPM (clamped to 40-300)
            ticks_per_quarter: Time division written to the header
            reporter: Optional observer notified per written track
        """
        self.tempo = max(MIN_TEMPO, min(MAX_TEMPO, int(tempo)))
        self.ticks_per_quarter = ticks_per_quarter
        self.reporter = reporter or PipelineReporter()
        self.assembler = TrackAssembler()

    def build(self, tracks: Sequence[Track]) -> Tuple[mido.MidiFile, WriteResult]:
        """
        Convert tracks to a ``mido.MidiFile`` without touching disk.

        Args:
            tracks: One or more tracks; the first carries the tempo

        Returns:
            Tuple of (MidiFile, WriteResult with ``path`` unset)

        Raises:
            InvalidInput: If no tracks are given
        """
        if len(tracks) == 0:
            raise InvalidInput("At least one track is required")

        midi = mido.MidiFile(type=1, ticks_per_beat=self.ticks_per_quarter)
        total_notes = 0
        max_ticks = 0

        for index, track in enumerate(tracks):
            assembled = self.assembler.assemble(track)
            midi.tracks.append(self._track_chunk(assembled, with_tempo=index == 0))

            total_notes += assembled.note_count
            max_ticks = max(max_ticks, assembled.end_tick)
            self.reporter.track_written(assembled)

        result = WriteResult(
            path=None,
            track_count=len(tracks),
            note_count=total_notes,
            max_ticks=max_ticks,
            tempo=self.tempo,
            ticks_per_quarter=self.ticks_per_quarter,
        )
        return midi, result

    def _track_chunk(self, assembled: AssembledTrack, with_tempo: bool) -> mido.MidiTrack:
        chunk = mido.MidiTrack()
        chunk.append(mido.MetaMessage("track_name", name=assembled.name, time=0))

        if with_tempo:
            chunk.append(
                mido.MetaMessage("set_tempo", tempo=tempo_to_microseconds(self.tempo), time=0)
            )

        # Percussion channel never gets a program change
        if assembled.instrument is not None and not assembled.is_drum:
            chunk.append(
                mido.Message(
                    "program_change",
                    program=assembled.instrument,
                    channel=assembled.channel,
                    time=0,
                )
            )

        # Note-offs are queued right after their note-on so that a stable sort
        # puts an ending note before a new one starting on the same tick
        messages = []
        for placed in assembled.events:
            note = placed.event
            messages.append(
                (placed.tick, "note_on", note.pitch, note.velocity, note.channel)
            )
            messages.append((placed.end_tick, "note_off", note.pitch, 0, note.channel))
        messages.sort(key=lambda m: m[0])

        # Overlapping notes of one pitch share a key; only the last one to end
        # sends the note-off
        sounding: Dict[Tuple[int, int], int] = {}
        previous = 0
        for tick, kind, pitch, velocity, channel in messages:
            key = (channel, pitch)
            if kind == "note_on":
                sounding[key] = sounding.get(key, 0) + 1
            else:
                sounding[key] -= 1
                if sounding[key] > 0:
                    continue

            chunk.append(
                mido.Message(
                    kind,
                    note=pitch,
                    velocity=velocity,
                    channel=channel,
                    time=tick - previous,
                )
            )
            previous = tick

        return chunk

    def to_bytes(self, tracks: Sequence[Track]) -> bytes:
        """Encode tracks to Standard MIDI File bytes."""
        midi, _ = self.build(tracks)
        return _encode(midi)

    def write(self, output_path: str, tracks: Sequence[Track]) -> WriteResult:
        """
        Write tracks to a MIDI file.

        The file is written to a temporary name in the target directory and
        renamed into place, so a failure leaves no partial file behind.

        Args:
            output_path: Path to output MIDI file
            tracks: One or more tracks

        Returns:
            WriteResult describing the written file

        Raises:
            InvalidInput: If no tracks are given (nothing is written)
        """
        midi, result = self.build(tracks)
        data = _encode(midi)

        path = Path(output_path)
        # Ensure output directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            # mkstemp creates 0600; give the file the mode a plain open() would
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        result.path = path
        self.reporter.file_written(result)
        return result


@dataclass
class InstrumentSummary:
    """One instrument as read back from a MIDI file."""

    name: str
    program: int
    is_drum: bool
    note_count: int


@dataclass
class MIDISummary:
    """Contents of a MIDI file, read back with pretty_midi."""

    path: Path
    resolution: int
    tempo: float
    end_time: float
    instruments: List[InstrumentSummary] = field(default_factory=list)

    @property
    def note_count(self) -> int:
        return sum(i.note_count for i in self.instruments)


def summarize_midi(path: str) -> MIDISummary:
    """
    Load a MIDI file and summarize its instruments, notes and length.

    Raises:
        InvalidInput: If the file cannot be parsed as MIDI
    """
    try:
        pm = pretty_midi.PrettyMIDI(str(path))
    except (OSError, EOFError, ValueError) as e:
        raise InvalidInput(f"Cannot read MIDI file {path}: {e}") from e
    _, tempi = pm.get_tempo_changes()

    return MIDISummary(
        path=Path(path),
        resolution=pm.resolution,
        tempo=float(tempi[0]) if len(tempi) > 0 else float(DEFAULT_TEMPO),
        end_time=pm.get_end_time(),
        instruments=[
            InstrumentSummary(
                name=inst.name,
                program=inst.program,
                is_drum=inst.is_drum,
                note_count=len(inst.notes),
            )
            for inst in pm.instruments
        ],
    )
