"""Pipeline reporting - optional observers called at fixed checkpoints.

Generation code never prints. The pipeline and writer call a
:class:`PipelineReporter` instead; the base class ignores every call, and
:class:`ConsoleReporter` renders them with Rich.
"""

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from .analysis.normalize import WeatherSummary
    from .input.records import SignalRecord
    from .output.assembly import AssembledTrack
    from .output.midi import WriteResult


def format_duration(seconds: float) -> str:
    """Format seconds as mm:ss."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass
class StageTimings:
    """Track timing of processing stages."""

    stages: Dict[str, float] = field(default_factory=dict)
    _current_stage: Optional[str] = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)

    def start(self, stage: str) -> None:
        """Start timing a stage."""
        self._current_stage = stage
        self._start_time = time.perf_counter()

    def stop(self) -> float:
        """Stop timing the current stage, return duration."""
        if self._current_stage is None:
            return 0.0
        duration = time.perf_counter() - self._start_time
        self.stages[self._current_stage] = duration
        self._current_stage = None
        return duration

    @property
    def total_time(self) -> float:
        """Get total time across all stages."""
        return sum(self.stages.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "stages": self.stages,
            "total_time": self.total_time,
        }


class PipelineReporter:
    """Observer interface for pipeline checkpoints. Every hook is a no-op."""

    def stage_started(self, stage: str) -> None:
        pass

    def stage_finished(self, stage: str) -> None:
        pass

    def source_loaded(
        self, records: Sequence["SignalRecord"], summary: "WeatherSummary"
    ) -> None:
        pass

    def patterns_generated(self, role: str, count: int) -> None:
        pass

    def track_written(self, track: "AssembledTrack") -> None:
        pass

    def file_written(self, result: "WriteResult") -> None:
        pass


class TimingReporter(PipelineReporter):
    """Record how long each stage takes, without printing."""

    def __init__(self):
        self.timings = StageTimings()

    def stage_started(self, stage: str) -> None:
        self.timings.start(stage)

    def stage_finished(self, stage: str) -> None:
        self.timings.stop()


class ConsoleReporter(TimingReporter):
    """Print pipeline progress to a Rich console."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        super().__init__()
        self.console = console or Console()
        self.verbose = verbose

    def stage_started(self, stage: str) -> None:
        super().stage_started(stage)
        self.console.print(f"[blue]{stage}...[/blue]")

    def stage_finished(self, stage: str) -> None:
        duration = self.timings.stop()
        if self.verbose:
            self.console.print(f"  [dim]{stage}: {duration:.2f}s[/dim]")

    def source_loaded(self, records, summary) -> None:
        self.console.print(f"  Retrieved {summary.hours} hours of weather data")
        self.console.print("[bold]Weather Summary:[/bold]")
        self.console.print(f"  Temperature: {summary.average_temperature:.1f}°C average")
        self.console.print(f"  Wind: up to {summary.max_wind_speed:.1f} km/h")
        self.console.print(f"  Precipitation: {summary.total_precipitation:.1f} mm total")
        self.console.print(f"  Humidity: {summary.average_humidity:.0f}% average")

        if self.verbose and records:
            _show_records_table(self.console, records)

    def patterns_generated(self, role: str, count: int) -> None:
        self.console.print(f"  Generated {count} bars of {role}")

    def track_written(self, track) -> None:
        if track.instrument is not None and not track.is_drum:
            self.console.print(
                f"  {track.name}: Channel {track.channel + 1}, Instrument {track.instrument}"
            )
        else:
            self.console.print(f"  {track.name}: Channel {track.channel + 1} (drums)")
        self.console.print(f"    Patterns: {track.pattern_count}, Notes: {track.note_count}")

    def file_written(self, result) -> None:
        self.console.print(f"[green]MIDI file created:[/green] {result.path}")
        self.console.print(f"  Tempo: {result.tempo} BPM")
        self.console.print(f"  Duration: {format_duration(result.duration_seconds)}")
        self.console.print(f"  Total notes: {result.note_count}")

    def timings_summary(self) -> None:
        """Print timing summary to console."""
        self.console.print("\n[bold]Timing Summary:[/bold]")
        for stage, duration in self.timings.stages.items():
            self.console.print(f"  {stage}: {duration:.2f}s")
        self.console.print(f"  [bold]Total: {self.timings.total_time:.2f}s[/bold]")


def _show_records_table(console: Console, records) -> None:
    """Display weather records in a table."""
    table = Table(title="Hourly Weather")
    table.add_column("Time", style="cyan")
    table.add_column("Temp (°C)", style="green")
    table.add_column("Humidity (%)", style="yellow")
    table.add_column("Precip (mm)", style="blue")
    table.add_column("Wind (km/h)", style="magenta")

    for record in records:
        table.add_row(
            record.time.strftime("%Y-%m-%d %H:%M"),
            f"{record.temperature:.1f}",
            f"{record.humidity:.0f}",
            f"{record.precipitation:.1f}",
            f"{record.wind_speed:.1f}",
        )

    console.print(table)
