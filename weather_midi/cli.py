"""Command-line interface for Weather MIDI.

Provides commands for:
- generate: Fetch a forecast and write it as a MIDI drum (and melody) file
- info: Show information about a MIDI file
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="weather-midi",
    help="Weather to MIDI Generator",
    rich_markup_mode="markdown",
)
console = Console()


@app.command()
def generate(
    latitude: float = typer.Option(
        40.7128, "--latitude", "--lat", help="Latitude of location (default: New York)"
    ),
    longitude: float = typer.Option(
        -74.0060, "--longitude", "--lon", help="Longitude of location (default: New York)"
    ),
    output: Path = typer.Option(
        Path("weather_drums.mid"), "-o", "--output", help="Output MIDI file path"
    ),
    tempo: int = typer.Option(
        120, "-t", "--tempo", help="Tempo in BPM (40-300)"
    ),
    hours: int = typer.Option(
        24, "--hours", help="Hours of forecast to use (1-168)"
    ),
    bars: int = typer.Option(
        4, "--bars", help="Bars per hour of weather (1-16)"
    ),
    melody: bool = typer.Option(
        False, "-m", "--melody", help="Add an ambient melody track"
    ),
    melody_channel: int = typer.Option(
        0, "--melody-channel", help="MIDI channel for the melody (0-15)"
    ),
    instrument: int = typer.Option(
        89, "--instrument", help="GM program for the melody (0-127)"
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Random seed for reproducible melody"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Generate a MIDI file from an hourly weather forecast.

    **Drums:** temperature sets kick density, wind sets hi-hat speed,
    humidity adds snare ghost notes, precipitation brings in cymbals.

    **Melody** (`--melody`): temperature picks the scale (cold = minor,
    warm = major), time of day sets the octave, humidity sustains the pads,
    wind drives the arpeggio and rain adds falling notes.

    Ambient GM instruments: 49 Strings, 89 Pad 2 (warm), 91 Pad 4 (choir),
    95 Pad 8 (sweep).

    **Examples:**

        weather-midi generate --lat 51.5074 --lon -0.1278 -o london.mid

        weather-midi generate -m --instrument 91 --seed 7
    """
    from .config import RunConfig
    from .core.errors import WeatherMidiError
    from .pipeline import WeatherMidiPipeline
    from .reporting import ConsoleReporter, TimingReporter

    config = RunConfig(
        latitude=latitude,
        longitude=longitude,
        output_file=str(output),
        tempo=tempo,
        hours=hours,
        bars_per_hour=bars,
        enable_melody=melody,
        melody_channel=melody_channel,
        melody_instrument=instrument,
        seed=seed,
    )

    if json_output:
        reporter = TimingReporter()
    else:
        reporter = ConsoleReporter(console=console, verbose=verbose)
        console.print(f"[blue]Location:[/blue] {config.latitude:.4f}, {config.longitude:.4f}")

    try:
        result = WeatherMidiPipeline(config, reporter=reporter).run()
    except (WeatherMidiError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(
            data={
                "output": str(result.path),
                "latitude": config.latitude,
                "longitude": config.longitude,
                "hours": config.hours,
                "bars_per_hour": config.bars_per_hour,
                "tempo": result.tempo,
                "tracks": result.track_count,
                "notes_count": result.note_count,
                "ticks": result.max_ticks,
                "duration": result.duration_seconds,
                "melody": config.enable_melody,
                "seed": config.seed,
                "timings": reporter.timings.to_dict(),
            }
        )
    elif verbose:
        reporter.timings_summary()


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input MIDI file"),
):
    """Show information about a MIDI file."""
    from .core.errors import WeatherMidiError
    from .output import summarize_midi
    from .reporting import format_duration

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        summary = summarize_midi(str(input_file))
    except WeatherMidiError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]MIDI Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {format_duration(summary.end_time)} ({summary.end_time:.2f} seconds)")
    console.print(f"  Tempo: {summary.tempo:.1f} BPM")
    console.print(f"  Resolution: {summary.resolution} ticks per quarter")
    console.print(f"  Total notes: {summary.note_count}")

    if summary.instruments:
        _show_instruments_table(summary.instruments)


def _show_instruments_table(instruments):
    """Display instruments in a table."""
    table = Table(title="Tracks")
    table.add_column("Name", style="cyan")
    table.add_column("Program", style="green")
    table.add_column("Drums", style="yellow")
    table.add_column("Notes", style="magenta")

    for inst in instruments:
        table.add_row(
            inst.name or "-",
            "-" if inst.is_drum else str(inst.program),
            "yes" if inst.is_drum else "no",
            str(inst.note_count),
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
