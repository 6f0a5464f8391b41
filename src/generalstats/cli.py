"""
GeneralStats CLI - Command Line Interface for match history charts

Provides commands for:
- Dumping two evaluated statistics as CSV/JSON
- Rendering a statistic-vs-statistic chart as SVG
- Summarizing a match history
- Checking statistic descriptors
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from generalstats import __version__
from generalstats.analysis.descriptor import DescriptorError, parse_statistic
from generalstats.analysis.filters import apply_filter, build_filter
from generalstats.analysis.statistics import Percentile, Statistic, Win, evaluate_series
from generalstats.core.config import GeneralStatsConfig, configure_logging, load_config
from generalstats.core.constants import DEFAULT_X_STATISTIC, DEFAULT_Y_STATISTIC, GameMode
from generalstats.core.models import MatchRecord
from generalstats.export import export_series, export_series_csv
from generalstats.integrations.replays import ReplayClient, ReplayFetchError
from generalstats.pipeline import StatsResult, compute_series
from generalstats.visualization.chart import NoDataError
from generalstats.visualization.svg import render_svg

app = typer.Typer(
    name="generalstats",
    help="Chart statistics of a generals.io match history against each other",
    add_completion=False,
)
console = Console()

logger = logging.getLogger(__name__)

_state: dict[str, GeneralStatsConfig] = {}


def _config() -> GeneralStatsConfig:
    if "config" not in _state:
        _state["config"] = load_config()
    return _state["config"]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]GeneralStats[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable verbose output"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (TOML, YAML or JSON)", dir_okay=False
    ),
) -> None:
    """GeneralStats - match history charts"""
    config = load_config(config_file)
    _state["config"] = config
    configure_logging(config.logging)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _parse(label: str, text: str) -> Statistic:
    try:
        return parse_statistic(text)
    except DescriptorError as e:
        console.print(Panel(str(e), title=f"Invalid {label}", border_style="red"))
        raise typer.Exit(1)


def _fetch(username: str) -> list[MatchRecord]:
    client = ReplayClient.from_config(_config().api)
    try:
        with console.status(f"Fetching match history for {username}..."):
            return client.get_replays(username)
    except ReplayFetchError as e:
        console.print(f"[red]Error fetching replays:[/red] {e}")
        raise typer.Exit(1)


def _analyze(
    username: str, x: str, y: str, mode: Optional[str], against: Optional[list[str]]
) -> StatsResult:
    x_stat = _parse("x statistic", x)
    y_stat = _parse("y statistic", y)
    try:
        record_filter = build_filter(mode, against or ())
    except ValueError:
        console.print(f"[red]Unknown game mode:[/red] {mode}")
        raise typer.Exit(1)

    records = _fetch(username)
    try:
        return compute_series(records, x_stat, y_stat, username, record_filter)
    except NoDataError:
        where = f" in {mode}" if mode else ""
        console.print(f"[yellow]No data:[/yellow] no matches for {username}{where}")
        raise typer.Exit(1)


MODE_HELP = "Game mode: " + ", ".join(m.value for m in GameMode)


@app.command()
def series(
    username: str = typer.Argument(..., help="Player to analyze"),
    x: str = typer.Option(DEFAULT_X_STATISTIC, "--x", "-x", help="X statistic descriptor"),
    y: str = typer.Option(DEFAULT_Y_STATISTIC, "--y", "-y", help="Y statistic descriptor"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help=MODE_HELP),
    against: Optional[list[str]] = typer.Option(
        None, "--against", "-a", help="Only matches with this opponent (repeatable)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to a file (.csv or .json) instead of stdout"
    ),
) -> None:
    """
    Print both statistics for every plottable match, oldest first.
    """
    result = _analyze(username, x, y, mode, against)

    if output:
        try:
            export_series(result, output)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        console.print(f"[green]Wrote[/green] {output}")
        return

    typer.echo(export_series_csv(result), nl=False)


@app.command()
def chart(
    username: str = typer.Argument(..., help="Player to analyze"),
    x: str = typer.Option(DEFAULT_X_STATISTIC, "--x", "-x", help="X statistic descriptor"),
    y: str = typer.Option(DEFAULT_Y_STATISTIC, "--y", "-y", help="Y statistic descriptor"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help=MODE_HELP),
    against: Optional[list[str]] = typer.Option(
        None, "--against", "-a", help="Only matches with this opponent (repeatable)"
    ),
    output: Path = typer.Option(
        Path("chart.svg"), "--output", "-o", help="SVG file to write", dir_okay=False
    ),
) -> None:
    """
    Render Y against X as an SVG line chart.
    """
    result = _analyze(username, x, y, mode, against)
    chart_config = _config().chart

    try:
        geometry = result.chart(chart_config)
    except NoDataError:
        console.print("[yellow]No data:[/yellow] every match is undefined for these statistics")
        raise typer.Exit(1)

    svg = render_svg(geometry, margin=chart_config.margin, axis_color=chart_config.axis_color)
    output.write_text(svg)

    table = Table(title="Chart", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("X", result.x_label)
    table.add_row("Y", result.y_label)
    table.add_row("Matches", str(len(result.records)))
    table.add_row("Points", str(len(geometry.points)))
    table.add_row("Output", str(output))
    console.print(table)


@app.command()
def summary(
    username: str = typer.Argument(..., help="Player to summarize"),
) -> None:
    """
    Show match counts, win rate and mean percentile per game mode.
    """
    records = _fetch(username)
    if not records:
        console.print(f"[yellow]No matches found for {username}[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"{username}: {len(records)} matches")
    table.add_column("Mode", style="cyan")
    table.add_column("Matches", justify="right")
    table.add_column("Win rate", justify="right")
    table.add_column("Mean percentile", justify="right")

    for game_mode in GameMode:
        subset = apply_filter(build_filter(game_mode), records)
        if not subset:
            continue
        wins = evaluate_series(Win(), subset, username)
        percentiles = evaluate_series(Percentile(), subset, username)
        table.add_row(
            game_mode.value,
            str(len(subset)),
            f"{sum(wins) / len(wins):.1%}",
            f"{sum(percentiles) / len(percentiles):.3f}",
        )

    console.print(table)


@app.command()
def describe(
    descriptor: str = typer.Argument(..., help="Statistic descriptor, e.g. 'average[25, win]'"),
) -> None:
    """
    Check a statistic descriptor and print its canonical form.
    """
    statistic = _parse("statistic", descriptor)
    typer.echo(statistic.describe())


if __name__ == "__main__":
    app()
