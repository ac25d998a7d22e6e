"""
Aurora Forecast Decision Commands

Run the decision engine over an hourly forecast file and show the verdict,
the best viewing window and the per-hour scores.
"""

from datetime import UTC, datetime
from pathlib import Path

import typer
from click import Context
from rich.console import Console
from rich.table import Table
from typer.core import TyperGroup

from aurora_decision.api.core.config import EngineSettings, load_settings
from aurora_decision.api.core.exceptions import AuroraDecisionError
from aurora_decision.api.core.models import Decision, ForecastInput
from aurora_decision.api.core.utils import ensure_aware, format_clock_time, get_timezone
from aurora_decision.api.decision.engine import compute_decision
from aurora_decision.api.decision.kp_trend import detect_kp_trend, get_kp_trend_label
from aurora_decision.api.decision.limiting_factor import get_limiting_factor_advice
from aurora_decision.api.decision.ui_directives import get_windows_to_highlight
from aurora_decision.api.forecast_io import decision_to_json, load_forecast_input
from aurora_decision.cli.utils.export import FileConsole, create_file_console, export_to_text, generate_export_filename
from aurora_decision.cli.utils.output import (
    format_ads,
    format_classification,
    format_global_state,
    format_kp_index,
)


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


app = typer.Typer(help="Forecast decision commands", cls=SortedCommandsGroup)
console = Console()


def _parse_now(now: str | None) -> datetime:
    """Parse the --now option, defaulting to the current UTC time."""
    if now is None:
        return datetime.now(UTC)
    try:
        return ensure_aware(datetime.fromisoformat(now))
    except ValueError:
        console.print(f"[red]Error: Invalid --now value {now!r}. Use ISO 8601, e.g. 2026-01-10T21:00:00+01:00[/red]")
        raise typer.Exit(1) from None


def _load_inputs(forecast_file: Path) -> tuple[ForecastInput, EngineSettings]:
    """Load the forecast file and effective settings, exiting on failure."""
    try:
        return load_forecast_input(forecast_file), load_settings()
    except AuroraDecisionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


@app.command("decide")
def show_decision(
    forecast_file: Path = typer.Argument(..., help="JSON file with hourlyForecasts, globalKp and kpTrend"),
    now: str | None = typer.Option(None, "--now", help="Reference time (ISO 8601, default: current time)"),
    json_output: bool = typer.Option(False, "--json", help="Output the decision as JSON"),
    export: bool = typer.Option(False, "--export", "-e", help="Export output to text file (auto-generates filename)"),
    export_path: str | None = typer.Option(
        None, "--export-path", help="Custom export file path (overrides auto-generated filename)"
    ),
) -> None:
    """
    Decide whether it is worth going out to see the aurora.

    Example:
        aurora-decision forecast decide forecast.json
        aurora-decision forecast decide forecast.json --now 2026-01-10T21:00:00+01:00 --json
    """
    reference_time = _parse_now(now)
    forecast_input, settings = _load_inputs(forecast_file)

    try:
        decision = compute_decision(forecast_input, reference_time, computed_at=datetime.now(UTC), settings=settings)
    except AuroraDecisionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if json_output:
        typer.echo(decision_to_json(decision))
        return

    if export:
        export_path_obj = (
            Path(export_path)
            if export_path
            else generate_export_filename("decide", settings.reference_city, reference_time)
        )
        file_console = create_file_console()
        _show_decision_content(file_console, decision, forecast_input, settings)
        content = file_console.file.getvalue()
        file_console.file.close()

        export_to_text(content, export_path_obj)
        console.print(f"\n[green]✓[/green] Exported to {export_path_obj}")
        return

    _show_decision_content(console, decision, forecast_input, settings)


def _show_decision_content(
    output_console: Console | FileConsole,
    decision: Decision,
    forecast_input: ForecastInput,
    settings: EngineSettings,
) -> None:
    """Display a decision: verdict, best window and the hourly grid."""
    tz = get_timezone(settings.timezone)
    best = decision.best_window

    output_console.print(f"\n[bold cyan]Aurora Decision for {settings.reference_city}[/bold cyan]")
    trend_label = get_kp_trend_label(forecast_input.kp_trend)
    output_console.print(f"[dim]Global Kp {forecast_input.global_kp:.1f}, trend {trend_label}[/dim]\n")

    output_console.print(f"Verdict: {format_global_state(decision.state)}")
    output_console.print(f"[bold]{decision.explanation}[/bold]\n")

    if decision.ui_directives.show_best_banner:
        table = Table(title="Best Window", show_header=True, header_style="bold")
        table.add_column("Parameter", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Time", f"{format_clock_time(best.start, tz)} - {format_clock_time(best.end, tz)}")
        table.add_row("Aurora Decision Score", format_ads(best.ads))
        table.add_row("Classification", format_classification(best.classification))
        table.add_row("Limiting Factor", best.limiting_factor.value.replace("_", " "))
        if best.probability_from_forecast is not None:
            table.add_row("Forecast Probability", f"{best.probability_from_forecast:.0f}%")
        output_console.print(table)
    else:
        output_console.print(f"[yellow]{get_limiting_factor_advice(best.limiting_factor)}[/yellow]")

    if decision.next_window is not None:
        output_console.print(
            f"[dim]Next window worth watching: {format_clock_time(decision.next_window.start, tz)} "
            f"(ADS {decision.next_window.ads:.0f})[/dim]"
        )

    if not decision.ui_directives.show_48_grid:
        output_console.print("\n[dim]No hour in the forecast is worth showing in detail.[/dim]")
        return

    highlighted = set(get_windows_to_highlight(decision.windows, decision.ui_directives.highlight_top))
    forecasts = {f.time: f for f in forecast_input.hourly_forecasts}

    grid = Table(title="Hourly Forecast", show_header=True, header_style="bold")
    grid.add_column("Time", style="cyan")
    grid.add_column("ADS", justify="right")
    grid.add_column("Class")
    grid.add_column("Kp", justify="right")
    grid.add_column("Clouds", justify="right")
    grid.add_column("Dark")

    for index, window in enumerate(decision.windows):
        forecast = forecasts[window.time]
        marker = "★ " if index in highlighted else ""
        grid.add_row(
            f"{marker}{format_clock_time(window.time, tz)}",
            format_ads(window.ads),
            format_classification(window.classification),
            format_kp_index(forecast.kp_index),
            f"{forecast.cloud_cover:.0f}%",
            "[green]yes[/green]" if window.is_dark_enough else "[dim]no[/dim]",
        )

    output_console.print()
    output_console.print(grid)


@app.command("trend")
def show_trend(
    forecast_file: Path = typer.Argument(..., help="JSON file with hourlyForecasts"),
) -> None:
    """
    Detect the Kp trend from the hourly forecast.

    Compares the mean Kp of the first and last thirds of the forecast.

    Example:
        aurora-decision forecast trend forecast.json
    """
    forecast_input, _ = _load_inputs(forecast_file)
    detected = detect_kp_trend(forecast_input.hourly_forecasts)

    console.print(f"\n[bold cyan]Kp Trend[/bold cyan] ({len(forecast_input.hourly_forecasts)} windows)")
    console.print(f"Detected: [bold]{get_kp_trend_label(detected)}[/bold]")
    if detected != forecast_input.kp_trend:
        console.print(f"[dim]Forecast file states: {get_kp_trend_label(forecast_input.kp_trend)}[/dim]")
