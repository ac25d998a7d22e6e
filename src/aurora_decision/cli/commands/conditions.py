"""
Current Viewing Conditions Commands

Darkness, visibility probability and the GO / WAIT / NO badge for a single
moment, independent of the hourly decision engine.
"""

from datetime import UTC, date, datetime

import typer
from click import Context
from rich.console import Console
from rich.table import Table
from typer.core import TyperGroup

from aurora_decision.api.calculations.master_status import MasterStatusInput, calculate_master_status
from aurora_decision.api.calculations.probability import (
    AuroraInputs,
    calculate_aurora_probability,
    get_probability_description,
)
from aurora_decision.api.calculations.sun import format_time_until_dark
from aurora_decision.api.core.config import EngineSettings, load_settings
from aurora_decision.api.core.exceptions import AuroraDecisionError
from aurora_decision.api.core.utils import ensure_aware, format_clock_time, get_timezone
from aurora_decision.api.decision.darkness import (
    get_darkness_explanation,
    get_twilight_phase,
    is_dark_enough_for_aurora,
    is_midnight_sun,
    is_polar_night,
    solar_elevation_to_darkness,
)
from aurora_decision.cli.utils.output import format_kp_index, format_master_status, print_json


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


app = typer.Typer(help="Darkness, probability and status for a single moment", cls=SortedCommandsGroup)
console = Console()


def _settings() -> EngineSettings:
    try:
        return load_settings()
    except AuroraDecisionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _parse_when(when: str | None) -> datetime:
    if when is None:
        return datetime.now(UTC)
    try:
        return ensure_aware(datetime.fromisoformat(when))
    except ValueError:
        console.print(f"[red]Error: Invalid --when value {when!r}. Use ISO 8601, e.g. 2026-01-10T21:00:00+01:00[/red]")
        raise typer.Exit(1) from None


@app.command("darkness")
def show_darkness(
    elevation: float = typer.Option(..., "--elevation", "-s", help="Solar elevation in degrees (negative below horizon)"),
    on_date: str | None = typer.Option(None, "--date", help="Date for seasonal rules (YYYY-MM-DD, default: today)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Convert a solar elevation to a darkness score (0-100).

    Example:
        aurora-decision conditions darkness --elevation -14
        aurora-decision conditions darkness --elevation=-20 --date 2026-06-21
    """
    try:
        day = date.fromisoformat(on_date) if on_date else datetime.now(UTC).date()
    except ValueError:
        console.print(f"[red]Error: Invalid --date value {on_date!r}. Use YYYY-MM-DD[/red]")
        raise typer.Exit(1) from None

    score = solar_elevation_to_darkness(elevation, day)
    phase = get_twilight_phase(elevation)
    dark_enough = is_dark_enough_for_aurora(elevation)

    if json_output:
        print_json(
            {
                "solarElevation": elevation,
                "date": day.isoformat(),
                "darkness": round(score, 2),
                "twilightPhase": phase.value,
                "isDarkEnough": dark_enough,
                "polarNight": is_polar_night(day),
                "midnightSun": is_midnight_sun(day),
            }
        )
        return

    table = Table(title=f"Darkness on {day.isoformat()}", show_header=True, header_style="bold")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Solar Elevation", f"{elevation:.1f}°")
    table.add_row("Twilight Phase", phase.value.replace("_", " ").title())
    table.add_row("Darkness Score", f"{score:.1f}")
    table.add_row("Dark Enough for Aurora", "[green]Yes[/green]" if dark_enough else "[red]No[/red]")
    if is_midnight_sun(day):
        table.add_row("Season", "[yellow]Midnight sun[/yellow]")
    elif is_polar_night(day):
        table.add_row("Season", "[cyan]Polar night[/cyan]")
    console.print(table)

    explanation = get_darkness_explanation(elevation)
    if explanation:
        console.print(f"[yellow]{explanation}[/yellow]")


@app.command("probability")
def show_probability(
    kp: float = typer.Option(..., "--kp", help="Kp index (0-9)"),
    clouds: float = typer.Option(..., "--clouds", help="Cloud and fog cover (%)"),
    temperature: float = typer.Option(..., "--temperature", "-t", help="Air temperature (°C)"),
    latitude: float | None = typer.Option(None, "--lat", help="Latitude (default: reference location)"),
    longitude: float | None = typer.Option(None, "--lon", help="Longitude (default: reference location)"),
    when: str | None = typer.Option(None, "--when", help="Observation time (ISO 8601, default: now)"),
    moon_phase: float | None = typer.Option(None, "--moon-phase", help="Moon phase 0-1 (0 = new, 0.5 = full)"),
    sun_elevation: float | None = typer.Option(
        None, "--sun-elevation", help="Solar elevation in degrees (default: computed from location and time)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Estimate the probability of seeing aurora right now.

    Example:
        aurora-decision conditions probability --kp 5 --clouds 10 -t -12
    """
    settings = _settings()
    observed_at = _parse_when(when)
    result = calculate_aurora_probability(
        AuroraInputs(
            kp_index=kp,
            cloud_coverage=clouds,
            temperature=temperature,
            latitude=settings.reference_latitude if latitude is None else latitude,
            longitude=settings.reference_longitude if longitude is None else longitude,
            when=observed_at,
            moon_phase=moon_phase,
            sun_elevation=sun_elevation,
        )
    )

    if json_output:
        print_json(
            {
                "probability": result.probability,
                "score": result.score,
                "canView": result.can_view,
                "reason": result.reason,
                "nextViewableTime": result.next_viewable_time.isoformat() if result.next_viewable_time else None,
                "bestTimeTonight": result.best_time_tonight.isoformat() if result.best_time_tonight else None,
                "factors": {
                    "kpIndex": round(result.factors.kp_index, 2),
                    "clouds": result.factors.clouds,
                    "temperature": result.factors.temperature,
                    "latitude": result.factors.latitude,
                    "moon": round(result.factors.moon, 2),
                },
            }
        )
        return

    tz = get_timezone(settings.timezone)
    if not result.can_view:
        console.print("[yellow]Too bright for aurora right now (probability 0%).[/yellow]")
        if result.next_viewable_time is not None:
            minutes = round((result.next_viewable_time - observed_at).total_seconds() / 60)
            local = format_clock_time(result.next_viewable_time, tz)
            console.print(f"[dim]Next dark time: {local} ({format_time_until_dark(minutes)})[/dim]")
        else:
            console.print(f"[dim]{format_time_until_dark(None)}[/dim]")
        if result.best_time_tonight is not None:
            console.print(f"[dim]Best time tonight: {format_clock_time(result.best_time_tonight, tz)}[/dim]")
        return

    console.print(
        f"\n[bold]Probability: {result.probability}%[/bold] ({get_probability_description(result.probability)})"
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right")
    table.add_row("Kp Index", f"{result.factors.kp_index:.0f}")
    table.add_row("Clouds", f"{result.factors.clouds:.0f}")
    table.add_row("Temperature", f"{result.factors.temperature:.0f}")
    table.add_row("Latitude", f"{result.factors.latitude:.0f}")
    table.add_row("Moon", f"{result.factors.moon:.0f}")
    console.print(table)
    if result.best_time_tonight is not None:
        console.print(f"[dim]Best time tonight: {format_clock_time(result.best_time_tonight, tz)}[/dim]")


@app.command("status")
def show_status(
    probability: float = typer.Option(..., "--probability", "-p", help="Viewing probability (0-100)"),
    clouds: float = typer.Option(..., "--clouds", help="Cloud cover (%)"),
    kp: float = typer.Option(..., "--kp", help="Kp index (0-9)"),
    sun_elevation: float | None = typer.Option(
        None, "--sun-elevation", help="Solar elevation in degrees (default: computed for the reference location)"
    ),
    when: str | None = typer.Option(None, "--when", help="Observation time (ISO 8601, default: now)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the GO / WAIT / NO badge for current conditions.

    Example:
        aurora-decision conditions status -p 45 --clouds 10 --kp 4
    """
    settings = _settings()
    result = calculate_master_status(
        MasterStatusInput(
            probability=probability,
            cloud_coverage=clouds,
            kp_index=kp,
            sun_elevation=sun_elevation,
            latitude=settings.reference_latitude,
            longitude=settings.reference_longitude,
            when=_parse_when(when),
        )
    )

    if json_output:
        print_json(
            {
                "status": result.status.value,
                "message": result.message,
                "subtext": result.subtext,
                "confidence": result.confidence,
                "factors": {
                    "isDark": result.factors.is_dark,
                    "cloudCoverage": result.factors.cloud_coverage,
                    "probability": result.factors.probability,
                    "kpIndex": result.factors.kp_index,
                },
            }
        )
        return

    console.print(f"\n{format_master_status(result.status)} [bold]{result.message}[/bold]")
    console.print(f"[dim]{result.subtext}[/dim]")
    console.print(f"Confidence: {result.confidence}%  Kp: {format_kp_index(kp)}")
