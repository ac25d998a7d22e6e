"""
Aurora Decision CLI - Main Application

This is the main entry point for the aurora decision command-line interface.
"""

import logging
from dataclasses import asdict, replace

import typer
from click import Context
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typer.core import TyperGroup

from aurora_decision.api.core.config import get_config_path, load_settings, save_settings
from aurora_decision.api.core.exceptions import AuroraDecisionError

# Import and register subcommands
from aurora_decision.cli.commands import conditions, forecast
from aurora_decision.cli.utils.output import print_error, print_info, print_json, print_success


class SortedCommandsGroup(TyperGroup):
    """Custom Typer group that sorts commands alphabetically within each help panel."""

    def list_commands(self, ctx: Context) -> list[str]:
        """Return commands sorted alphabetically."""
        commands = super().list_commands(ctx)
        return sorted(commands)


# Create main app
app = typer.Typer(
    name="aurora-decision",
    help="Aurora Decision Engine CLI",
    add_completion=True,
    rich_markup_mode="rich",
    cls=SortedCommandsGroup,
)

# Console for rich output
console = Console()

# Global state for CLI
state: dict[str, bool] = {
    "verbose": False,
}


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Aurora Decision Engine CLI

    Should you go out tonight? Turns an hourly forecast into one clear answer.

    [bold green]Examples:[/bold green]

        aurora-decision forecast decide forecast.json
        aurora-decision conditions darkness --elevation -14
        aurora-decision conditions status -p 45 --clouds 10 --kp 4

    [bold blue]Environment Variables:[/bold blue]

        AURORA_REFERENCE_CITY - City used in travel-time copy
        AURORA_TIMEZONE       - Timezone for displayed times
        AURORA_CACHE_TTL      - Decision cache lifetime in seconds
    """
    state["verbose"] = verbose

    load_dotenv()

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
        console.print("[dim]Verbose mode enabled[/dim]")


@app.command(rich_help_panel="Utilities")
def version() -> None:
    """Show the CLI version."""
    from aurora_decision.cli import __version__

    console.print(f"[bold]Aurora Decision CLI[/bold] version [cyan]{__version__}[/cyan]")


@app.command("config", rich_help_panel="Configuration")
def show_config(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show all current configuration values.

    Saved settings are combined with AURORA_* environment overrides.

    Example:
        aurora-decision config
        aurora-decision config --json
    """
    try:
        settings = load_settings()
    except AuroraDecisionError as e:
        print_error(f"Failed to show configuration: {e}")
        raise typer.Exit(code=1) from e

    config_path = get_config_path()

    if json_output:
        print_json({"settings": asdict(settings), "config_file": str(config_path)})
        return

    console.print("\n[bold cyan]Current Configuration[/bold cyan]\n")

    table = Table(
        title="[bold]Engine Settings[/bold]",
        show_header=True,
        header_style="bold magenta",
        expand=False,
    )
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Reference City", settings.reference_city)
    lat_dir = "N" if settings.reference_latitude >= 0 else "S"
    lon_dir = "E" if settings.reference_longitude >= 0 else "W"
    table.add_row("Latitude", f"{abs(settings.reference_latitude):.4f}°{lat_dir}")
    table.add_row("Longitude", f"{abs(settings.reference_longitude):.4f}°{lon_dir}")
    table.add_row("Timezone", settings.timezone)
    table.add_row("Cache TTL", f"{settings.cache_ttl_seconds} s")
    table.add_row("Cache Size", str(settings.cache_max_entries))
    console.print(table)

    saved = " [green]✓[/green]" if config_path.exists() else " [dim](not saved)[/dim]"
    console.print(f"\n[dim]Settings file:[/dim] {config_path}{saved}")
    print_info("Use 'aurora-decision config-set' to change saved settings")


@app.command("config-set", rich_help_panel="Configuration")
def set_config(
    city: str | None = typer.Option(None, "--city", help="Reference city name"),
    latitude: float | None = typer.Option(None, "--lat", help="Reference latitude"),
    longitude: float | None = typer.Option(None, "--lon", help="Reference longitude"),
    timezone: str | None = typer.Option(None, "--timezone", help="IANA timezone, e.g. Europe/Oslo"),
    cache_ttl: int | None = typer.Option(None, "--cache-ttl", help="Decision cache lifetime in seconds"),
) -> None:
    """
    Save engine settings to the settings file.

    Only the given options change; the rest keep their saved values.

    Example:
        aurora-decision config-set --city Alta --lat 69.97 --lon 23.27
    """
    changes = {
        key: value
        for key, value in {
            "reference_city": city,
            "reference_latitude": latitude,
            "reference_longitude": longitude,
            "timezone": timezone,
            "cache_ttl_seconds": cache_ttl,
        }.items()
        if value is not None
    }
    if not changes:
        print_info("Nothing to change")
        return

    try:
        current = load_settings(apply_env=False)
        save_settings(replace(current, **changes))  # type: ignore[arg-type]
    except AuroraDecisionError as e:
        print_error(f"Failed to save configuration: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Saved {', '.join(sorted(changes))} to {get_config_path()}")


# Register command groups organized by category

app.add_typer(
    forecast.app,
    name="forecast",
    help="Decide from an hourly forecast",
    rich_help_panel="Decision",
)
app.add_typer(
    conditions.app,
    name="conditions",
    help="Darkness, probability and status for a single moment",
    rich_help_panel="Conditions",
)


if __name__ == "__main__":
    app()
