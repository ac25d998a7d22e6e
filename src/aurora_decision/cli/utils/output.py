"""
CLI Output Utilities

Rich console formatting for decisions, states and scores.
"""

import json
from typing import Any

from rich.console import Console

from aurora_decision.api.core.enums import Classification, GlobalState, MasterStatus


# Create console with unicode detection
# If terminal doesn't support unicode properly, Rich will use ASCII alternatives
console = Console()

# Detect if we can safely use unicode symbols
_use_unicode = console.is_terminal and not console.legacy_windows


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str) -> None:
    """Print info message in blue."""
    # U+2139 is in the Letterlike Symbols block and widely supported
    info_icon = "ℹ" if _use_unicode else "i"
    console.print(f"[blue]{info_icon}[/blue] {message}")


def print_json(data: dict[str, Any]) -> None:
    """Print data as JSON."""
    console.print_json(json.dumps(data, ensure_ascii=False))


def format_ads(ads: float) -> str:
    """Format an Aurora Decision Score with color based on its band."""
    match ads:
        case a if a >= 70:
            return f"[bold bright_green]{a:.1f}[/bold bright_green]"
        case a if a >= 50:
            return f"[green]{a:.1f}[/green]"
        case a if a >= 30:
            return f"[yellow]{a:.1f}[/yellow]"
        case _:
            return f"[dim]{ads:.1f}[/dim]"


def format_classification(classification: Classification) -> str:
    """Format a window classification with color."""
    match classification:
        case Classification.EXCELLENT:
            return "[bold bright_green]Excellent[/bold bright_green]"
        case Classification.GOOD:
            return "[green]Good[/green]"
        case Classification.MODERATE:
            return "[yellow]Moderate[/yellow]"
        case Classification.POOR:
            return "[dim]Poor[/dim]"


def format_global_state(state: GlobalState) -> str:
    """Format the global verdict with color."""
    match state:
        case GlobalState.EXCELLENT:
            return "[bold bright_green]EXCELLENT[/bold bright_green]"
        case GlobalState.POSSIBLE:
            return "[bold yellow]POSSIBLE[/bold yellow]"
        case GlobalState.UNLIKELY:
            return "[bold red]UNLIKELY[/bold red]"


def format_master_status(status: MasterStatus) -> str:
    """Format the GO / WAIT / NO badge with color."""
    match status:
        case MasterStatus.GO:
            return "[bold black on bright_green] GO [/bold black on bright_green]"
        case MasterStatus.WAIT:
            return "[bold black on yellow] WAIT [/bold black on yellow]"
        case MasterStatus.NO:
            return "[bold white on red] NO [/bold white on red]"


def format_kp_index(kp: float) -> str:
    """Format Kp index with color based on activity level."""
    match kp:
        case k if k >= 7.0:
            return f"[bold red]{k:.1f}[/bold red] (Very High)"
        case k if k >= 5.0:
            return f"[yellow]{k:.1f}[/yellow] (Storm)"
        case k if k >= 3.0:
            return f"[cyan]{k:.1f}[/cyan] (Active)"
        case _:
            return f"[dim]{kp:.1f}[/dim] (Quiet)"
