"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the
Rich library.
"""

from typing import Any, Dict, List, Mapping, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from libdupes.core.models import Item

# Global console instance
console = Console()


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header."""
    console.print()
    console.rule(f"[bold blue]{title}[/bold blue]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")
    console.print()


def print_section(title: str) -> None:
    """Print a section header."""
    console.print(f"\n[bold]{title}[/bold]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_config(config_dict: Dict[str, Any], title: str = "Configuration") -> None:
    """Print a configuration dictionary in a nice format."""
    print_section(title)
    for key, value in config_dict.items():
        if isinstance(value, (list, tuple)):
            value_str = ", ".join(str(v) for v in value)
        else:
            value_str = str(value)
        console.print(f"  [cyan]{key}:[/cyan] {value_str}")


def print_statistics(stats: Dict[str, Any], title: str = "Statistics") -> None:
    """Print statistics in a table format."""
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for key, value in stats.items():
        if isinstance(value, float):
            value_str = f"{value:.2f}"
        else:
            value_str = str(value)
        table.add_row(key, value_str)

    console.print(table)


def print_duplicate_sets(sets: List[List[int]], items: Mapping[int, Item]) -> None:
    """Print duplicate sets as a table, one row per member."""
    table = Table(title="Duplicate Sets", show_header=True)
    table.add_column("Set", justify="right", style="cyan")
    table.add_column("Item", justify="right")
    table.add_column("Type", style="dim")
    table.add_column("Title")

    for set_no, members in enumerate(sets, 1):
        for position, item_id in enumerate(members):
            item = items.get(item_id)
            title = (item.get_field("title") or "") if item else ""
            item_type = item.item_type if item else ""
            table.add_row(
                str(set_no) if position == 0 else "",
                str(item_id),
                item_type,
                title,
                end_section=position == len(members) - 1,
            )

    console.print(table)


def create_progress() -> Progress:
    """Create a progress bar with consistent styling."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )


def format_number(n: int) -> str:
    """Format a number with thousand separators."""
    return f"{n:,}"


def format_duration(milliseconds: float) -> str:
    """Format duration in human-readable format."""
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    return f"{seconds / 60:.1f}m"
