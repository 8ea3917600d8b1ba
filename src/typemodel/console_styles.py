"""Console styling utilities for consistent Rich output formatting.

Table builders, status indicators and formatting helpers shared by the CLI
commands.

Example:
    >>> from typemodel.console_styles import create_summary_table, format_count
    >>> table = create_summary_table("Extraction Results")
    >>> table.add_row("Types", format_count(150))
    >>> console.print(table)
"""

from typing import Tuple

from rich.box import ROUNDED
from rich.panel import Panel
from rich.table import Table

KIND_STYLES = {
    "class": "green",
    "interface": "magenta",
    "enum": "yellow",
}


def get_status_icon(success: bool) -> str:
    """Get colored status icon.

    Args:
        success: Whether the check succeeded

    Returns:
        str: Colored status icon (✓ or ✗)
    """
    return "[green]✓[/green]" if success else "[red]✗[/red]"


def format_count(count: int) -> str:
    """Format a count with thousands separator."""
    return f"{count:,}"


def format_kind(kind: str) -> str:
    """Color a type kind (class, interface, enum)."""
    style = KIND_STYLES.get(kind, "white")
    return f"[{style}]{kind}[/{style}]"


def create_summary_table(title: str, header_style: str = "bold cyan") -> Table:
    """Create a two column Metric/Count table.

    Args:
        title: Table title
        header_style: Rich style for header (default: "bold cyan")

    Returns:
        Table: Configured Rich Table
    """
    table = Table(
        title=title,
        show_header=True,
        header_style=header_style,
        box=ROUNDED,
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    return table


def create_data_table(title: str, columns: list[Tuple[str, str, str]]) -> Table:
    """Create a configurable data display table.

    Args:
        title: Table title
        columns: List of (column_name, justify, style) tuples

    Returns:
        Table: Configured Rich Table
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        box=ROUNDED,
    )

    for col_name, justify, style in columns:
        table.add_column(col_name, justify=justify, style=style)

    return table


def create_header_panel(title: str, subtitle: str = "", border_style: str = "cyan") -> Panel:
    """Create a styled header panel.

    Args:
        title: Panel title
        subtitle: Optional subtitle
        border_style: Rich style for border

    Returns:
        Panel: Configured Rich Panel
    """
    if subtitle:
        content = f"[bold cyan]{title}[/bold cyan]\n{subtitle}"
    else:
        content = f"[bold cyan]{title}[/bold cyan]"

    return Panel.fit(
        content,
        border_style=border_style,
        padding=(0, 1),
    )
