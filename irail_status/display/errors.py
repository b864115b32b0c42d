"""Error and empty-result display panels."""

from rich.panel import Panel
from rich.text import Text


def build_error_panel(error: str) -> Panel:
    """Build an error display panel."""
    return Panel(
        Text(f"Error: {error}", style="bold red"),
        title="[bold red]Error[/]",
        border_style="red"
    )


def build_no_connections_panel(from_station: str, to_station: str) -> Panel:
    """Build the panel shown when a query returns no connections."""
    content = Text()
    content.append(f"No connections from {from_station} to {to_station}.\n\n", style="bold yellow")
    content.append("This could mean:\n", style="white")
    content.append("• No train runs between these stations at that time\n", style="dim")
    content.append("• The date is outside the published timetable\n", style="dim")
    content.append("\nTry another time, or search by arrival instead of departure.", style="white")

    return Panel(
        content,
        title="[bold yellow]No Connections[/]",
        border_style="yellow"
    )
