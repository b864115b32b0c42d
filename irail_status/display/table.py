"""Render a view's entries as a rich table."""

from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import PLAIN, SUCCESS, WARNING
from .views import Column, View

TONE_STYLES = {
    PLAIN: "",
    WARNING: "bold red",
    SUCCESS: "green",
}


def styled_cell(value: Any) -> Text:
    """Turn a formatter result into a rich Text, applying its tone if it has one."""
    tone = getattr(value, "tone", PLAIN)
    return Text(str(value), style=TONE_STYLES.get(tone, ""))


def _sort_value(column: Column, entry: dict) -> tuple:
    value = column.render(entry)
    if isinstance(value, (int, float)):
        return (0, value, "")
    text = str(value)
    if text.isdigit():
        return (0, int(text), "")
    return (1, 0, text.casefold())


def sort_entries(view: View, entries: list[dict], sort_key: str | None = None, reverse: bool = False) -> list[dict]:
    """Sort entries by a sortable column, numbers before text."""
    column = view.column(sort_key or view.sort_key)
    if not column.sortable:
        raise ValueError(f"column '{column.key}' of {view.name} is not sortable")
    return sorted(entries, key=lambda entry: _sort_value(column, entry), reverse=reverse)


def build_view_table(
    view: View,
    entries: list[dict],
    sort_key: str | None = None,
    reverse: bool = False,
    subtitle: str | None = None,
) -> Panel:
    """Build the table for a view, sorted by its default or the given column."""
    table = Table(
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
        expand=True,
    )

    for column in view.columns:
        table.add_column(column.title, min_width=column.width)

    for entry in sort_entries(view, entries, sort_key, reverse):
        table.add_row(*(styled_cell(column.render(entry)) for column in view.columns))

    title_parts = [f"[bold]{view.name}[/]"]
    if subtitle:
        title_parts.append(f"[dim]({subtitle})[/]")
    title_parts.append(f"[dim]{len(entries)} shown[/]")

    return Panel(
        table,
        title=" ".join(title_parts),
        border_style="magenta"
    )
