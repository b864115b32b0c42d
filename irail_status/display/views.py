"""Table views: column layouts and the entry producers that feed them."""

from dataclasses import dataclass
from typing import Any, Callable

from ..api import StationCache, fetch_connections, get_stations
from ..formatters import (
    connection_entry, format_alerts, format_status_pair, station_entry,
)
from ..models import Query


@dataclass(frozen=True)
class Column:
    """One table column. `formatter` turns the raw entry value into display text."""
    key: str
    title: str
    width: int
    formatter: Callable[[Any], Any] | None = None
    sortable: bool = True

    def render(self, entry: dict) -> Any:
        value = entry.get(self.key, "")
        return self.formatter(value) if self.formatter else value


@dataclass(frozen=True)
class View:
    """A named table: where its entries come from and how to lay them out."""
    name: str
    entries: Callable[..., list[dict]]
    columns: tuple[Column, ...]
    sort_key: str

    def column(self, key: str) -> Column:
        for column in self.columns:
            if column.key == key:
                return column
        raise KeyError(key)


def stations_entries(cache: StationCache, language: str, use_cache: bool = True) -> list[dict]:
    """Display entries for every station."""
    return [station_entry(station) for station in get_stations(cache, use_cache, language)]


def connections_entries(query: Query) -> list[dict]:
    """Display entries for the connections matching a query."""
    return [connection_entry(connection) for connection in fetch_connections(query)]


STATIONS_VIEW = View(
    name="Stations",
    entries=stations_entries,
    columns=(
        Column("id", "ID", 24),
        Column("name", "Name", 40),
        Column("location", "Location", 40, sortable=False),
    ),
    sort_key="name",
)

CONNECTIONS_VIEW = View(
    name="Connections",
    entries=connections_entries,
    columns=(
        Column("id", "#", 3),
        Column("departure", "Departure", 14),
        Column("arrival", "Arrival", 14),
        Column("duration", "Duration", 10),
        Column("vias", "Vias", 4),
        Column("departure_platform", "Dep Plt", 7),
        Column("arrival_platform", "Arr Plt", 7),
        Column("status", "Status", 10, formatter=format_status_pair),
        Column("alerts", "Alerts", 6, formatter=format_alerts),
    ),
    sort_key="id",
)
