"""Display rendering components for irail-status."""

from .views import Column, View, STATIONS_VIEW, CONNECTIONS_VIEW, stations_entries, connections_entries
from .table import build_view_table, sort_entries, styled_cell
from .errors import build_error_panel, build_no_connections_panel

__all__ = [
    "Column",
    "View",
    "STATIONS_VIEW",
    "CONNECTIONS_VIEW",
    "stations_entries",
    "connections_entries",
    "build_view_table",
    "sort_entries",
    "styled_cell",
    "build_error_panel",
    "build_no_connections_panel",
]
