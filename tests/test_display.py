"""Tests for the table views and panels."""

from unittest.mock import patch

import pytest
from rich.panel import Panel
from rich.text import Text

from irail_status.api import StationCache
from irail_status.display import (
    CONNECTIONS_VIEW,
    STATIONS_VIEW,
    build_error_panel,
    build_no_connections_panel,
    build_view_table,
    connections_entries,
    sort_entries,
    stations_entries,
    styled_cell,
)
from irail_status.formatters import connection_entry, station_entry
from irail_status.models import Query, Styled, SUCCESS, WARNING
from conftest import (
    ARR_TIME,
    make_connection,
    make_station,
    make_stop,
    render_to_text,
)


def sample_stations():
    return [
        make_station("BE.NMBS.008892007", "Gent-Sint-Pieters", "3.710675", "51.035896"),
        make_station("BE.NMBS.008891009", "Brugge", "3.216726", "51.197226"),
        make_station("BE.NMBS.008833001", "Leuven", "4.715866", "50.88228"),
    ]


# =============================================================================
# TestViews
# =============================================================================


class TestViews:
    def test_stations_columns(self):
        assert [c.key for c in STATIONS_VIEW.columns] == ["id", "name", "location"]
        assert STATIONS_VIEW.sort_key == "name"

    def test_connections_columns(self):
        assert [c.key for c in CONNECTIONS_VIEW.columns] == [
            "id", "departure", "arrival", "duration", "vias",
            "departure_platform", "arrival_platform", "status", "alerts",
        ]
        assert CONNECTIONS_VIEW.sort_key == "id"

    def test_lazy_columns_have_formatters(self):
        assert CONNECTIONS_VIEW.column("status").render({"status": ("1", "0")}) == "Cancelled"
        assert CONNECTIONS_VIEW.column("alerts").render({"alerts": []}) == "✓"

    def test_plain_column_passes_value(self):
        assert CONNECTIONS_VIEW.column("vias").render({"vias": 2}) == 2

    def test_unknown_column(self):
        with pytest.raises(KeyError):
            STATIONS_VIEW.column("platform")


# =============================================================================
# TestEntryProducers
# =============================================================================


class TestEntryProducers:
    @patch("irail_status.api.fetch_stations")
    def test_stations_entries_use_cache(self, mock_fetch):
        mock_fetch.return_value = sample_stations()
        cache = StationCache()

        first = stations_entries(cache, "en")
        second = stations_entries(cache, "en")
        assert first == second
        assert [e["name"] for e in first] == ["Gent-Sint-Pieters", "Brugge", "Leuven"]
        assert mock_fetch.call_count == 1

    @patch("irail_status.api.fetch_stations")
    def test_stations_entries_bypass_cache(self, mock_fetch):
        mock_fetch.return_value = sample_stations()
        cache = StationCache()

        stations_entries(cache, "en", use_cache=False)
        stations_entries(cache, "en", use_cache=False)
        assert mock_fetch.call_count == 2

    @patch("irail_status.display.views.fetch_connections")
    def test_connections_entries(self, mock_fetch):
        mock_fetch.return_value = [make_connection("0"), make_connection("1", vias={"number": "1"})]
        query = Query("Gent-Sint-Pieters", "Brugge", date="181026", time="0830")

        entries = connections_entries(query)
        mock_fetch.assert_called_once_with(query)
        assert [e["id"] for e in entries] == ["0", "1"]
        assert [e["vias"] for e in entries] == [0, 1]


# =============================================================================
# TestSortEntries
# =============================================================================


class TestSortEntries:
    def test_numeric_ids_sorted_as_numbers(self):
        entries = [connection_entry(make_connection(i)) for i in ("10", "2", "1")]
        assert [e["id"] for e in sort_entries(CONNECTIONS_VIEW, entries)] == ["1", "2", "10"]

    def test_names_sorted_case_insensitively(self):
        entries = [station_entry(make_station(name=n)) for n in ("leuven", "Brugge", "Antwerpen-Centraal")]
        result = sort_entries(STATIONS_VIEW, entries)
        assert [e["name"] for e in result] == ["Antwerpen-Centraal", "Brugge", "leuven"]

    def test_reverse(self):
        entries = [connection_entry(make_connection(i)) for i in ("0", "1", "2")]
        result = sort_entries(CONNECTIONS_VIEW, entries, reverse=True)
        assert [e["id"] for e in result] == ["2", "1", "0"]

    def test_sort_by_formatted_column(self):
        entries = [
            connection_entry(make_connection("0", arrival=make_stop(time=ARR_TIME, canceled="1"))),
            connection_entry(make_connection("1")),
        ]
        result = sort_entries(CONNECTIONS_VIEW, entries, sort_key="status")
        assert [e["id"] for e in result] == ["0", "1"]  # "Cancelled" < "OK"

    def test_unsortable_column(self):
        entries = [station_entry(make_station())]
        with pytest.raises(ValueError, match="not sortable"):
            sort_entries(STATIONS_VIEW, entries, sort_key="location")


# =============================================================================
# TestStyledCell
# =============================================================================


class TestStyledCell:
    def test_warning(self):
        cell = styled_cell(Styled("Cancelled", WARNING))
        assert isinstance(cell, Text)
        assert cell.plain == "Cancelled"
        assert str(cell.style) == "bold red"

    def test_success(self):
        assert str(styled_cell(Styled("✓", SUCCESS)).style) == "green"

    def test_plain_values(self):
        assert styled_cell("4").plain == "4"
        assert styled_cell(3).plain == "3"
        assert str(styled_cell("4").style) == ""


# =============================================================================
# TestBuildViewTable
# =============================================================================


class TestBuildViewTable:
    def test_stations_table(self):
        entries = [station_entry(s) for s in sample_stations()]
        panel = build_view_table(STATIONS_VIEW, entries, subtitle="en")
        assert isinstance(panel, Panel)

        text = render_to_text(panel)
        assert "Stations" in text
        assert "3 shown" in text
        assert text.index("Brugge") < text.index("Gent-Sint-Pieters") < text.index("Leuven")
        assert "lat: 51.19722600" in text

    def test_connections_table(self):
        entries = [
            connection_entry(make_connection("0", alerts=[{"number": "2"}])),
            connection_entry(make_connection("1", departure=make_stop(canceled="1"))),
        ]
        text = render_to_text(build_view_table(CONNECTIONS_VIEW, entries, subtitle="Gent → Brugge"))

        assert "Connections" in text
        assert "Gent → Brugge" in text
        assert "⚠ 2" in text
        assert "Cancelled" in text
        assert "OK" in text
        assert "1h" in text

    def test_empty(self):
        text = render_to_text(build_view_table(STATIONS_VIEW, []))
        assert "0 shown" in text


# =============================================================================
# TestPanels
# =============================================================================


class TestPanels:
    def test_error_panel(self):
        text = render_to_text(build_error_panel("HTTP 500 from connections"))
        assert "Error: HTTP 500 from connections" in text

    def test_no_connections_panel(self):
        text = render_to_text(build_no_connections_panel("Leuven", "Namur"))
        assert "No connections from Leuven to Namur" in text
