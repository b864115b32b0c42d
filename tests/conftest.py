"""Shared test fixtures and helpers for irail-status tests."""

import json
from datetime import datetime
from unittest.mock import patch, MagicMock

import httpx
import pytest
from rich.console import Console


# =============================================================================
# Constants
# =============================================================================


# A fixed "now" for deterministic prompt defaults
FIXED_NOW = datetime(2026, 10, 18, 14, 30, 0)

# 2022-04-15 05:20:00 UTC; rendered through local time in the assertions
DEP_TIME = 1650000000
ARR_TIME = 1650003600


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def freeze_time():
    """Patch the prompt clock to return FIXED_NOW."""
    with patch("irail_status.prompts._now", return_value=FIXED_NOW):
        yield


# =============================================================================
# Test data helpers
# =============================================================================


def make_station(
    station_id="BE.NMBS.008892007",
    name="Gent-Sint-Pieters",
    location_x="3.710675",
    location_y="51.035896",
):
    """Build a station dict matching the API shape."""
    return {
        "@id": f"http://irail.be/stations/NMBS/{station_id[-9:]}",
        "id": station_id,
        "name": name,
        "standardname": name,
        "locationX": location_x,
        "locationY": location_y,
    }


def make_stop(time=DEP_TIME, delay="0", platform="1", canceled="0", station="Gent-Sint-Pieters"):
    """Build the departure/arrival half of a connection."""
    return {
        "station": station,
        "time": str(time),
        "delay": str(delay),
        "platform": platform,
        "canceled": canceled,
    }


def make_connection(
    connection_id="0",
    departure=None,
    arrival=None,
    duration="3600",
    vias=None,
    alerts=None,
):
    """Build a connection dict matching the API shape."""
    connection = {
        "id": connection_id,
        "departure": departure or make_stop(),
        "arrival": arrival or make_stop(time=ARR_TIME, station="Brugge"),
        "duration": duration,
        "alerts": alerts if alerts is not None else [],
    }
    if vias is not None:
        connection["vias"] = vias
    return connection


def make_response(payload=None, status_code=200, content=None, content_type="application/json"):
    """Build a real httpx.Response, as the client would return it."""
    if content is None:
        content = json.dumps(payload).encode("utf-8")
    return httpx.Response(
        status_code,
        content=content,
        headers={"Content-Type": content_type},
        request=httpx.Request("GET", "https://api.irail.be/test/"),
    )


def make_mock_httpx_client(response):
    """Create a mock httpx.Client whose .get() returns the given response."""
    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    mock_client.get.return_value = response
    return mock_client


class ScriptedPrompt:
    """
    Stand-in for an interactive prompt that replays canned answers.

    A None answer takes whatever default the caller offered.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, label, default=None, choices=None):
        self.calls.append({"label": label, "default": default, "choices": choices})
        answer = self.answers.pop(0)
        return default if answer is None else answer


def render_to_text(renderable, width=160) -> str:
    """Capture a Rich renderable as plain text for assertion."""
    console = Console(record=True, width=width, force_terminal=False)
    console.print(renderable)
    return console.export_text()


def local_clock(timestamp) -> str:
    """HH:MM of an epoch timestamp in the test machine's timezone."""
    return datetime.fromtimestamp(int(timestamp)).strftime("%H:%M")
