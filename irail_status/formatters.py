"""Pure functions mapping raw API records to display values."""

from datetime import datetime
from typing import Any, Mapping

from .models import PLAIN, SUCCESS, WARNING, Styled

_UNITS = (
    ("y", 365 * 24 * 3600),
    ("d", 24 * 3600),
    ("h", 3600),
    ("m", 60),
)


def _seconds(value: str | int | float) -> int:
    """Read a seconds count the API may send as a number or a numeric string."""
    return int(float(value))


def compact_duration(seconds: str | int | float) -> str:
    """Render seconds as e.g. '1d 2h 5m', leaving out units that are zero."""
    remaining = _seconds(seconds)
    if remaining < 0:
        raise ValueError(f"negative duration: {seconds!r}")

    parts = []
    for label, size in _UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{label}")
    return " ".join(parts) or "0m"


def format_delay(delay: str | int | float) -> Styled:
    """Format a delay in seconds, rounded up to the minute. No delay renders as an empty string."""
    seconds = _seconds(delay)
    if seconds == 0:
        return Styled("")
    if seconds < 0:
        raise ValueError(f"negative delay: {delay!r}")
    minutes = -(-seconds // 60)
    return Styled(f"+{compact_duration(minutes * 60)}", WARNING)


def format_clock(time_val: str | int | float, delay: str = "") -> Styled:
    """Format an epoch timestamp as local HH:MM, followed by the delay if any."""
    clock = datetime.fromtimestamp(_seconds(time_val)).strftime("%H:%M")
    if not delay:
        return Styled(clock)
    return Styled(f"{clock} {delay}", getattr(delay, "tone", WARNING))


def format_duration(seconds: str | int | float) -> Styled:
    """Format a journey duration."""
    return Styled(compact_duration(seconds))


def format_status(departure_canceled: str, arrival_canceled: str) -> Styled:
    """'OK' unless either end of the journey is cancelled."""
    if str(departure_canceled) == "0" and str(arrival_canceled) == "0":
        return Styled("OK")
    return Styled("Cancelled", WARNING)


def format_status_pair(pair: tuple[str, str]) -> Styled:
    return format_status(*pair)


def _alert_list(alerts: Any) -> list[Mapping]:
    # The live API sends a single {"number": ..., "alert": [...]} mapping
    if not alerts:
        return []
    if isinstance(alerts, Mapping):
        return [alerts]
    return list(alerts)


def format_alerts(alerts: Any) -> Styled:
    """Tick when there are no alerts, otherwise a warning sign and the count."""
    total = sum(int(alert.get("number", 0)) for alert in _alert_list(alerts))
    if total == 0:
        return Styled("✓", SUCCESS)
    return Styled(f"⚠ {total}", WARNING)


def count_vias(connection: dict) -> int:
    """Number of intermediate changes; 0 when the connection is direct."""
    vias = connection.get("vias")
    if not vias:
        return 0
    return int(vias.get("number", 0))


def station_entry(station: dict) -> dict[str, Any]:
    """Flatten a station record for display."""
    lat = float(station["locationY"])
    lon = float(station["locationX"])
    return {
        "id": station["id"],
        "name": station["name"],
        "location": "lat: {:.8f}\tlong: {:.8f}".format(lat, lon),
    }


def connection_entry(connection: dict) -> dict[str, Any]:
    """
    Flatten a connection record for display.

    `status` and `alerts` stay raw: the connections view formats them per
    column so they can still be sorted and inspected as data.
    """
    departure = connection["departure"]
    arrival = connection["arrival"]

    return {
        "id": connection["id"],
        "departure": format_clock(departure["time"], format_delay(departure.get("delay", 0))),
        "arrival": format_clock(arrival["time"], format_delay(arrival.get("delay", 0))),
        "duration": format_duration(connection["duration"]),
        "vias": count_vias(connection),
        "departure_platform": departure.get("platform", ""),
        "arrival_platform": arrival.get("platform", ""),
        "status": (departure.get("canceled", "0"), arrival.get("canceled", "0")),
        "alerts": _alert_list(connection.get("alerts")),
    }
