"""Configuration constants and dataclass for irail-status."""

from dataclasses import dataclass

# API constants
API_BASE = "https://api.irail.be"
DEFAULT_PARAMS = {"format": "json"}
DEFAULT_HEADERS = {"Accept": "application/json"}
DEFAULT_ENCODING = "utf-8"
REQUEST_TIMEOUT = 10.0  # seconds

# Languages the API can localise station names into
LANGUAGES = ("en", "fr", "nl", "de")
DEFAULT_LANGUAGE = "en"

# Number of days offered by the date prompt, today included
DEFAULT_DAYS = 31


@dataclass
class Config:
    """Runtime configuration built from CLI arguments.

    The station names only pre-fill the prompts, they are never enforced.
    """
    language: str = DEFAULT_LANGUAGE
    station_from: str | None = None
    station_to: str | None = None
