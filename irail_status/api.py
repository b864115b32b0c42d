"""Request building, response decoding and station caching for the iRail API."""

import codecs
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import (
    API_BASE, DEFAULT_ENCODING, DEFAULT_HEADERS, DEFAULT_PARAMS,
    LANGUAGES, REQUEST_TIMEOUT,
)
from .errors import DecodeError, MissingKeyError, RequestError, ValidationError
from .models import Query

logger = logging.getLogger(__name__)


def merge_defaults(defaults: dict[str, Any], params: dict[str, Any]) -> dict[str, Any]:
    """Merge caller parameters over defaults.

    Caller keys win on collision; defaults only fill keys the caller left out.
    """
    merged = dict(params)
    for key, value in defaults.items():
        merged.setdefault(key, value)
    return merged


def build_url(endpoint: str, params: dict[str, Any], base: str = API_BASE) -> str:
    """Build the full URL for an endpoint, default parameters included."""
    merged = merge_defaults(DEFAULT_PARAMS, params)
    query = "&".join(f"{key}={quote(str(value), safe='')}" for key, value in merged.items())
    return f"{base.rstrip('/')}/{endpoint}/?{query}"


def decode_response(response: httpx.Response) -> Any:
    """Decode a response body as JSON using the charset its headers announce."""
    encoding = response.charset_encoding or DEFAULT_ENCODING
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise DecodeError(f"unknown charset {encoding!r}") from e

    try:
        text = response.content.decode(encoding)
    except UnicodeDecodeError as e:
        raise DecodeError(f"body is not valid {encoding}") from e
    except LookupError as e:
        # bytes-to-bytes codecs such as base64 pass codecs.lookup
        raise DecodeError(f"{encoding!r} is not a text charset") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"body is not valid JSON: {e}") from e


def request_json(
    endpoint: str,
    params: dict[str, Any],
    headers: dict[str, str] | None = None,
    base: str = API_BASE,
) -> Any:
    """GET an endpoint and return its decoded JSON body."""
    url = build_url(endpoint, params, base)
    logger.debug("GET %s", url)

    try:
        with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
            response = client.get(url, headers=merge_defaults(DEFAULT_HEADERS, headers or {}))
            response.raise_for_status()
            return decode_response(response)
    except httpx.HTTPStatusError as e:
        raise RequestError(f"HTTP {e.response.status_code} from {endpoint}") from e
    except httpx.HTTPError as e:
        raise RequestError(f"{endpoint} request failed: {e}") from e


def _extract(payload: Any, key: str) -> list[dict]:
    if not isinstance(payload, dict) or key not in payload:
        raise MissingKeyError(key)
    return payload[key]


def fetch_stations(language: str) -> list[dict]:
    """Fetch every station, with names localised to `language`."""
    if language not in LANGUAGES:
        raise ValidationError(f"unsupported language {language!r}, expected one of {', '.join(LANGUAGES)}")
    return _extract(request_json("stations", {"lang": language}), "station")


def fetch_connections(query: Query) -> list[dict]:
    """Fetch the connections matching a query, in API order."""
    return _extract(request_json("connections", query.to_params()), "connection")


class StationCache:
    """Holds the station list for the lifetime of the process."""

    def __init__(self):
        self.populated: bool = False
        self.stations: list[dict] = []
        self.language: str | None = None


def get_stations(cache: StationCache, use_cache: bool, language: str) -> list[dict]:
    """
    Return the station list, fetching it unless a cached copy may be used.

    The cache is not keyed by language: once warm it answers every
    language with the data it was first filled with.
    """
    if use_cache and cache.populated:
        if language != cache.language:
            logger.debug(
                "Station cache holds %s names, %s requested; serving cached list",
                cache.language, language,
            )
        return cache.stations

    stations = fetch_stations(language)
    # Swap in the whole result at once; a failed fetch never gets here
    cache.stations, cache.language, cache.populated = stations, language, True
    logger.debug("Cached %d stations (%s)", len(stations), language)
    return stations
