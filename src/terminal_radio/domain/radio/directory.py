"""Online station directory client (Radio Browser API).

Searches the public Radio Browser directory by name or tag and maps the
results onto Station records. Failures never propagate: a failed search is
logged and returns an empty list, so callers can simply ask the user for a
different query.
"""

from typing import Any, Optional

import requests
from loguru import logger

from terminal_radio.core.output import log

from .models import Station

DEFAULT_BASE_URL = "http://all.api.radio-browser.info"
SEARCH_PATH = "/json/stations/search"
DEFAULT_TIMEOUT = 5.0
DEFAULT_LIMIT = 20


def search_stations(
    query: str,
    limit: int = DEFAULT_LIMIT,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[Station]:
    """Search the directory for stations whose name matches query.

    Args:
        query: Name fragment to search for
        limit: Maximum number of stations to return
        base_url: Directory server base URL
        timeout: Request timeout in seconds

    Returns:
        Reachable stations ordered by votes (most popular first), at most
        `limit` long. Empty list on any failure.
    """
    return _search("name", query, limit, base_url, timeout, "Search")


def search_by_genre(
    genre: str,
    limit: int = DEFAULT_LIMIT,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[Station]:
    """Search the directory for stations tagged with genre.

    Same contract as search_stations, matching on tags instead of names.
    """
    return _search("tag", genre, limit, base_url, timeout, "Genre search")


def _search(
    field: str,
    term: str,
    limit: int,
    base_url: str,
    timeout: float,
    label: str,
) -> list[Station]:
    if limit <= 0:
        return []

    url = f"{base_url.rstrip('/')}{SEARCH_PATH}"
    params = {
        field: term,
        "limit": limit,
        "hidebroken": "true",
        "order": "votes",
        "reverse": "true",
    }

    try:
        logger.debug(f"Directory request: {url} {params}")
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        stations = parse_stations(response.json(), limit)
    except requests.RequestException as e:
        log(f"❌ {label} failed: {e}", "error")
        return []
    except ValueError as e:
        log(f"❌ {label} failed: invalid response from directory ({e})", "error")
        return []

    logger.info(f"{label} for {term!r} returned {len(stations)} station(s)")
    return stations


def parse_stations(payload: Any, limit: int = DEFAULT_LIMIT) -> list[Station]:
    """Map a directory response onto Station records.

    Keeps only entries the directory marked as reachable (lastcheckok == 1),
    orders them by descending votes and truncates to limit.

    Raises:
        ValueError: If payload is not a list of station entries
    """
    if not isinstance(payload, list):
        raise ValueError(f"expected a list of stations, got {type(payload).__name__}")

    reachable = [
        entry
        for entry in payload
        if isinstance(entry, dict) and entry.get("lastcheckok") == 1
    ]
    # Stable sort keeps the directory's own order for equal vote counts
    reachable.sort(key=lambda entry: _as_int(entry.get("votes")) or 0, reverse=True)

    stations = []
    for entry in reachable:
        station = _to_station(entry)
        if station is None:
            continue
        stations.append(station)
        if len(stations) >= limit:
            break
    return stations


def _to_station(entry: dict[str, Any]) -> Optional[Station]:
    url = entry.get("url_resolved") or entry.get("url")
    if not url:
        return None

    return Station(
        name=(entry.get("name") or "").strip() or url,
        url=url,
        genre=entry.get("tags") or None,
        country=entry.get("country") or None,
        bitrate=_as_int(entry.get("bitrate")) or None,
        codec=entry.get("codec") or None,
    )


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
