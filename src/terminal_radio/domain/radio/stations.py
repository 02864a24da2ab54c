"""
Curated station list.

A small set of well-known streams offered without a directory search.
"""

from typing import Optional

from .models import Station

POPULAR_STATIONS: tuple[Station, ...] = (
    Station(
        name="BBC Radio 1",
        url="http://stream.live.vc.bbcmedia.co.uk/bbc_radio_one",
        genre="Pop/Rock",
    ),
    Station(
        name="Jazz24",
        url="http://live.str3am.com:2540/jazz24",
        genre="Jazz",
    ),
    Station(
        name="Lofi Hip Hop Radio",
        url="http://hyades.shoutca.st:8043/stream",
        genre="Lofi",
    ),
    Station(
        name="Classic FM",
        url="http://media-ice.musicradio.com/ClassicFMMP3",
        genre="Classical",
    ),
    Station(
        name="Radio Paradise",
        url="http://stream.radioparadise.com/aac-320",
        genre="Eclectic",
    ),
    Station(
        name="SomaFM - Groove Salad",
        url="http://ice1.somafm.com/groovesalad-256-mp3",
        genre="Ambient",
    ),
    Station(
        name="NPR News",
        url="http://npr-ice.streamguys1.com/live.mp3",
        genre="News",
    ),
)

CUSTOM_STATION_NAME = "Custom Station"
CUSTOM_STATION_GENRE = "Custom"


def get_popular_stations() -> list[Station]:
    """Get the curated station list."""
    return list(POPULAR_STATIONS)


def find_station(selector: str) -> Optional[Station]:
    """Find a curated station by 1-based number or name.

    Args:
        selector: Station number as shown by 'stations', or its name
            (case-insensitive)

    Returns:
        Matching Station or None if not found
    """
    selector = selector.strip()
    if not selector:
        return None

    if selector.isdigit():
        index = int(selector) - 1
        if 0 <= index < len(POPULAR_STATIONS):
            return POPULAR_STATIONS[index]
        return None

    wanted = selector.lower()
    for station in POPULAR_STATIONS:
        if station.name.lower() == wanted:
            return station
    return None


def make_custom_station(url: str, name: Optional[str] = None) -> Station:
    """Build a station from a user-supplied stream URL."""
    return Station(
        name=name.strip() if name and name.strip() else CUSTOM_STATION_NAME,
        url=url.strip(),
        genre=CUSTOM_STATION_GENRE,
    )


def format_station(station: Station) -> str:
    """Format a station for list display: name (country) - genre."""
    country = station.country or "Unknown"
    genre = station.genre or "Various"
    return f"{station.name} ({country}) - {genre}"
