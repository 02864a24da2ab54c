"""
Radio domain module.

Provides station records, the curated station list and the online
directory search.
"""

from .models import Station
from .stations import (
    CUSTOM_STATION_GENRE,
    CUSTOM_STATION_NAME,
    POPULAR_STATIONS,
    find_station,
    format_station,
    get_popular_stations,
    make_custom_station,
)
from .directory import parse_stations, search_by_genre, search_stations

__all__ = [
    # Models
    "Station",
    # Curated stations
    "POPULAR_STATIONS",
    "CUSTOM_STATION_NAME",
    "CUSTOM_STATION_GENRE",
    "get_popular_stations",
    "find_station",
    "format_station",
    "make_custom_station",
    # Directory search
    "search_stations",
    "search_by_genre",
    "parse_stations",
]
