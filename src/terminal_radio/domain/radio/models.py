"""
Radio domain models.

Contains the data structure for representing a playable radio station.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Station:
    """Represents an internet radio station.

    Created from the curated list, a directory search result, or a
    user-supplied stream URL.
    """

    name: str
    url: str
    genre: Optional[str] = None
    country: Optional[str] = None
    bitrate: Optional[int] = None
    codec: Optional[str] = None
