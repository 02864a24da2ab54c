"""Playback-specific exceptions for error handling."""

from typing import Optional


class PlaybackError(Exception):
    """Base exception for playback operations."""

    pass


class InvalidStationError(PlaybackError, ValueError):
    """Raised when a station has no usable stream URL."""

    pass


class PlayerNotFoundError(PlaybackError):
    """Raised when neither the primary nor the secondary player is installed."""

    def __init__(self, binaries: tuple[str, ...], message: Optional[str] = None):
        self.binaries = binaries
        super().__init__(message or f"No player found (tried: {', '.join(binaries)})")


class PlayerLaunchError(PlaybackError):
    """Raised when a player binary exists but could not be started."""

    def __init__(self, binary: str, cause: Exception):
        self.binary = binary
        self.cause = cause
        super().__init__(f"{binary}: {cause}")
