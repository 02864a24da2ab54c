"""Playback domain - external player process management.

This domain handles:
- Launching mpv (or VLC as a fallback) for a station stream
- Watching the player process for unexpected exits
- Graceful and forced termination of player process groups
- Sweeping orphaned player processes on shutdown
"""

from .exceptions import (
    InvalidStationError,
    PlaybackError,
    PlayerLaunchError,
    PlayerNotFoundError,
)
from .player import RadioPlayer
from .process_control import (
    find_player_processes,
    kill_orphaned_players,
    terminate_process_group,
    terminate_process_tree,
)

__all__ = [
    # Player
    "RadioPlayer",
    # Process control
    "terminate_process_group",
    "terminate_process_tree",
    "find_player_processes",
    "kill_orphaned_players",
    # Exceptions
    "PlaybackError",
    "InvalidStationError",
    "PlayerNotFoundError",
    "PlayerLaunchError",
]
