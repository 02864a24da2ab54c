"""
Command lines for the supported external players.

mpv is preferred; VLC is the fallback when mpv is not installed.
"""

from pathlib import Path
from typing import Callable

from terminal_radio.core.config import PlayerConfig


def mpv_args(url: str, config: PlayerConfig) -> list[str]:
    """Headless mpv: no video, no terminal UI, quiet, fixed start volume."""
    return [
        "--no-video",
        "--no-terminal",
        "--really-quiet",
        f"--volume={config.volume}",
        url,
    ]


def vlc_args(url: str, config: PlayerConfig) -> list[str]:
    """Headless VLC with a password-protected local http control interface."""
    return [
        "--intf",
        "dummy",
        "--extraintf",
        "http",
        "--http-host",
        "127.0.0.1",
        "--http-password",
        config.vlc_http_password,
        url,
    ]


BACKEND_ARGS: dict[str, Callable[[str, PlayerConfig], list[str]]] = {
    "mpv": mpv_args,
    "vlc": vlc_args,
    "cvlc": vlc_args,
}


def player_name(binary: str) -> str:
    """Normalize a binary path to its lookup name (e.g. /usr/bin/mpv -> mpv)."""
    name = Path(binary).name.lower()
    if name.endswith(".exe"):
        name = name[: -len(".exe")]
    return name


def build_command(binary: str, url: str, config: PlayerConfig) -> list[str]:
    """Build the full command line for playing url with binary.

    Raises:
        ValueError: If the binary is not a supported player
    """
    try:
        make_args = BACKEND_ARGS[player_name(binary)]
    except KeyError:
        raise ValueError(
            f"Unsupported player '{binary}'. Supported: {', '.join(sorted(BACKEND_ARGS))}"
        ) from None
    return [binary, *make_args(url, config)]
