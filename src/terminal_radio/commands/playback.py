"""
Playback command handlers for Terminal Radio.

Handles: stations, play, url, stop, status
"""

from typing import List, Tuple

from terminal_radio.context import AppContext
from terminal_radio.core.output import log
from terminal_radio.domain import radio
from terminal_radio.domain.playback import InvalidStationError
from terminal_radio.domain.radio.models import Station

CONTROLS_HINT = "📱 Controls: type 'stop' to stop, 'quit' to exit, or press Ctrl+C"


def play_station(ctx: AppContext, station: Station) -> bool:
    """Start playing station and show the controls hint.

    Args:
        ctx: Application context
        station: Station to play

    Returns:
        True if the player is running after the startup delay
    """
    log(f"🎵 Playing: {station.name}")
    try:
        playing = ctx.player.play(station)
    except InvalidStationError as e:
        log(f"❌ {e}", "error")
        return False

    if playing:
        ctx.print(f"\n{CONTROLS_HINT}\n", style="dim")
    return playing


def handle_stations_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """List the curated stations.

    Returns:
        (updated_context, should_continue)
    """
    ctx.print("Popular stations:", style="bold cyan")
    for number, station in enumerate(radio.get_popular_stations(), start=1):
        ctx.print(f"  {number}. {station.name} ({station.genre})")
    ctx.print("Use 'play <number>' or 'play <name>' to listen.", style="dim")
    return ctx, True


def handle_play_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Play a curated station by number or name.

    Args:
        ctx: Application context
        args: Station number or name (may be quoted)

    Returns:
        (updated_context, should_continue)
    """
    if not args:
        return handle_stations_command(ctx)

    selector = " ".join(args)
    station = radio.find_station(selector)
    if station is None:
        log(f"Station '{selector}' not found. Type 'stations' to list them.", "warning")
        return ctx, True

    play_station(ctx, station)
    return ctx, True


def handle_url_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Play a raw stream URL, optionally naming the station.

    Usage: url <stream-url> ["station name"]

    Returns:
        (updated_context, should_continue)
    """
    if not args:
        log('Usage: url <stream-url> ["station name"]', "warning")
        return ctx, True

    url = args[0]
    name = " ".join(args[1:]) or None
    play_station(ctx, radio.make_custom_station(url, name))
    return ctx, True


def handle_stop_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle stop command.

    Returns:
        (updated_context, should_continue)
    """
    if ctx.player.get_current_station() is None and not ctx.player.is_playing():
        log("Nothing is currently playing", "warning")
        return ctx, True

    ctx.player.stop()
    log("🔇 Radio stopped", "warning")
    return ctx, True


def handle_status_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Show the current station and player state.

    Returns:
        (updated_context, should_continue)
    """
    station = ctx.player.get_current_station()
    if station is None:
        ctx.print("⏹  Nothing playing")
        return ctx, True

    state = "▶ Playing" if ctx.player.is_playing() else "⏸ Not running"
    backend = ctx.player.backend
    ctx.print(f"{state}: {station.name}", style="bold green" if ctx.player.is_playing() else "yellow")
    ctx.print(f"   URL: {station.url}")
    details = [
        value
        for value in (
            station.genre,
            station.country,
            station.codec,
            f"{station.bitrate} kbps" if station.bitrate else None,
        )
        if value
    ]
    if details:
        ctx.print(f"   {' | '.join(details)}")
    if backend:
        ctx.print(f"   Player: {backend}", style="dim")
    return ctx, True
