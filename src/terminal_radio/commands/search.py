"""
Directory search command handlers for Terminal Radio.

Handles: search, genre
"""

from typing import Callable, List, Optional, Tuple

from terminal_radio.context import AppContext
from terminal_radio.core.output import log
from terminal_radio.domain.radio import format_station
from terminal_radio.domain.radio.models import Station

from .playback import play_station


def handle_search_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Search stations by name, then offer the results for playback.

    Returns:
        (updated_context, should_continue)
    """
    return _search_and_play(ctx, args, ctx.player.search_stations, "search <term>")


def handle_genre_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Search stations by genre tag, then offer the results for playback.

    Returns:
        (updated_context, should_continue)
    """
    return _search_and_play(ctx, args, ctx.player.search_by_genre, "genre <tag>")


def _search_and_play(
    ctx: AppContext,
    args: List[str],
    search: Callable[[str], List[Station]],
    usage: str,
) -> Tuple[AppContext, bool]:
    term = " ".join(args).strip()
    if not term:
        term = input("Search for stations (genre, country, or name): ").strip()
        if not term:
            log(f"Usage: {usage}", "warning")
            return ctx, True

    log("🔍 Searching...")
    stations = search(term)

    if not stations:
        log("No stations found. Try a different search term.", "error")
        return ctx, True

    shown = stations[: ctx.config.directory.results_shown]
    station = choose_station(ctx, shown)
    if station is not None:
        play_station(ctx, station)
    return ctx, True


def print_station_list(ctx: AppContext, stations: List[Station]) -> None:
    """Print stations numbered from 1."""
    for number, station in enumerate(stations, start=1):
        ctx.print(f"  {number}. {format_station(station)}")


def choose_station(ctx: AppContext, stations: List[Station]) -> Optional[Station]:
    """Ask the user to pick one of stations by number.

    Returns:
        The chosen station, or None if the user cancelled
    """
    print_station_list(ctx, stations)

    while True:
        answer = input("Choose a station (blank to cancel): ").strip()
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(stations):
            return stations[int(answer) - 1]
        log(f"Please enter a number between 1 and {len(stations)}", "warning")
