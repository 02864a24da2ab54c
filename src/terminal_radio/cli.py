"""
Terminal Radio CLI - Entry point

Runs the interactive prompt by default; subcommands play or search
without entering it.
"""

import argparse
import sys

from terminal_radio.core import config
from terminal_radio.core.console import safe_print


def run_play(url: str, name: str | None) -> int:
    """Play a raw stream URL until the player exits or Ctrl+C."""
    from terminal_radio.commands.playback import play_station
    from terminal_radio.domain.radio import make_custom_station
    from terminal_radio.main import create_app, wait_while_playing

    ctx, _ = create_app()
    if not play_station(ctx, make_custom_station(url, name)):
        return 1
    wait_while_playing(ctx)
    return 0


def run_station(selector: str) -> int:
    """Play a curated station until the player exits or Ctrl+C."""
    from terminal_radio.commands.playback import play_station
    from terminal_radio.domain.radio import find_station
    from terminal_radio.main import create_app, wait_while_playing

    station = find_station(selector)
    if station is None:
        safe_print(
            f"Station '{selector}' not found. Run 'terminal-radio stations' to list them.",
            "red",
        )
        return 1

    ctx, _ = create_app()
    if not play_station(ctx, station):
        return 1
    wait_while_playing(ctx)
    return 0


def run_search(term: str, genre: bool, limit: int | None) -> int:
    """Print directory search results without playing anything."""
    from terminal_radio.context import AppContext
    from terminal_radio.core.console import get_console
    from terminal_radio.core.output import setup_loguru
    from terminal_radio.domain.radio import format_station

    cfg = config.load_config()
    setup_loguru(config.get_log_file_path(cfg), level=cfg.logging.level)
    ctx = AppContext.create(cfg, get_console())

    search = ctx.player.search_by_genre if genre else ctx.player.search_stations
    stations = search(term, limit)
    if not stations:
        ctx.print("No stations found. Try a different search term.", style="red")
        return 1

    for number, station in enumerate(stations, start=1):
        ctx.print(f"{number:>3}. {format_station(station)}")
        ctx.print(f"     {station.url}", style="dim")
    return 0


def run_stations() -> int:
    """Print the curated station list."""
    from terminal_radio.domain.radio import get_popular_stations

    for number, station in enumerate(get_popular_stations(), start=1):
        safe_print(f"{number}. {station.name} ({station.genre})")
    return 0


def run_killall() -> int:
    """Kill every mpv/vlc process (emergency stop)."""
    from terminal_radio.domain.playback import kill_orphaned_players

    cfg = config.load_config()
    killed = kill_orphaned_players((cfg.player.primary, cfg.player.secondary))
    safe_print(f"Killed {killed} player process(es)" if killed else "No player processes found")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the terminal-radio command."""
    parser = argparse.ArgumentParser(
        prog="terminal-radio",
        description="Terminal Radio - Discover and play internet radio streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play a stream URL")
    play_parser.add_argument("url", help="Stream URL")
    play_parser.add_argument("--name", default=None, help="Station name to display")

    station_parser = subparsers.add_parser("station", help="Play a popular station")
    station_parser.add_argument("selector", nargs="+", help="Station number or name")

    search_parser = subparsers.add_parser("search", help="Search stations online")
    search_parser.add_argument("term", nargs="+", help="Name (or genre with --genre)")
    search_parser.add_argument(
        "--genre", action="store_true", help="Search by genre tag instead of name"
    )
    search_parser.add_argument(
        "--limit", type=int, default=None, help="Maximum number of results"
    )

    subparsers.add_parser("stations", help="List popular stations")
    subparsers.add_parser("killall", help="Kill all mpv/vlc processes (emergency stop)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the terminal-radio command."""
    args = build_parser().parse_args(argv)

    if args.subcommand == "play":
        sys.exit(run_play(args.url, args.name))

    elif args.subcommand == "station":
        sys.exit(run_station(" ".join(args.selector)))

    elif args.subcommand == "search":
        sys.exit(run_search(" ".join(args.term), args.genre, args.limit))

    elif args.subcommand == "stations":
        sys.exit(run_stations())

    elif args.subcommand == "killall":
        sys.exit(run_killall())

    # No subcommand - start interactive mode
    from terminal_radio.main import interactive_mode

    interactive_mode()


if __name__ == "__main__":
    main()
