"""
Command routing for Terminal Radio.

Routes user commands to appropriate handler functions.
"""

from typing import List, Tuple

from terminal_radio.commands import admin, playback, search
from terminal_radio.context import AppContext


def print_help(ctx: AppContext) -> None:
    """Display help information for available commands."""
    help_text = """
Terminal Radio - Internet radio in your terminal

Available commands:
  stations              List popular stations
  play <number|name>    Play a popular station
  search <term>         Search stations online by name
  genre <tag>           Search stations online by genre
  url <stream-url> [n]  Play a custom stream URL (optionally named, use quotes)
  stop                  Stop the current station
  status                Show the current station
  killall               Kill all mpv/vlc processes (emergency stop)
  help                  Show this help message
  quit, exit            Stop playback and exit

Examples:
  play 2                          # Play Jazz24
  play "classic fm"               # Play by name
  search soma                     # Find SomaFM stations
  genre ambient                   # Find ambient stations
  url http://example.com/stream "My Station"
"""
    ctx.print(help_text.strip())


def handle_command(ctx: AppContext, command: str, args: List[str]) -> Tuple[AppContext, bool]:
    """
    Handle a single command with explicit state passing.

    Args:
        ctx: Application context
        command: Command name
        args: Command arguments

    Returns:
        (updated_context, should_continue) - Updated context and whether to continue
    """
    if command in ["quit", "exit"]:
        ctx.player.stop()
        ctx.print("👋 Thanks for listening!", style="green")
        return ctx, False

    elif command == "help":
        print_help(ctx)
        return ctx, True

    elif command == "stations":
        return playback.handle_stations_command(ctx)

    elif command == "play":
        return playback.handle_play_command(ctx, args)

    elif command == "url":
        return playback.handle_url_command(ctx, args)

    elif command == "search":
        return search.handle_search_command(ctx, args)

    elif command == "genre":
        return search.handle_genre_command(ctx, args)

    elif command == "stop":
        return playback.handle_stop_command(ctx)

    elif command == "status":
        return playback.handle_status_command(ctx)

    elif command == "killall":
        return admin.handle_killall_command(ctx)

    else:
        ctx.print(f"Unknown command: '{command}'. Type 'help' for available commands.", style="yellow")
        return ctx, True
