"""
Terminal Radio - Main entry point and interactive loop
"""

import time
from typing import Callable, Optional

from loguru import logger

from terminal_radio import router
from terminal_radio.context import AppContext
from terminal_radio.core import config
from terminal_radio.core.console import get_console
from terminal_radio.core.output import setup_loguru
from terminal_radio.lifecycle import ShutdownCoordinator
from terminal_radio.utils.parsers import parse_command

PROMPT = "radio> "


def create_app(cfg: Optional[config.Config] = None) -> tuple[AppContext, ShutdownCoordinator]:
    """Load config, set up logging, and wire the player to the shutdown hooks.

    The returned coordinator is already installed.
    """
    cfg = cfg or config.load_config()
    setup_loguru(config.get_log_file_path(cfg), level=cfg.logging.level)

    ctx = AppContext.create(cfg, get_console())
    coordinator = ShutdownCoordinator(ctx.player, exit_delay=cfg.shutdown.exit_delay)
    coordinator.install()
    return ctx, coordinator


def run_loop(ctx: AppContext, read_input: Callable[[str], str] = input) -> AppContext:
    """Read and execute commands until quit/exit or end of input."""
    should_continue = True
    while should_continue:
        try:
            user_input = read_input(PROMPT)
        except EOFError:
            ctx.player.stop()
            ctx.print("\n👋 Thanks for listening!", style="green")
            break

        command, args = parse_command(user_input)
        if not command:
            continue

        try:
            ctx, should_continue = router.handle_command(ctx, command, args)
        except Exception as e:
            logger.exception(f"Command failed: {user_input!r}")
            ctx.print(f"❌ Error: {e}", style="red")

    return ctx


def interactive_mode() -> None:
    """Run the interactive command loop."""
    ctx, _ = create_app()

    if ctx.console:
        ctx.console.clear()
    ctx.print("🎵 Terminal Radio 🎵\n", style="bold cyan")
    ctx.print("Type 'help' for available commands, or 'quit' to exit.")
    ctx.print("")

    run_loop(ctx)


def wait_while_playing(ctx: AppContext, poll_interval: float = 0.5) -> None:
    """Block until the player exits; Ctrl+C is handled by the shutdown hooks."""
    while ctx.player.is_playing():
        time.sleep(poll_interval)
