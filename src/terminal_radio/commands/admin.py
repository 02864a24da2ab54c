"""
Admin command handlers for Terminal Radio.

Handles: killall
"""

from typing import Tuple

from terminal_radio.context import AppContext
from terminal_radio.core.output import log


def handle_killall_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Kill every player process, including ones this session did not start.

    Emergency stop for players left behind by a crashed earlier run.

    Args:
        ctx: Application context

    Returns:
        (updated_context, should_continue)
    """
    killed = ctx.player.force_stop()
    if killed:
        log(f"⛔ Killed {killed} player process(es)")
    else:
        log("No player processes found")
    return ctx, True
