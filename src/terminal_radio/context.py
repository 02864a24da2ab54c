"""Application context for explicit state passing.

Bundles the configuration, the player session and the console so command
handlers receive everything they need as an argument instead of reaching
for module globals.
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from terminal_radio.core.config import Config
from terminal_radio.domain.playback import RadioPlayer


@dataclass(frozen=True)
class AppContext:
    """Application context passed to all command handlers.

    Attributes:
        config: Application configuration
        player: The one playback session for this run
        console: Rich Console for formatted output
    """

    config: Config
    player: RadioPlayer
    console: Optional[Console] = None

    @classmethod
    def create(
        cls,
        config: Config,
        console: Optional[Console] = None,
        player: Optional[RadioPlayer] = None,
    ) -> "AppContext":
        """Create initial application context.

        Args:
            config: Application configuration
            console: Optional Rich Console instance
            player: Existing player session (a new one is built from config otherwise)

        Returns:
            New AppContext
        """
        if player is None:
            player = RadioPlayer(config.player, config.directory)
        return cls(config=config, player=player, console=console)

    def print(self, message: str, style: Optional[str] = None) -> None:
        """Print through the context console, or plain print without one."""
        if self.console:
            self.console.print(message, style=style)
        else:
            print(message)
