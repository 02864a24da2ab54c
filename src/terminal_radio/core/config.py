"""
Configuration management for Terminal Radio
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class PlayerConfig:
    """Configuration for the external player backends."""

    primary: str = "mpv"
    secondary: str = "vlc"
    volume: int = 70
    vlc_http_password: str = "vlc"
    startup_delay: float = 1.0  # Seconds to wait before reporting "now playing"
    stop_grace_period: float = 1.0  # Seconds between SIGTERM and SIGKILL

    def validate(self) -> None:
        """Validate player configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not 0 <= self.volume <= 100:
            raise ValueError(f"Volume must be between 0 and 100, got {self.volume}")
        if self.startup_delay < 0 or self.stop_grace_period < 0:
            raise ValueError("Delays must not be negative")
        if not self.primary or not self.secondary:
            raise ValueError("Both primary and secondary player must be set")


@dataclass
class DirectoryConfig:
    """Configuration for the online station directory."""

    base_url: str = "http://all.api.radio-browser.info"
    timeout: float = 5.0
    default_limit: int = 20
    results_shown: int = 10


@dataclass
class ShutdownConfig:
    """Configuration for shutdown handling."""

    exit_delay: float = 0.1  # Let kill signals propagate before exiting


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/terminal-radio/terminal-radio.log)
    )


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerConfig = field(default_factory=PlayerConfig)
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    shutdown: ShutdownConfig = field(default_factory=ShutdownConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "terminal-radio"
    return Path.home() / ".config" / "terminal-radio"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/terminal-radio (or ~/.config/terminal-radio)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "terminal-radio"
    return Path.home() / ".local" / "share" / "terminal-radio"


def get_log_file_path(config: Config) -> Path:
    """Resolve the log file path from config, falling back to the data dir."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "terminal-radio.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Terminal Radio Configuration

[player]
# Preferred player binary, and the fallback used when it is not installed
primary = "mpv"
secondary = "vlc"

# Default volume (0-100)
volume = 70

# Password for VLC's local http control interface
vlc_http_password = "vlc"

# Seconds to wait after launching before reporting playback status
startup_delay = 1.0

# Seconds between a graceful stop and a forced kill
stop_grace_period = 1.0

[directory]
# Radio Browser API server
base_url = "http://all.api.radio-browser.info"

# Request timeout in seconds
timeout = 5.0

# Number of stations to request per search
default_limit = 20

# Number of search results offered for selection
results_shown = 10

[shutdown]
# Seconds to wait after cleanup before the process exits on a signal
exit_delay = 0.1

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/terminal-radio/terminal-radio.log)
# log_file = "/path/to/custom/terminal-radio.log"
""".strip()


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - TERMINAL_RADIO_DIRECTORY_URL
    - TERMINAL_RADIO_VOLUME
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        # Create config directory and default file
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(create_default_config())
            print(f"Created default configuration at: {config_path}")
        except OSError as e:
            print(f"Could not write default configuration to {config_path}: {e}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        config = Config()

        if "player" in toml_data:
            player_data = toml_data["player"]
            config.player = PlayerConfig(
                primary=player_data.get("primary", config.player.primary),
                secondary=player_data.get("secondary", config.player.secondary),
                volume=player_data.get("volume", config.player.volume),
                vlc_http_password=player_data.get(
                    "vlc_http_password", config.player.vlc_http_password
                ),
                startup_delay=float(
                    player_data.get("startup_delay", config.player.startup_delay)
                ),
                stop_grace_period=float(
                    player_data.get(
                        "stop_grace_period", config.player.stop_grace_period
                    )
                ),
            )
            # Validate player config
            try:
                config.player.validate()
            except ValueError as e:
                print(f"Warning: Invalid player configuration: {e}")
                print("Using default player configuration.")
                config.player = PlayerConfig()

        if "directory" in toml_data:
            directory_data = toml_data["directory"]
            config.directory = DirectoryConfig(
                base_url=directory_data.get("base_url", config.directory.base_url),
                timeout=float(directory_data.get("timeout", config.directory.timeout)),
                default_limit=directory_data.get(
                    "default_limit", config.directory.default_limit
                ),
                results_shown=directory_data.get(
                    "results_shown", config.directory.results_shown
                ),
            )

        if "shutdown" in toml_data:
            shutdown_data = toml_data["shutdown"]
            config.shutdown = ShutdownConfig(
                exit_delay=float(
                    shutdown_data.get("exit_delay", config.shutdown.exit_delay)
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            log_file = logging_data.get("log_file")
            if log_file:
                log_file = str(Path(log_file).expanduser())
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level).upper(),
                log_file=log_file,
            )

        return _apply_env_overrides(config)

    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())


def _apply_env_overrides(config: Config) -> Config:
    """Override config values with environment variables if present."""
    directory_url = os.environ.get("TERMINAL_RADIO_DIRECTORY_URL")
    if directory_url:
        config.directory.base_url = directory_url

    volume = os.environ.get("TERMINAL_RADIO_VOLUME")
    if volume:
        try:
            config.player.volume = max(0, min(100, int(volume)))
        except ValueError:
            print(f"Warning: ignoring invalid TERMINAL_RADIO_VOLUME={volume!r}")

    return config

