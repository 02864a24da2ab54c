"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Console management (Rich)
- Output and logging (Loguru)
"""

# Configuration
from .config import (
    Config,
    DirectoryConfig,
    LoggingConfig,
    PlayerConfig,
    ShutdownConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Console
from .console import get_console, safe_print

# Output
from .output import log, setup_loguru

__all__ = [
    # Config
    "Config",
    "DirectoryConfig",
    "LoggingConfig",
    "PlayerConfig",
    "ShutdownConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Console
    "get_console",
    "safe_print",
    # Output
    "log",
    "setup_loguru",
]
