"""
Unified output system using Loguru.
Every user-facing message is written to the log file and echoed to the console.
"""

import threading
from pathlib import Path

from loguru import logger

from .console import get_console

# Map log level to Rich style for console output
LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "red",
}

# Serializes console writes from watcher threads and the main loop.
# Reentrant: a signal handler may print while the main thread is mid-print.
_print_lock = threading.RLock()


def setup_loguru(log_file: Path, level: str = "INFO") -> None:
    """
    Configure loguru for file-only logging (the console shows user messages).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints to the console.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message (can include emojis)
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    style = LEVEL_STYLES.get(level)
    with _print_lock:
        get_console().print(message, style=style, markup=False, highlight=False)
