"""
Unified output system using Loguru.
User-facing messages are written to the log file and echoed to the console.
"""

import threading
from pathlib import Path

from loguru import logger

from pms.core.console import safe_print

LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def setup_loguru(log_file: Path, level: str = "INFO") -> None:
    """
    Configure loguru for file-only logging (the console shows log() output).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default stderr handler, it would draw over the prompt
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {thread.name} | {message}",
        enqueue=False,
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints to the console.

    Threads that set ``silent_logging = True`` on themselves (background
    refreshers) only reach the log file.

    Args:
        message: User-facing message
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    silent = getattr(threading.current_thread(), "silent_logging", False)
    if silent:
        return

    # Messages carry user input and MPD replies, never markup
    safe_print(message, style=LEVEL_STYLES.get(level), markup=False)
