"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)
"""

from .config import (
    Config,
    LoggingConfig,
    MpdConfig,
    SonglistConfig,
    create_default_config,
    ensure_directories,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    load_config,
)
from .console import get_console, safe_print
from .output import log, setup_loguru

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "MpdConfig",
    "SonglistConfig",
    "create_default_config",
    "ensure_directories",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "load_config",
    # Console
    "get_console",
    "safe_print",
    # Output
    "log",
    "setup_loguru",
]
