"""
Configuration management for pms
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

DEFAULT_SORT = ["file", "track", "disc", "album", "year", "albumartistsort"]


@dataclass
class MpdConfig:
    """Configuration for the MPD connection."""

    host: str = "localhost"
    port: int = 6600
    password: Optional[str] = None
    timeout: float = 5.0
    poll_interval: float = 1.0  # Queue watcher poll period; 0 disables the watcher


@dataclass
class SonglistConfig:
    """Configuration for songlist behaviour."""

    default_sort: List[str] = field(default_factory=lambda: list(DEFAULT_SORT))

    def validate(self) -> None:
        """Validate songlist configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not self.default_sort:
            raise ValueError("default_sort must name at least one tag")
        if not all(isinstance(f, str) and f for f in self.default_sort):
            raise ValueError(f"Invalid sort fields: {self.default_sort!r}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/pms/pms.log)
    )


@dataclass
class Config:
    """Main configuration object."""

    mpd: MpdConfig = field(default_factory=MpdConfig)
    songlist: SonglistConfig = field(default_factory=SonglistConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "pms"
    return Path.home() / ".config" / "pms"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/pms (or ~/.config/pms)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "pms"
    return Path.home() / ".local" / "share" / "pms"


def get_log_file_path(config: Config) -> Path:
    """Get the log file path, honouring a custom path from the config."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "pms.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# pms configuration

[mpd]
# MPD server address
host = "localhost"
port = 6600

# Password sent after connecting (optional)
# password = "secret"

# Socket timeout in seconds
timeout = 5.0

# Seconds between queue refresh polls (0 disables background refresh)
poll_interval = 1.0

[songlist]
# Tags used by 'sort' when no fields are given.
# The last field is the most significant.
default_sort = ["file", "track", "disc", "album", "year", "albumartistsort"]

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/pms/pms.log)
# log_file = "/path/to/custom/pms.log"
""".strip()


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, keeping defaults for missing keys."""
    config = Config()

    if "mpd" in toml_data:
        mpd_data = toml_data["mpd"]
        config.mpd = MpdConfig(
            host=mpd_data.get("host", config.mpd.host),
            port=int(mpd_data.get("port", config.mpd.port)),
            password=mpd_data.get("password"),
            timeout=float(mpd_data.get("timeout", config.mpd.timeout)),
            poll_interval=float(
                mpd_data.get("poll_interval", config.mpd.poll_interval)
            ),
        )

    if "songlist" in toml_data:
        songlist_data = toml_data["songlist"]
        config.songlist = SonglistConfig(
            default_sort=songlist_data.get(
                "default_sort", config.songlist.default_sort
            ),
        )
        try:
            config.songlist.validate()
        except ValueError as e:
            logger.warning(f"Invalid songlist configuration: {e}")
            config.songlist = SonglistConfig()

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
        )

    return config


def apply_env_overrides(config: Config) -> Config:
    """Override MPD connection settings from the environment.

    - MPD_HOST
    - MPD_PORT
    - MPD_PASSWORD
    """
    mpd_host = os.environ.get("MPD_HOST")
    mpd_port = os.environ.get("MPD_PORT")
    mpd_password = os.environ.get("MPD_PASSWORD")

    if mpd_host:
        config.mpd.host = mpd_host
    if mpd_port:
        try:
            config.mpd.port = int(mpd_port)
        except ValueError:
            logger.warning(f"Ignoring invalid MPD_PORT: {mpd_port!r}")
    if mpd_password:
        config.mpd.password = mpd_password

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values (see apply_env_overrides).
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = parse_config(toml_data)
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        return apply_env_overrides(Config())

    return apply_env_overrides(config)


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
