"""
tmuxflow configuration management.

Configuration priority (highest to lowest):
1. CLI arguments (--socket-name, --verbose, etc.)
2. Environment variables (TMUXFLOW_*)
3. Config file (~/.config/tmuxflow/config.json or platform-specific)
4. Default values (zero-config)

Handles loading, saving, and defaults for CLI settings.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

import platformdirs

from .executors import TmuxExecutor
from .server import Server

logger = logging.getLogger(__name__)


@dataclass
class TmuxConfig:
    """Which tmux binary and server to talk to."""

    binary: str = "tmux"
    socket_name: str = ""  # tmux -L
    socket_path: str = ""  # tmux -S, wins over socket_name

    def create_server(self) -> Server:
        """Server bound to a TmuxExecutor for these settings."""
        executor = TmuxExecutor(
            binary=self.binary,
            socket_name=self.socket_name or None,
            socket_path=self.socket_path or None,
        )
        return Server(
            executor=executor,
            socket_name=self.socket_name or None,
            socket_path=self.socket_path or None,
        )


@dataclass
class LogConfig:
    """Logging settings."""

    level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR


@dataclass
class TmuxflowConfig:
    """Main configuration container."""

    tmux: TmuxConfig = field(default_factory=TmuxConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "tmux": asdict(self.tmux),
            "log": asdict(self.log),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TmuxflowConfig":
        """Create from dictionary."""
        return cls(
            tmux=TmuxConfig(**data.get("tmux", {})),
            log=LogConfig(**data.get("log", {})),
        )

    def apply_env_overrides(self) -> "TmuxflowConfig":
        """
        Apply environment variable overrides.

        Environment variables:
            TMUXFLOW_TMUX_BINARY - tmux executable
            TMUXFLOW_SOCKET_NAME - server socket name
            TMUXFLOW_SOCKET_PATH - server socket path
            TMUXFLOW_LOG_LEVEL - DEBUG/INFO/WARNING/ERROR
        """
        if os.environ.get("TMUXFLOW_TMUX_BINARY"):
            self.tmux.binary = os.environ["TMUXFLOW_TMUX_BINARY"]
        if os.environ.get("TMUXFLOW_SOCKET_NAME"):
            self.tmux.socket_name = os.environ["TMUXFLOW_SOCKET_NAME"]
        if os.environ.get("TMUXFLOW_SOCKET_PATH"):
            self.tmux.socket_path = os.environ["TMUXFLOW_SOCKET_PATH"]

        if os.environ.get("TMUXFLOW_LOG_LEVEL"):
            self.log.level = os.environ["TMUXFLOW_LOG_LEVEL"].upper()

        return self


def get_config_dir() -> Path:
    """
    Get platform-specific user config directory.

    Returns:
        - Linux: ~/.config/tmuxflow (or $XDG_CONFIG_HOME/tmuxflow)
        - macOS: ~/Library/Application Support/tmuxflow
        - Windows: C:\\Users\\<user>\\AppData\\Roaming\\tmuxflow
    """
    return Path(platformdirs.user_config_dir("tmuxflow", appauthor=False))


def get_config_path() -> Path:
    """Get configuration file path."""
    return get_config_dir() / "config.json"


def load_config(path: Optional[Path] = None, apply_env: bool = True) -> TmuxflowConfig:
    """
    Load configuration from file.

    An unreadable or malformed file falls back to defaults with a warning.

    Args:
        path: Config file path. Uses default if None.
        apply_env: Apply environment variable overrides.

    Returns:
        TmuxflowConfig with loaded or default values.
    """
    config_path = path or get_config_path()
    config = TmuxflowConfig()

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
            config = TmuxflowConfig.from_dict(data)
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            logger.warning(f"Ignoring invalid config {config_path}: {e}")

    if apply_env:
        config.apply_env_overrides()

    return config


def save_config(config: TmuxflowConfig, path: Optional[Path] = None) -> bool:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        path: Config file path. Uses default if None.

    Returns:
        True if successful.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        return True
    except OSError as e:
        logger.error(f"Cannot write config {config_path}: {e}")
        return False


def init_config(path: Optional[Path] = None) -> Path:
    """
    Initialize configuration file with defaults.

    Args:
        path: Config file path. Uses default if None.

    Returns:
        Path to created config file.
    """
    config_path = path or get_config_path()
    save_config(TmuxflowConfig(), config_path)
    return config_path
