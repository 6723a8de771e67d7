"""
tmuxflow - Declarative tmux session setup.

Declares sessions, windows and panes, creates them on a tmux server, and
exposes per-pane operations (run a command, capture output, pipe output to a
file, select).

Basic Usage:
    from tmuxflow import Configuration, Server, Session, Window, Layout

    server = Server()

    shell = Window(name="shell", layout=Layout.EVEN_HORIZONTAL)
    shell.add_pane()
    shell.add_pane()

    work = Session(name="work", start_directory="/srv/app")
    work.add_window(shell)

    config = Configuration(server=server, sessions=[work])
    config.apply()

    pane = work.windows[0].panes[1]
    pane.run_command("htop")
    print(pane.capture())

From a workspace file:
    from tmuxflow import load_workspace

    load_workspace("dev.json").apply()
"""

__version__ = "0.1.0"
__author__ = "tmuxflow Contributors"

# Core types
from .types import (
    Layout,
    PaneInfo,
    SessionInfo,
)

# Errors
from .errors import (
    TmuxflowError,
    ConfigurationError,
    NoServerError,
    NoSessionsError,
    EmptySessionError,
    CommandError,
    ParseError,
    RealizationError,
    WorkspaceError,
)

# Entities
from .pane import Pane, list_panes
from .window import Window
from .session import Session
from .server import Server

# Reconciliation
from .configuration import Configuration
from .workspace import load_workspace, workspace_from_dict

# Settings
from .config import (
    TmuxflowConfig,
    TmuxConfig,
    LogConfig,
    load_config,
    save_config,
    init_config,
    get_config_path,
)

from . import executors

__all__ = [
    # Version
    "__version__",

    # Types
    "Layout",
    "PaneInfo",
    "SessionInfo",

    # Errors
    "TmuxflowError",
    "ConfigurationError",
    "NoServerError",
    "NoSessionsError",
    "EmptySessionError",
    "CommandError",
    "ParseError",
    "RealizationError",
    "WorkspaceError",

    # Entities
    "Pane",
    "Window",
    "Session",
    "Server",
    "list_panes",

    # Reconciliation
    "Configuration",
    "load_workspace",
    "workspace_from_dict",

    # Settings
    "TmuxflowConfig",
    "TmuxConfig",
    "LogConfig",
    "load_config",
    "save_config",
    "init_config",
    "get_config_path",

    # Submodules
    "executors",
]
