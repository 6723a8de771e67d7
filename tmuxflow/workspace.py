"""
Workspace documents.

A workspace is a JSON description of a Configuration:

    {
      "sessions": [
        {
          "name": "dev",
          "start_directory": "~/src/app",
          "active": true,
          "windows": [
            {"name": "editor", "layout": "main-vertical", "panes": 3},
            {"name": "logs", "start_directory": "/var/log"}
          ]
        }
      ]
    }

``panes`` is a count or a list whose length is the count (default 1).
At most one session may be ``active``.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from .configuration import Configuration
from .errors import WorkspaceError
from .pane import Pane
from .server import Server
from .session import Session
from .types import Layout
from .window import Window


def _expand(path: str) -> str:
    return os.path.expanduser(path) if path else ""


def _window_from_dict(data: dict, where: str) -> Window:
    if not isinstance(data, dict):
        raise WorkspaceError(f"{where}: window must be an object")
    if not data.get("name"):
        raise WorkspaceError(f"{where}: window needs a name")

    layout = data.get("layout")
    if layout is not None:
        try:
            layout = Layout(layout)
        except ValueError:
            choices = ", ".join(item.value for item in Layout)
            raise WorkspaceError(f"{where}: unknown layout {layout!r} (expected one of {choices})")

    panes = data.get("panes", 1)
    if isinstance(panes, list):
        count = len(panes)
    elif isinstance(panes, int) and not isinstance(panes, bool):
        count = panes
    else:
        raise WorkspaceError(f"{where}: panes must be a count or a list")
    if count < 1:
        raise WorkspaceError(f"{where}: a window needs at least one pane")

    return Window(
        name=str(data["name"]),
        start_directory=_expand(data.get("start_directory", "")),
        layout=layout,
        panes=[Pane() for _ in range(count)],
    )


def workspace_from_dict(data: dict, server: Optional[Server] = None) -> Configuration:
    """
    Build a Configuration from a workspace mapping.

    Args:
        data: Parsed workspace document.
        server: Server to apply on. Defaults to Server().

    Raises:
        WorkspaceError: If the document is malformed.
    """
    if not isinstance(data, dict) or not isinstance(data.get("sessions"), list):
        raise WorkspaceError("workspace must be an object with a 'sessions' list")

    sessions = []
    active = None
    for si, session_data in enumerate(data["sessions"]):
        where = f"sessions[{si}]"
        if not isinstance(session_data, dict) or not session_data.get("name"):
            raise WorkspaceError(f"{where}: session needs a name")

        windows_data = session_data.get("windows", [])
        if not isinstance(windows_data, list):
            raise WorkspaceError(f"{where}: windows must be a list")

        session = Session(
            name=str(session_data["name"]),
            start_directory=_expand(session_data.get("start_directory", "")),
        )
        for wi, window_data in enumerate(windows_data):
            session.add_window(_window_from_dict(window_data, f"{where}.windows[{wi}]"))

        if session_data.get("active"):
            if active is not None:
                raise WorkspaceError(f"{where}: only one session can be active")
            active = session

        sessions.append(session)

    return Configuration(server=server or Server(), sessions=sessions, active_session=active)


def load_workspace(path: Union[str, Path], server: Optional[Server] = None) -> Configuration:
    """
    Load a workspace file.

    Raises:
        WorkspaceError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise WorkspaceError(f"Cannot read workspace {path}: {e}")
    except json.JSONDecodeError as e:
        raise WorkspaceError(f"Invalid JSON in {path}: {e}")

    return workspace_from_dict(data, server)
