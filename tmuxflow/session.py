"""
Session operations.

PUBLIC API:
  - Session: A tmux session, owner of an ordered list of windows
"""

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .entity import Realizable
from .errors import ParseError, TmuxflowError
from .pane import Pane, list_panes
from .parser import PANE_FORMAT, parse_panes
from .types import PaneInfo
from .window import Window

if TYPE_CHECKING:
    from .server import Server

logger = logging.getLogger(__name__)


def _created_info(output: str) -> PaneInfo:
    """First pane line printed by a ``-P -F PANE_FORMAT`` creation command."""
    panes = parse_panes(output)
    if not panes:
        raise ParseError(output, "creation output holds no pane line")
    return panes[0]


@dataclass
class Session(Realizable):
    """
    A tmux session.

    ``start_directory`` applies to every window that does not set its own.
    """

    name: str = ""
    id: Optional[int] = None
    start_directory: str = ""
    windows: list[Window] = field(default_factory=list)
    server: Optional["Server"] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_info(cls, info: PaneInfo, server: Optional["Server"] = None) -> "Session":
        """
        Realized session as tmux creates it: one window holding one pane.
        """
        return cls(
            name=info.session_name,
            id=info.session_id,
            windows=[Window.from_info(info, server)],
            server=server,
        )

    @classmethod
    def from_creation_output(cls, output: str, server: Optional["Server"] = None) -> "Session":
        return cls.from_info(_created_info(output), server)

    def _server(self) -> "Server":
        if self.server is None:
            raise TmuxflowError(f"Session {self.name} is not bound to a server")
        return self.server

    def add_window(self, window: Window) -> None:
        """Declare a window. Only changes the in-library representation."""
        self.windows.append(window)

    def new_window(self, name: str, *extra_args: str) -> Window:
        """
        Create a window in this session.

        Args:
            name: Window name.
            *extra_args: Additional new-window flags (e.g. "-c", path).

        Returns:
            Realized window with the pane tmux created for it.
        """
        server = self._server()
        output = server.run(
            "new-window", "-t", f"{self.name}:", "-n", name, "-d",
            "-P", "-F", PANE_FORMAT, *extra_args,
        )
        window = Window.from_info(_created_info(output), server)
        logger.info(f"Window created: {self.name}:{window.name} (@{window.id})")
        return window

    def attach_session(self) -> None:
        """
        Bring this session to the foreground.

        Inside tmux the current client is switched over; outside tmux the
        terminal is handed to ``attach-session`` until the user detaches.
        """
        server = self._server()
        if os.environ.get("TMUX"):
            server.run("switch-client", "-t", self.name)
        else:
            server.cmd("attach-session", "-t", self.name, foreground=True).check()
        logger.info(f"Session attached: {self.name}")

    def kill(self) -> None:
        self._server().kill_session(self.name)

    def list_panes(self) -> list[Pane]:
        return list_panes(self._server(), "-s", "-t", self.name)

    def list_windows(self) -> list[Window]:
        """Live windows of this session, in listing order, with their panes."""
        windows: dict[int, Window] = {}
        for pane in self.list_panes():
            window = windows.get(pane.window_id)
            if window is None:
                window = Window(
                    name=pane.window_name,
                    id=pane.window_id,
                    session_id=pane.session_id,
                    session_name=pane.session_name,
                    index=pane.window_index,
                    server=self.server,
                )
                windows[pane.window_id] = window
            window.panes.append(pane)
        return list(windows.values())
