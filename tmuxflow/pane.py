"""
Pane operations.

PUBLIC API:
  - Pane: A tmux pane, the unit of command execution and output capture
  - list_panes: Query panes in a given scope
"""

import logging
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .errors import TmuxflowError
from .parser import PANE_FORMAT, parse_panes
from .types import PaneInfo

if TYPE_CHECKING:
    from .server import Server

logger = logging.getLogger(__name__)


@dataclass
class Pane:
    """
    A tmux pane.

    A pane is addressed by ``session:window.index``. The index is only
    meaningful inside its window and shifts if panes are reordered outside
    of tmuxflow.

    Panes are not promoted in place like sessions and windows. A declared
    pane only counts towards the wanted number of panes; realized panes are
    always built from a tmux listing and replace the declared ones in
    ``Window.panes``.
    """

    id: Optional[int] = None
    session_id: Optional[int] = None
    session_name: str = ""
    window_id: Optional[int] = None
    window_name: str = ""
    window_index: int = 0
    active: bool = False
    index: int = 0
    server: Optional["Server"] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_info(cls, info: PaneInfo, server: Optional["Server"] = None) -> "Pane":
        return cls(
            id=info.pane_id,
            session_id=info.session_id,
            session_name=info.session_name,
            window_id=info.window_id,
            window_name=info.window_name,
            window_index=info.window_index,
            active=info.active,
            index=info.pane_index,
            server=server,
        )

    @property
    def is_realized(self) -> bool:
        return self.id is not None

    @property
    def selector(self) -> str:
        return f"{self.session_name}:{self.window_name}.{self.index}"

    def _run(self, *args: str) -> str:
        if self.server is None:
            raise TmuxflowError(f"Pane {self.selector} is not bound to a server")
        return self.server.run(*args)

    def capture(self) -> str:
        """
        Capture the visible pane buffer.

        Trailing newlines and padding are returned untouched; trimming is
        left to the caller.
        """
        return self._run("capture-pane", "-p", "-t", self.selector)

    def get_current_path(self) -> str:
        """Working directory of the pane's foreground process."""
        out = self._run("display-message", "-p", "-t", self.selector, "#{pane_current_path}")
        if out.endswith("\n"):
            out = out[:-1]
        return out

    def pipe(self, path: str) -> str:
        """
        Start appending the pane's output stream to a file.

        Piping continues until it is toggled off outside tmuxflow. ``-o``
        makes a second call for the same pane a no-op instead of a restart.
        """
        logger.info(f"Piping pane {self.selector} to {path}")
        return self._run("pipe-pane", "-o", "-t", self.selector, f"cat >>{shlex.quote(path)}")

    def run_command(self, command: str) -> None:
        """
        Type a command into the pane and press Enter.

        Returns as soon as the keys are sent; the command's completion and
        output are not observed.
        """
        logger.debug(f"Sending to {self.selector}: {command}")
        self._run("send-keys", "-t", self.selector, command, "C-m")

    def select(self) -> None:
        """Make this pane the active pane of its window."""
        self._run("select-pane", "-t", self.selector)


def list_panes(server: "Server", *args: str) -> list[Pane]:
    """
    List panes in a scope.

    Args:
        server: Server to query.
        *args: list-panes scope flags, see tmux(1):
            ``-a`` for every pane on the server,
            ``-s -t <session>`` for every pane of a session,
            ``-t <session>:<window>`` for one window.

    Returns:
        Panes in listing order.

    Raises:
        CommandError: If tmux rejects the query.
        ParseError: If a listing line carries a malformed id.
    """
    output = server.run("list-panes", "-F", PANE_FORMAT, *args)
    return [Pane.from_info(info, server) for info in parse_panes(output)]
