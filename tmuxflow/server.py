"""
Server handle.

PUBLIC API:
  - Server: Target tmux server and entry point for every tmux call
"""

import logging
from typing import Optional

from .executors import CommandResult, Executor, TmuxExecutor
from .pane import Pane, list_panes
from .parser import PANE_FORMAT, SESSION_FORMAT, parse_sessions
from .session import Session
from .types import SessionInfo

logger = logging.getLogger(__name__)

# stderr fragments meaning "there is simply no server yet"
_NO_SERVER_MARKERS = ("no server running", "error connecting to")


class Server:
    """
    Handle on one tmux server.

    Sessions, windows and panes issue their commands through the server they
    are bound to, so the socket choice is made once, here.
    """

    def __init__(
        self,
        executor: Optional[Executor] = None,
        socket_name: Optional[str] = None,
        socket_path: Optional[str] = None,
    ):
        """
        Initialize server handle.

        Args:
            executor: Executor to run tmux with. Defaults to a TmuxExecutor
                bound to the given socket.
            socket_name: Server socket name (``tmux -L``).
            socket_path: Server socket path (``tmux -S``).
        """
        self.socket_name = socket_name
        self.socket_path = socket_path
        self.executor = executor or TmuxExecutor(socket_name=socket_name, socket_path=socket_path)

    def __repr__(self) -> str:
        socket = self.socket_path or self.socket_name or "default"
        return f"Server(socket={socket!r}, executor={self.executor.name!r})"

    def cmd(self, *args: str, foreground: bool = False) -> CommandResult:
        """Run a tmux command and return its captured result."""
        return self.executor.execute(list(args), foreground=foreground)

    def run(self, *args: str) -> str:
        """
        Run a tmux command and return its stdout.

        Raises:
            CommandError: If tmux exits unsuccessfully.
        """
        return self.cmd(*args).check().stdout

    def new_session(self, name: str, *extra_args: str) -> Session:
        """
        Create a detached session.

        tmux creates the session together with one window and one pane; the
        returned Session already holds both.

        Args:
            name: Session name.
            *extra_args: Additional new-session flags
                (e.g. "-n", window_name, "-c", path).

        Returns:
            Realized session.
        """
        output = self.run("new-session", "-d", "-s", name, "-P", "-F", PANE_FORMAT, *extra_args)
        session = Session.from_creation_output(output, self)
        logger.info(f"Session created: {session.name} (${session.id})")
        return session

    def has_session(self, name: str) -> bool:
        return self.cmd("has-session", "-t", f"={name}").ok

    def kill_session(self, name: str) -> None:
        self.run("kill-session", "-t", f"={name}")
        logger.info(f"Session killed: {name}")

    def attach_session(self, name: str) -> None:
        Session(name=name, server=self).attach_session()

    def list_sessions(self) -> list[SessionInfo]:
        """
        List sessions on this server.

        Returns an empty list when no server is running.
        """
        result = self.cmd("list-sessions", "-F", SESSION_FORMAT)
        if not result.ok:
            if any(marker in result.stderr for marker in _NO_SERVER_MARKERS):
                logger.debug("No tmux server running")
                return []
            raise result.error
        return parse_sessions(result.stdout)

    def list_panes(self) -> list[Pane]:
        """Every pane on the server."""
        return list_panes(self, "-a")
