"""
Declarative session setup.

A Configuration lists the sessions, windows and pane counts wanted on a
server; ``apply()`` creates them in order.

Usage:
    from tmuxflow import Configuration, Server, Session, Window

    editor = Window(name="editor", layout="main-vertical")
    editor.add_pane()
    editor.add_pane()

    dev = Session(name="dev", start_directory="/srv/app")
    dev.add_window(editor)
    dev.add_window(Window(name="logs"))

    config = Configuration(server=Server(), sessions=[dev], active_session=dev)
    config.apply()

    dev.windows[0].panes[1].run_command("make watch")
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .errors import EmptySessionError, NoServerError, NoSessionsError, RealizationError
from .server import Server
from .session import Session
from .window import Window

logger = logging.getLogger(__name__)


@dataclass
class Configuration:
    """
    Sessions to create on a server.

    ``apply()`` stops at the first failure and does not roll back: whatever
    was created before it stays created, and the declared objects reflect
    exactly how far it got.
    """

    server: Optional[Server] = None
    sessions: list[Session] = field(default_factory=list)
    active_session: Optional[Session] = None  # attached after creation, None leaves all detached

    def validate(self) -> None:
        """
        Check the configuration before touching tmux.

        Raises:
            NoServerError: If no server is set.
            NoSessionsError: If no session is declared.
            EmptySessionError: If a session declares no window.
            RealizationError: If a session or window is already realized or
                declared twice, as when a configuration is applied again.
        """
        if self.server is None:
            raise NoServerError()
        if not self.sessions:
            raise NoSessionsError()

        seen = set()
        for session in self.sessions:
            if not session.windows:
                raise EmptySessionError(session.name)
            for entity in [session, *session.windows]:
                kind = type(entity).__name__
                if entity.is_realized:
                    raise RealizationError(f"{kind} {entity.name!r} is already realized with id {entity.id}")
                if id(entity) in seen:
                    raise RealizationError(f"{kind} {entity.name!r} is declared more than once")
                seen.add(id(entity))

    def apply(self) -> None:
        """
        Create every declared session, window and pane.

        Existing sessions or windows with the same names are not detected;
        tmux decides what happens to them.

        Raises:
            ConfigurationError: If validation fails; nothing is created.
            RealizationError: If the configuration was already applied;
                nothing is created.
            CommandError: If a tmux command fails; earlier work is kept.
            ParseError: If tmux output cannot be parsed.
        """
        self.validate()

        for index, session in enumerate(self.sessions):
            self.sessions[index] = self._apply_session(session)

        logger.info(f"Configuration applied: {len(self.sessions)} session(s)")

    def _apply_session(self, session: Session) -> Session:
        # tmux creates the first window itself, so it is named at creation
        initial_window = session.windows[0]

        extra_args = ["-n", initial_window.name]
        if session.start_directory:
            extra_args.extend(["-c", session.start_directory])

        created = self.server.new_session(session.name, *extra_args)
        session.server = self.server
        session._realize(created.name, created.id)

        if session is self.active_session:
            session.attach_session()

        implicit_window_id = created.windows[0].id if created.windows else 0

        windows = []
        for window in session.windows:
            if not window.start_directory and session.start_directory:
                window.start_directory = session.start_directory
            window.server = self.server

            if window.name == initial_window.name:
                window._realize(initial_window.name, implicit_window_id)
            else:
                extra_args = []
                if window.start_directory:
                    extra_args.extend(["-c", window.start_directory])
                created_window = session.new_window(window.name, *extra_args)
                window._realize(created_window.name, created_window.id)

            window.session_name = session.name
            window.session_id = session.id

            self._apply_panes(window)

            if window.layout is not None:
                window.select_layout()

            windows.append(window)

        session.windows = windows
        return session

    def _apply_panes(self, window: Window) -> None:
        desired = len(window.panes)

        # picks up the pane tmux created along with the window
        window.panes = window.list_panes()

        for index in range(1, desired):
            window.panes[index] = window.split_pane()

        logger.debug(f"Window {window.target} has {len(window.panes)} pane(s)")
