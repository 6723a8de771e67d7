"""
Window operations.

PUBLIC API:
  - Window: A tmux window, owner of an ordered list of panes
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from .entity import Realizable
from .errors import TmuxflowError
from .pane import Pane, list_panes
from .types import Layout, PaneInfo

if TYPE_CHECKING:
    from .server import Server

logger = logging.getLogger(__name__)

# stderr fragment tmux reports when the split target is already in place
SPLIT_ALREADY_EXISTS = "already exists"


@dataclass
class Window(Realizable):
    """
    A tmux window.

    Before a configuration is applied ``panes`` only says how many panes are
    wanted; afterwards it holds the panes tmux actually created.
    """

    name: str = ""
    id: Optional[int] = None
    session_id: Optional[int] = None
    session_name: str = ""
    start_directory: str = ""
    layout: Optional[Layout] = None
    panes: list[Pane] = field(default_factory=list)
    index: Optional[int] = None
    server: Optional["Server"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.layout is not None:
            self.layout = Layout(self.layout)

    @classmethod
    def from_info(cls, info: PaneInfo, server: Optional["Server"] = None) -> "Window":
        """Realized window holding the single pane described by ``info``."""
        return cls(
            name=info.window_name,
            id=info.window_id,
            session_id=info.session_id,
            session_name=info.session_name,
            index=info.window_index,
            panes=[Pane.from_info(info, server)],
            server=server,
        )

    @property
    def target(self) -> str:
        """``session:window`` target used for listing and splitting."""
        return f"{self.session_name}:{self.name}"

    @property
    def selector(self) -> str:
        return f"@{self.id}"

    def _server(self) -> "Server":
        if self.server is None:
            raise TmuxflowError(f"Window {self.target} is not bound to a server")
        return self.server

    def add_pane(self, pane: Optional[Pane] = None) -> None:
        """Declare one more pane. Only changes the in-library representation."""
        self.panes.append(pane if pane is not None else Pane())

    def set_layout(self, layout: Union[Layout, str]) -> None:
        """
        Declare the window layout.

        Raises:
            ValueError: If layout is not one of the Layout values.
        """
        self.layout = Layout(layout)

    def list_panes(self) -> list[Pane]:
        return list_panes(self._server(), "-t", self.target)

    def select(self) -> None:
        """Make this window the current window of its session."""
        self._server().run("select-window", "-t", self.selector)

    def select_layout(self, layout: Union[Layout, str, None] = None) -> None:
        """Apply a layout (the declared one by default) to the live window."""
        layout = Layout(layout) if layout is not None else self.layout
        if layout is None:
            raise TmuxflowError(f"No layout declared for window {self.target}")
        self._server().run("select-layout", "-t", self.selector, layout.value)
        logger.info(f"Layout {layout.value} applied to window {self.target}")

    def split_pane(self) -> Pane:
        """
        Create one more pane in this window.

        A split rejected because the target already exists is tolerated;
        the pane is still picked up from the refreshed listing. Any other
        failure is raised.

        The new pane is taken to be the last one tmux lists for the window,
        which relies on tmux listing panes in creation order.

        Returns:
            The new pane, also appended to ``panes``.

        Raises:
            CommandError: If the split fails for another reason.
        """
        server = self._server()
        args = ["split-window", "-t", self.target]
        if self.start_directory:
            args.extend(["-c", self.start_directory])

        result = server.cmd(*args)
        if not result.ok:
            if SPLIT_ALREADY_EXISTS not in result.stderr:
                raise result.error
            logger.warning(f"Split of {self.target} reported existing target, reusing it")

        panes = self.list_panes()
        if not panes:
            raise TmuxflowError(f"Window {self.target} lists no panes after split")

        pane = panes[-1]
        self.panes.append(pane)
        logger.debug(f"Pane {pane.selector} (id %{pane.id}) created")
        return pane
