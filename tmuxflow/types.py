"""
tmuxflow type definitions.

Records parsed from tmux listings and the fixed layout enumeration.
"""

from dataclasses import dataclass
from enum import Enum


class Layout(Enum):
    """Preset pane arrangements understood by ``select-layout``."""

    EVEN_HORIZONTAL = "even-horizontal"
    EVEN_VERTICAL = "even-vertical"
    MAIN_HORIZONTAL = "main-horizontal"
    MAIN_VERTICAL = "main-vertical"
    TILED = "tiled"


@dataclass
class PaneInfo:
    """One line of a pane listing, sigils stripped."""

    session_id: int
    session_name: str
    window_id: int
    window_name: str
    window_index: int
    pane_id: int
    active: bool
    pane_index: int


@dataclass
class SessionInfo:
    """One line of a session listing."""

    session_id: int
    session_name: str
    windows: int = 0
    attached: int = 0

    @property
    def is_attached(self) -> bool:
        return self.attached > 0
