"""
Parsing of tmux listing output.

Every listing query asks tmux for a fixed, colon-joined field template and
this module turns the lines back into records. The template is chosen here so
that call sites never split strings themselves.

Names are matched greedily, so a name may contain ``:`` as long as the
remaining fields can still be placed. A name that contains a full
``:@<id>:`` style fragment can still confuse the match; that collision is a
known limit of the textual protocol.
"""

import logging
import re
from typing import Optional

from .errors import ParseError
from .types import PaneInfo, SessionInfo

logger = logging.getLogger(__name__)

FIELD_SEP = ":"

PANE_FORMAT = FIELD_SEP.join([
    "#{session_id}",
    "#{session_name}",
    "#{window_id}",
    "#{window_name}",
    "#{window_index}",
    "#{pane_id}",
    "#{pane_active}",
    "#{pane_index}",
])

SESSION_FORMAT = FIELD_SEP.join([
    "#{session_id}",
    "#{session_name}",
    "#{session_windows}",
    "#{session_attached}",
])

# Numeric fields are matched loosely and validated with int() so that a
# well-shaped line with a bad id fails loudly instead of being skipped.
_PANE_RE = re.compile(
    r"^\$([^:]*):(.+):@([^:]*):(.+):([^:]*):%([^:]*):([01]):([^:]*)$"
)
_SESSION_RE = re.compile(r"^\$([^:]*):(.+):([^:]*):([^:]*)$")


def _to_int(value: str, line: str, field: str) -> int:
    # tmux ids and counts are unsigned ASCII digits
    if not (value.isascii() and value.isdigit()):
        raise ParseError(line, f"{field} is not an integer: {value!r}")
    return int(value)


def parse_pane_line(line: str) -> Optional[PaneInfo]:
    """
    Parse a single pane listing line.

    Returns:
        PaneInfo, or None if the line does not have the pane shape.

    Raises:
        ParseError: If the shape matches but a numeric field is malformed.
    """
    match = _PANE_RE.match(line.rstrip("\r\n"))
    if match is None:
        return None

    (session_id, session_name, window_id, window_name,
     window_index, pane_id, active, pane_index) = match.groups()

    return PaneInfo(
        session_id=_to_int(session_id, line, "session id"),
        session_name=session_name,
        window_id=_to_int(window_id, line, "window id"),
        window_name=window_name,
        window_index=_to_int(window_index, line, "window index"),
        pane_id=_to_int(pane_id, line, "pane id"),
        active=active == "1",
        pane_index=_to_int(pane_index, line, "pane index"),
    )


def parse_panes(output: str) -> list[PaneInfo]:
    """
    Parse the output of ``list-panes -F PANE_FORMAT``.

    Lines without the pane shape (blank trailing lines, noise) are skipped.
    A malformed numeric field aborts the whole parse.

    Args:
        output: Raw stdout from tmux.

    Returns:
        PaneInfo records in listing order.
    """
    panes = []
    for line in output.split("\n"):
        info = parse_pane_line(line)
        if info is None:
            if line.strip():
                logger.debug(f"Skipping unrecognized pane line: {line!r}")
            continue
        panes.append(info)
    return panes


def parse_sessions(output: str) -> list[SessionInfo]:
    """Parse the output of ``list-sessions -F SESSION_FORMAT``."""
    sessions = []
    for line in output.split("\n"):
        match = _SESSION_RE.match(line.rstrip("\r"))
        if match is None:
            continue
        session_id, name, windows, attached = match.groups()
        sessions.append(SessionInfo(
            session_id=_to_int(session_id, line, "session id"),
            session_name=name,
            windows=_to_int(windows, line, "window count"),
            attached=_to_int(attached, line, "attached count"),
        ))
    return sessions


def format_pane_line(info: PaneInfo) -> str:
    """Render a PaneInfo the way tmux prints it for PANE_FORMAT."""
    return FIELD_SEP.join([
        f"${info.session_id}",
        info.session_name,
        f"@{info.window_id}",
        info.window_name,
        str(info.window_index),
        f"%{info.pane_id}",
        "1" if info.active else "0",
        str(info.pane_index),
    ])
