"""
tmuxflow exceptions.

PUBLIC API:
  - TmuxflowError: Base exception for all tmuxflow operations
  - ConfigurationError: Declared configuration cannot be applied
  - NoServerError: Configuration has no server
  - NoSessionsError: Configuration declares no sessions
  - EmptySessionError: A declared session has no windows
  - CommandError: A tmux command failed
  - ParseError: tmux output could not be parsed
  - RealizationError: Entity promoted to realized twice
  - WorkspaceError: Workspace document is malformed
"""

from typing import Optional, Sequence


class TmuxflowError(Exception):
    """Base exception for all tmuxflow operations."""

    pass


class ConfigurationError(TmuxflowError):
    """Raised before any tmux call when a configuration is invalid."""

    pass


class NoServerError(ConfigurationError):
    def __init__(self):
        super().__init__("Server was not initialized")


class NoSessionsError(ConfigurationError):
    def __init__(self):
        super().__init__("Required at least one tmux session to apply configuration")


class EmptySessionError(ConfigurationError):
    """Raised when a declared session contains no windows."""

    def __init__(self, session_name: str):
        self.session_name = session_name
        super().__init__(f"Session {session_name} doesn't contain any windows")


class CommandError(TmuxflowError):
    """
    Raised when a tmux command exits unsuccessfully.

    The captured stderr is kept verbatim so the underlying tmux complaint
    reaches the operator untouched.
    """

    def __init__(self, args: Sequence[str], stderr: str = "", returncode: Optional[int] = None):
        self.command = list(args)
        self.stderr = stderr
        self.returncode = returncode
        subcommand = self.command[0] if self.command else "command"
        super().__init__(f"tmux {subcommand} failed: {stderr.strip()}")


class ParseError(TmuxflowError, ValueError):
    """Raised when a well-shaped listing line carries a non-numeric id."""

    def __init__(self, line: str, reason: str = ""):
        self.line = line
        message = f"Cannot parse tmux output line {line!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RealizationError(TmuxflowError):
    """Raised when an already realized entity is promoted again."""

    pass


class WorkspaceError(TmuxflowError):
    """Raised when a workspace document cannot be turned into a configuration."""

    pass
