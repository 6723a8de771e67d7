"""
Base executor interface for tmuxflow.

Every tmux invocation made by the entity models goes through an Executor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..errors import CommandError


@dataclass
class CommandResult:
    """Captured outcome of one tmux invocation."""

    args: list[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error(self) -> Optional[CommandError]:
        """CommandError describing the failure, or None on success."""
        if self.ok:
            return None
        return CommandError(self.args, self.stderr, self.returncode)

    def check(self) -> "CommandResult":
        """Raise the failure if there is one, else return self."""
        error = self.error
        if error is not None:
            raise error
        return self


class Executor(ABC):
    """Abstract base class for tmux command executors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Executor name."""
        pass

    @abstractmethod
    def execute(self, args: Sequence[str], foreground: bool = False) -> CommandResult:
        """
        Run a tmux command.

        Args:
            args: tmux arguments, without the binary (e.g. ["list-panes", "-a"]).
            foreground: Hand the terminal to tmux instead of capturing output.
                Used by ``attach-session``.

        Returns:
            CommandResult with captured stdout/stderr and the return code.
        """
        pass
