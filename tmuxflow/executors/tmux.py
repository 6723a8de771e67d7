"""
Subprocess executor for tmuxflow.

Runs the tmux binary, optionally pinned to a specific server socket.
"""

import logging
import subprocess
from typing import Optional, Sequence

from .base import CommandResult, Executor

logger = logging.getLogger(__name__)


class TmuxExecutor(Executor):
    """Executor that shells out to the tmux binary."""

    @property
    def name(self) -> str:
        return "tmux"

    def __init__(
        self,
        binary: str = "tmux",
        socket_name: Optional[str] = None,
        socket_path: Optional[str] = None,
    ):
        """
        Initialize tmux executor.

        Args:
            binary: tmux executable name or path.
            socket_name: Server socket name (``tmux -L``).
            socket_path: Server socket path (``tmux -S``), wins over socket_name.
        """
        self.binary = binary
        self.socket_name = socket_name
        self.socket_path = socket_path

    def build_command(self, args: Sequence[str]) -> list[str]:
        """Full argv for a tmux invocation."""
        cmd = [self.binary]
        if self.socket_path:
            cmd.extend(["-S", self.socket_path])
        elif self.socket_name:
            cmd.extend(["-L", self.socket_name])
        cmd.extend(args)
        return cmd

    def execute(self, args: Sequence[str], foreground: bool = False) -> CommandResult:
        args = [str(a) for a in args]
        cmd = self.build_command(args)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            if foreground:
                proc = subprocess.run(cmd)
                result = CommandResult(args=args, returncode=proc.returncode)
            else:
                proc = subprocess.run(cmd, capture_output=True, text=True)
                result = CommandResult(
                    args=args,
                    stdout=proc.stdout,
                    stderr=proc.stderr,
                    returncode=proc.returncode,
                )
        except FileNotFoundError:
            result = CommandResult(
                args=args,
                stderr=f"{self.binary}: command not found",
                returncode=127,
            )

        if not result.ok:
            logger.warning(f"tmux command failed: {' '.join(cmd)}: {result.stderr.strip()}")

        return result
