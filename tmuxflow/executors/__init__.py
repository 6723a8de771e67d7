"""
tmuxflow executors.

Executors run tmux commands on behalf of the entity models.
"""

from .base import CommandResult, Executor
from .tmux import TmuxExecutor

__all__ = ["CommandResult", "Executor", "TmuxExecutor"]
