"""Tests for TmuxExecutor and CommandResult."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from tmuxflow.errors import CommandError
from tmuxflow.executors import CommandResult, TmuxExecutor


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self):
        result = CommandResult(args=["list-panes"], stdout="x\n")
        assert result.ok
        assert result.error is None
        assert result.check() is result

    def test_error_keeps_stderr_verbatim(self):
        result = CommandResult(args=["new-session", "-s", "dev"], stderr="duplicate session: dev\n", returncode=1)

        error = result.error
        assert isinstance(error, CommandError)
        assert error.stderr == "duplicate session: dev\n"
        assert error.returncode == 1
        assert error.command == ["new-session", "-s", "dev"]
        assert str(error) == "tmux new-session failed: duplicate session: dev"

    def test_check_raises(self):
        result = CommandResult(args=["kill-session"], stderr="can't find session", returncode=1)
        with pytest.raises(CommandError):
            result.check()


class TestTmuxExecutor:
    """Tests for TmuxExecutor."""

    def test_init_default(self):
        executor = TmuxExecutor()
        assert executor.name == "tmux"
        assert executor.binary == "tmux"
        assert executor.socket_name is None
        assert executor.socket_path is None

    def test_build_command_plain(self):
        assert TmuxExecutor().build_command(["list-sessions"]) == ["tmux", "list-sessions"]

    def test_build_command_socket_name(self):
        executor = TmuxExecutor(socket_name="work")
        assert executor.build_command(["ls"]) == ["tmux", "-L", "work", "ls"]

    def test_build_command_socket_path_wins(self):
        executor = TmuxExecutor(binary="/usr/bin/tmux", socket_name="work", socket_path="/tmp/t.sock")
        assert executor.build_command(["ls"]) == ["/usr/bin/tmux", "-S", "/tmp/t.sock", "ls"]

    def test_execute_success(self):
        executor = TmuxExecutor()

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="output\n", stderr="")

            result = executor.execute(["list-sessions"])

            assert result.ok
            assert result.stdout == "output\n"
            assert result.args == ["list-sessions"]
            mock_run.assert_called_once_with(["tmux", "list-sessions"], capture_output=True, text=True)

    def test_execute_failure(self):
        executor = TmuxExecutor(socket_name="test")

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="no server running\n")

            result = executor.execute(["list-sessions"])

            assert not result.ok
            assert result.stderr == "no server running\n"
            assert mock_run.call_args[0][0] == ["tmux", "-L", "test", "list-sessions"]

    def test_execute_foreground_does_not_capture(self):
        executor = TmuxExecutor()

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["tmux"], 0)

            result = executor.execute(["attach-session", "-t", "dev"], foreground=True)

            assert result.ok
            mock_run.assert_called_once_with(["tmux", "attach-session", "-t", "dev"])

    def test_execute_missing_binary(self):
        executor = TmuxExecutor(binary="no-such-tmux")

        with patch("subprocess.run", side_effect=FileNotFoundError):
            result = executor.execute(["list-sessions"])

        assert result.returncode == 127
        assert "no-such-tmux" in result.stderr

    def test_execute_stringifies_args(self):
        executor = TmuxExecutor()

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
            executor.execute(["resize-pane", "-x", 80])

            assert mock_run.call_args[0][0] == ["tmux", "resize-pane", "-x", "80"]
