"""Shared fixtures: an in-memory tmux that records every call."""

from typing import Optional, Sequence

import pytest

from tmuxflow import Server
from tmuxflow.executors import CommandResult, Executor
from tmuxflow.parser import format_pane_line
from tmuxflow.types import PaneInfo


def _opt(args: Sequence[str], flag: str) -> Optional[str]:
    """Value following a flag in an argument list."""
    for i, arg in enumerate(args[:-1]):
        if arg == flag:
            return args[i + 1]
    return None


class FakeTmux(Executor):
    """
    Minimal stand-in for a tmux server.

    Keeps sessions, windows and panes in memory, prints creation and listing
    output in PANE_FORMAT, and records each call as (args, foreground).
    """

    @property
    def name(self) -> str:
        return "fake"

    def __init__(self, default_window_name: str = "zsh"):
        self.default_window_name = default_window_name
        self.sessions: list[dict] = []
        self.calls: list[tuple[list[str], bool]] = []
        self.failures: dict[str, dict] = {}
        self.captures: dict[str, str] = {}
        self.current_path = "/home/user\n"
        self._next_session = 0
        self._next_window = 0
        self._next_pane = 0

    # test helpers

    def fail(self, subcommand: str, stderr: str, returncode: int = 1, effect: bool = False):
        """Make every call of ``subcommand`` fail; ``effect`` still applies the change."""
        self.failures[subcommand] = {"stderr": stderr, "returncode": returncode, "effect": effect}

    def commands(self, subcommand: Optional[str] = None) -> list[list[str]]:
        return [args for args, _ in self.calls if subcommand is None or args[0] == subcommand]

    def find_session(self, name: str) -> Optional[dict]:
        name = name.lstrip("=")
        for session in self.sessions:
            if session["name"] == name:
                return session
        return None

    def find_window(self, target: str) -> Optional[dict]:
        session_name, _, window_name = target.partition(":")
        session = self.find_session(session_name)
        if session is None:
            return None
        for window in session["windows"]:
            if window["name"] == window_name or str(window["index"]) == window_name:
                return window
        return None

    # tmux behaviour

    def _new_pane(self, window: dict) -> dict:
        for pane in window["panes"]:
            pane["active"] = False
        pane = {"id": self._next_pane, "index": len(window["panes"]), "active": True}
        self._next_pane += 1
        window["panes"].append(pane)
        return pane

    def _new_window(self, session: dict, name: str) -> dict:
        window = {
            "id": self._next_window,
            "name": name,
            "index": len(session["windows"]),
            "panes": [],
        }
        self._next_window += 1
        session["windows"].append(window)
        self._new_pane(window)
        return window

    def _line(self, session: dict, window: dict, pane: dict) -> str:
        return format_pane_line(PaneInfo(
            session_id=session["id"],
            session_name=session["name"],
            window_id=window["id"],
            window_name=window["name"],
            window_index=window["index"],
            pane_id=pane["id"],
            active=pane["active"],
            pane_index=pane["index"],
        ))

    def _lines(self, session: dict, windows: list[dict]) -> list[str]:
        return [self._line(session, w, p) for w in windows for p in w["panes"]]

    def _dispatch(self, args: list[str]) -> CommandResult:
        sub = args[0]
        ok = CommandResult(args=args)

        if sub == "new-session":
            name = _opt(args, "-s")
            if self.find_session(name):
                return CommandResult(args=args, stderr=f"duplicate session: {name}\n", returncode=1)
            session = {"id": self._next_session, "name": name, "windows": []}
            self._next_session += 1
            self.sessions.append(session)
            window = self._new_window(session, _opt(args, "-n") or self.default_window_name)
            return CommandResult(args=args, stdout=self._line(session, window, window["panes"][0]) + "\n")

        if sub == "new-window":
            session = self.find_session(_opt(args, "-t").rstrip(":"))
            if session is None:
                return CommandResult(args=args, stderr="can't find session\n", returncode=1)
            window = self._new_window(session, _opt(args, "-n") or self.default_window_name)
            return CommandResult(args=args, stdout=self._line(session, window, window["panes"][0]) + "\n")

        if sub == "split-window":
            window = self.find_window(_opt(args, "-t"))
            if window is None:
                return CommandResult(args=args, stderr="can't find window\n", returncode=1)
            self._new_pane(window)
            return ok

        if sub == "list-panes":
            if "-a" in args:
                lines = [l for s in self.sessions for l in self._lines(s, s["windows"])]
            elif "-s" in args:
                session = self.find_session(_opt(args, "-t"))
                if session is None:
                    return CommandResult(args=args, stderr="can't find session\n", returncode=1)
                lines = self._lines(session, session["windows"])
            else:
                target = _opt(args, "-t")
                window = self.find_window(target)
                if window is None:
                    return CommandResult(args=args, stderr=f"can't find window: {target}\n", returncode=1)
                session = self.find_session(target.partition(":")[0])
                lines = self._lines(session, [window])
            return CommandResult(args=args, stdout="".join(l + "\n" for l in lines))

        if sub == "list-sessions":
            if not self.sessions:
                return CommandResult(args=args, stderr="no server running on /tmp/tmux-0/default\n", returncode=1)
            out = "".join(f"${s['id']}:{s['name']}:{len(s['windows'])}:0\n" for s in self.sessions)
            return CommandResult(args=args, stdout=out)

        if sub == "has-session":
            if self.find_session(_opt(args, "-t")) is None:
                return CommandResult(args=args, stderr="can't find session\n", returncode=1)
            return ok

        if sub == "kill-session":
            session = self.find_session(_opt(args, "-t"))
            if session is None:
                return CommandResult(args=args, stderr="can't find session\n", returncode=1)
            self.sessions.remove(session)
            return ok

        if sub == "capture-pane":
            return CommandResult(args=args, stdout=self.captures.get(_opt(args, "-t"), ""))

        if sub == "display-message":
            return CommandResult(args=args, stdout=self.current_path)

        # select-layout, select-window, select-pane, send-keys, pipe-pane,
        # attach-session, switch-client
        return ok

    def execute(self, args: Sequence[str], foreground: bool = False) -> CommandResult:
        args = [str(a) for a in args]
        self.calls.append((args, foreground))

        failure = self.failures.get(args[0])
        if failure is not None:
            if failure["effect"]:
                self._dispatch(args)
            return CommandResult(args=args, stderr=failure["stderr"], returncode=failure["returncode"])

        return self._dispatch(args)


@pytest.fixture
def fake_tmux():
    return FakeTmux()


@pytest.fixture
def server(fake_tmux):
    return Server(executor=fake_tmux)


@pytest.fixture(autouse=True)
def outside_tmux(monkeypatch):
    """Tests run as if launched from a plain terminal."""
    monkeypatch.delenv("TMUX", raising=False)
    for var in ("TMUXFLOW_TMUX_BINARY", "TMUXFLOW_SOCKET_NAME", "TMUXFLOW_SOCKET_PATH", "TMUXFLOW_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
