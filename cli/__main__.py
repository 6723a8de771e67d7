#!/usr/bin/env python3
"""
tmuxflow CLI - Declarative tmux session setup.

Usage:
    tmuxflow apply <workspace.json> [--json]
    tmuxflow ls [--json]
    tmuxflow panes [-t <session:window> | -s <session>] [--json]
    tmuxflow attach <session>
    tmuxflow capture <session:window.pane>
    tmuxflow send <session:window.pane> <command>
    tmuxflow config [show|init|path|set]
    tmuxflow --version
    tmuxflow --help
"""

import argparse
import json
import logging
import sys

from tmuxflow import (
    Pane,
    Server,
    TmuxflowConfig,
    TmuxflowError,
    __version__,
    get_config_path,
    list_panes,
    load_config,
    load_workspace,
    save_config,
)


def setup_logging(config: TmuxflowConfig, verbose: bool = False):
    """Configure root logging from settings."""
    level = logging.DEBUG if verbose else getattr(logging, config.log.level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )


def get_server(args, config: TmuxflowConfig) -> Server:
    """Create Server from config, CLI socket flags taking precedence."""
    if args.socket_name:
        config.tmux.socket_name = args.socket_name
    if args.socket_path:
        config.tmux.socket_path = args.socket_path
    return config.tmux.create_server()


def pane_from_selector(selector: str, server: Server) -> Pane:
    """Build a Pane from a session:window.pane selector."""
    session, sep, rest = selector.partition(":")
    if not sep or not session:
        raise TmuxflowError(f"Invalid pane selector {selector!r}, expected session:window.pane")
    window, _, index = rest.rpartition(".")
    if not window or not index.isdigit():
        raise TmuxflowError(f"Invalid pane selector {selector!r}, expected session:window.pane")
    return Pane(session_name=session, window_name=window, index=int(index), server=server)


def pane_to_dict(pane: Pane) -> dict:
    return {
        "selector": pane.selector,
        "id": pane.id,
        "session": {"id": pane.session_id, "name": pane.session_name},
        "window": {"id": pane.window_id, "name": pane.window_name, "index": pane.window_index},
        "index": pane.index,
        "active": pane.active,
    }


def cmd_apply(args, config: TmuxflowConfig):
    """Create the sessions declared in a workspace file."""
    try:
        configuration = load_workspace(args.workspace, get_server(args, config))
        configuration.apply()

        result = {"status": "applied", "sessions": []}
        for session in configuration.sessions:
            result["sessions"].append({
                "name": session.name,
                "id": session.id,
                "windows": [
                    {
                        "name": window.name,
                        "id": window.id,
                        "layout": window.layout.value if window.layout else None,
                        "panes": [pane.selector for pane in window.panes],
                    }
                    for window in session.windows
                ],
            })

        if args.json:
            print(json.dumps(result, indent=2))
        else:
            for s in result["sessions"]:
                print(f"Session {s['name']} (${s['id']})")
                for w in s["windows"]:
                    layout = f", layout={w['layout']}" if w["layout"] else ""
                    print(f"  {w['name']} (@{w['id']}): {len(w['panes'])} pane(s){layout}")

        return 0

    except TmuxflowError as e:
        if args.json:
            print(json.dumps({"status": "error", "message": str(e)}))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_ls(args, config: TmuxflowConfig):
    """List sessions."""
    try:
        sessions = get_server(args, config).list_sessions()

        if args.json:
            print(json.dumps({"sessions": [
                {
                    "id": s.session_id,
                    "name": s.session_name,
                    "windows": s.windows,
                    "attached": s.is_attached,
                }
                for s in sessions
            ]}, indent=2))
        elif not sessions:
            print("No sessions")
        else:
            for s in sessions:
                attached = " (attached)" if s.is_attached else ""
                print(f"{s.session_name}: {s.windows} window(s){attached}")

        return 0

    except TmuxflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_panes(args, config: TmuxflowConfig):
    """List panes of the server, a session or a window."""
    try:
        server = get_server(args, config)
        if args.target:
            panes = list_panes(server, "-t", args.target)
        elif args.session:
            panes = list_panes(server, "-s", "-t", args.session)
        else:
            panes = server.list_panes()

        if args.json:
            print(json.dumps({"panes": [pane_to_dict(p) for p in panes]}, indent=2))
        else:
            for p in panes:
                active = " *" if p.active else ""
                print(f"{p.selector}  %{p.id}{active}")

        return 0

    except TmuxflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_attach(args, config: TmuxflowConfig):
    """Attach to (or switch to) a session."""
    try:
        get_server(args, config).attach_session(args.session)
        return 0
    except TmuxflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_capture(args, config: TmuxflowConfig):
    """Print the visible contents of a pane."""
    try:
        pane = pane_from_selector(args.selector, get_server(args, config))
        sys.stdout.write(pane.capture())
        return 0
    except TmuxflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_send(args, config: TmuxflowConfig):
    """Type a command into a pane."""
    try:
        pane = pane_from_selector(args.selector, get_server(args, config))
        pane.run_command(" ".join(args.text))
        return 0
    except TmuxflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_config(args, config: TmuxflowConfig):
    """Configuration management."""
    config_path = get_config_path()

    if args.config_action == "path":
        print(config_path)

    elif args.config_action == "show":
        print(json.dumps(config.to_dict(), indent=2))

    elif args.config_action == "init":
        if config_path.exists() and not args.force:
            print(f"Config already exists: {config_path}")
            print("Use --force to overwrite")
        else:
            save_config(TmuxflowConfig(), config_path)
            print(f"Created: {config_path}")

    elif args.config_action == "set":
        if not args.key or args.value is None:
            print("Usage: tmuxflow config set --key <key> --value <value>")
            print("Examples:")
            print("  tmuxflow config set --key tmux.socket_name --value work")
            print("  tmuxflow config set --key log.level --value DEBUG")
            return 1

        # Parse key path (e.g., "tmux.binary")
        parts = args.key.split(".")
        if len(parts) != 2:
            print("Key must be in format: section.field (e.g., tmux.binary)")
            return 1

        section, field = parts
        # saved file must not pick up TMUXFLOW_* overrides
        data = load_config(apply_env=False).to_dict()

        if section not in data:
            print(f"Unknown section: {section}")
            return 1
        if field not in data[section]:
            print(f"Unknown field: {field} in section {section}")
            return 1

        data[section][field] = args.value
        save_config(TmuxflowConfig.from_dict(data), config_path)
        print(f"Set {args.key} = {args.value}")

    else:
        print("Usage: tmuxflow config [show|init|path|set]")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmuxflow",
        description="Declarative tmux session setup"
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-L", "--socket-name", help="tmux server socket name (overrides config)")
    parser.add_argument("-S", "--socket-path", help="tmux server socket path (overrides config)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # apply
    p_apply = subparsers.add_parser("apply", help="Create sessions from a workspace file")
    p_apply.add_argument("workspace", help="Workspace JSON file")
    p_apply.add_argument("-j", "--json", action="store_true", help="JSON output")

    # ls
    p_ls = subparsers.add_parser("ls", help="List sessions")
    p_ls.add_argument("-j", "--json", action="store_true", help="JSON output")

    # panes
    p_panes = subparsers.add_parser("panes", help="List panes")
    scope = p_panes.add_mutually_exclusive_group()
    scope.add_argument("-t", "--target", help="Window target (session:window)")
    scope.add_argument("-s", "--session", help="Session name")
    p_panes.add_argument("-j", "--json", action="store_true", help="JSON output")

    # attach
    p_attach = subparsers.add_parser("attach", help="Attach to a session")
    p_attach.add_argument("session", help="Session name")

    # capture
    p_capture = subparsers.add_parser("capture", help="Print pane contents")
    p_capture.add_argument("selector", help="Pane (session:window.pane)")

    # send
    p_send = subparsers.add_parser("send", help="Run a command in a pane")
    p_send.add_argument("selector", help="Pane (session:window.pane)")
    p_send.add_argument("text", nargs="+", help="Command to type")

    # config
    p_config = subparsers.add_parser("config", help="Configuration management")
    p_config.add_argument("config_action", nargs="?", default="show",
                          choices=["show", "init", "path", "set"])
    p_config.add_argument("--key", help="Config key (e.g., tmux.socket_name)")
    p_config.add_argument("--value", help="Config value")
    p_config.add_argument("--force", action="store_true", help="Force overwrite")

    return parser


def main(argv=None):
    """CLI entry point."""
    # Load config first
    config = load_config()

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(config, args.verbose)

    if args.command == "apply":
        return cmd_apply(args, config)
    elif args.command == "ls":
        return cmd_ls(args, config)
    elif args.command == "panes":
        return cmd_panes(args, config)
    elif args.command == "attach":
        return cmd_attach(args, config)
    elif args.command == "capture":
        return cmd_capture(args, config)
    elif args.command == "send":
        return cmd_send(args, config)
    elif args.command == "config":
        return cmd_config(args, config)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
