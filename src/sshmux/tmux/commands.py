"""tmux argv builders for window, pane and session creation."""

from __future__ import annotations

from sshmux.config import DEFAULT_SESSION_NAME

TMUX_PROGRAM = "tmux"
DEFAULT_WINDOW_NAME = "ssh"
_SPLIT_FLAGS = {"-h", "-v"}


def normalize_split_flag(split_flag: str) -> str:
    value = split_flag.strip()
    return value if value in _SPLIT_FLAGS else "-h"


def new_window_cmd(name: str, ssh_cmd: list[str]) -> list[str]:
    window = name.strip() or DEFAULT_WINDOW_NAME
    return [TMUX_PROGRAM, "new-window", "-n", window, "--", *ssh_cmd]


def split_pane_cmd(ssh_cmd: list[str], split_flag: str = "-h") -> list[str]:
    return [TMUX_PROGRAM, "split-window", normalize_split_flag(split_flag), "--", *ssh_cmd]


def new_session_cmd(session: str, ssh_cmd: list[str]) -> list[str]:
    # -A attaches when the session already exists.
    name = session.strip() or DEFAULT_SESSION_NAME
    return [TMUX_PROGRAM, "new-session", "-A", "-s", name, "--", *ssh_cmd]
