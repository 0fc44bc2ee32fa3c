"""Multiplex dispatch: exec in place, attach a session, or open windows/panes."""

from __future__ import annotations

import logging as py_logging
from dataclasses import dataclass

from sshmux.config import DEFAULT_SESSION_NAME
from sshmux.errors import (
    MultiHostRequiresMultiplexer,
    MultiHostRequiresSession,
    MultiplexerCommandFailed,
    NoHostsSelected,
)
from sshmux.process import ExecRequest
from sshmux.tmux.client import TmuxClient
from sshmux.tmux.commands import new_session_cmd, new_window_cmd
from sshmux.tmux.modes import OpenMode
from sshmux.tmux.names import group_window_name
from sshmux.tmux.onewindow import OneWindowOptions, open_one_window
from sshmux.tmux.panes import PaneSettings

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    opened: int
    message: str


def _open_windows(
    hosts: list[str],
    ssh_cmds: list[list[str]],
    *,
    group_name: str,
    client: TmuxClient,
) -> DispatchResult:
    total = len(ssh_cmds)
    for index, ssh_cmd in enumerate(ssh_cmds):
        name = group_window_name(hosts[index : index + 1], group_name)
        try:
            client.structural(*new_window_cmd(name, ssh_cmd)[1:])
        except MultiplexerCommandFailed as exc:
            exc.opened = index
            if index:
                exc.hint = f"Opened {index} of {total} windows before the failure."
            raise
    return DispatchResult(opened=total, message=f"opened {total}")


def check_host_count(count: int, mode: OpenMode, *, in_multiplexer: bool) -> None:
    """Reject host counts the chosen mode cannot open, before any command is built."""
    if count < 1:
        raise NoHostsSelected()
    if count > 1 and mode == OpenMode.CURRENT:
        raise MultiHostRequiresMultiplexer()
    if count > 1 and not in_multiplexer:
        raise MultiHostRequiresSession()


def dispatch(
    hosts: list[str],
    ssh_cmds: list[list[str]],
    mode: OpenMode,
    *,
    in_multiplexer: bool,
    pane_settings: PaneSettings,
    group_name: str = "",
    session_name: str = DEFAULT_SESSION_NAME,
    window_per_host: bool = False,
    client: TmuxClient | None = None,
) -> ExecRequest | DispatchResult:
    """Carry out an open-mode decision for compiled ssh commands.

    Returns an ``ExecRequest`` when the caller must replace its own process
    (current terminal, or a new/attached session from outside tmux), else a
    ``DispatchResult`` once the windows or panes exist.
    """
    if not hosts or not ssh_cmds:
        raise NoHostsSelected()
    if len(hosts) != len(ssh_cmds):
        raise ValueError(f"hosts/commands mismatch: {len(hosts)} hosts, {len(ssh_cmds)} commands")

    count = len(ssh_cmds)
    logger.debug(
        "Dispatching hosts=%s mode=%s in_tmux=%s window_per_host=%s",
        count,
        mode.value,
        in_multiplexer,
        window_per_host,
    )

    check_host_count(count, mode, in_multiplexer=in_multiplexer)
    if mode == OpenMode.CURRENT:
        return ExecRequest(argv=list(ssh_cmds[0]))

    if not in_multiplexer:
        return ExecRequest(argv=new_session_cmd(session_name, ssh_cmds[0]))

    tmux = client or TmuxClient()
    if mode == OpenMode.PANE or (mode == OpenMode.WINDOW and count > 1 and not window_per_host):
        options = OneWindowOptions.from_pane_settings(
            group_window_name(hosts, group_name),
            hosts,
            pane_settings,
        )
        try:
            opened = open_one_window(ssh_cmds, options, client=tmux)
        except MultiplexerCommandFailed as exc:
            if exc.opened:
                exc.hint = f"Opened {exc.opened} of {count} panes before the failure."
            raise
        return DispatchResult(opened=opened, message=f"opened {opened} in one window")

    return _open_windows(hosts, ssh_cmds, group_name=group_name, client=tmux)
