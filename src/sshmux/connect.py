"""Connection service: resolve, compile, pick an open mode, dispatch."""

from __future__ import annotations

import logging as py_logging

from pydantic import BaseModel, ConfigDict, Field

from sshmux.config import AppConfig, GroupOverride, find_host_override
from sshmux.dispatch import DispatchResult, check_host_count, dispatch
from sshmux.errors import NoHostsSelected
from sshmux.process import ExecRequest
from sshmux.ssh.command import build_ssh_command
from sshmux.ssh.settings import one_shot, resolve_settings
from sshmux.tmux.client import TmuxClient
from sshmux.tmux.modes import OpenMode, in_tmux, resolve_open_mode
from sshmux.tmux.panes import resolve_pane_settings

logger = py_logging.getLogger(__name__)


class ConnectRequest(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    hosts: list[str]
    group: GroupOverride | None = None
    remote_command: str = ""
    keep_open: bool = False
    no_tmux: bool = False
    in_multiplexer: bool = Field(default_factory=lambda: in_tmux())
    window_per_host: bool | None = None


def build_commands(
    config: AppConfig,
    hosts: list[str],
    group: GroupOverride | None = None,
    *,
    remote_command: str = "",
    keep_open: bool = False,
) -> list[list[str]]:
    commands: list[list[str]] = []
    for host in hosts:
        settings = resolve_settings(
            config.defaults,
            find_host_override(config, host),
            group,
            remote_command=remote_command,
        )
        if keep_open and remote_command.strip():
            settings = one_shot(settings)
        commands.append(build_ssh_command(host, settings))
    return commands


def resolve_policies(
    config: AppConfig,
    group: GroupOverride | None = None,
    *,
    no_tmux: bool = False,
) -> tuple[str, str]:
    tmux_policy = config.defaults.tmux
    open_mode_policy = config.defaults.open_mode
    if group is not None:
        if group.tmux.strip():
            tmux_policy = group.tmux
        if group.open_mode.strip():
            open_mode_policy = group.open_mode
    if no_tmux:
        tmux_policy = "never"
    return tmux_policy, open_mode_policy


def resolve_mode(config: AppConfig, request: ConnectRequest) -> OpenMode:
    tmux_policy, open_mode_policy = resolve_policies(config, request.group, no_tmux=request.no_tmux)
    return resolve_open_mode(tmux_policy, open_mode_policy, request.in_multiplexer)


def connect(
    config: AppConfig,
    request: ConnectRequest,
    *,
    client: TmuxClient | None = None,
) -> ExecRequest | DispatchResult:
    hosts = [host.strip() for host in request.hosts if host.strip()]
    if not hosts:
        raise NoHostsSelected()

    mode = resolve_mode(config, request)
    check_host_count(len(hosts), mode, in_multiplexer=request.in_multiplexer)
    ssh_cmds = build_commands(
        config,
        hosts,
        request.group,
        remote_command=request.remote_command,
        keep_open=request.keep_open,
    )
    window_per_host = (
        config.defaults.window_per_host if request.window_per_host is None else request.window_per_host
    )
    logger.info(
        "Connecting hosts=%s group=%s mode=%s in_tmux=%s",
        len(hosts),
        request.group.name if request.group is not None else "",
        mode.value,
        request.in_multiplexer,
    )
    return dispatch(
        hosts,
        ssh_cmds,
        mode,
        in_multiplexer=request.in_multiplexer,
        pane_settings=resolve_pane_settings(config.defaults, request.group, len(ssh_cmds)),
        group_name=request.group.name if request.group is not None else "",
        session_name=config.defaults.tmux_session,
        window_per_host=window_per_host,
        client=client,
    )
