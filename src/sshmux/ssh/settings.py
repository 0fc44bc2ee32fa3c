"""Effective SSH settings from the defaults -> host -> group override chain."""

from __future__ import annotations

from dataclasses import dataclass, replace

from sshmux.config import Defaults, GroupOverride, HostOverride


@dataclass(frozen=True)
class Settings:
    user: str = ""
    port: int = 0
    identity_file: str = ""
    extra_args: tuple[str, ...] = ()
    remote_command: str = ""


def from_defaults(defaults: Defaults) -> Settings:
    return Settings(
        user=defaults.user,
        port=defaults.port,
        identity_file=defaults.identity_file,
        extra_args=tuple(defaults.extra_args),
    )


def apply_host(base: Settings, host: HostOverride) -> Settings:
    settings = base
    if host.user.strip():
        settings = replace(settings, user=host.user)
    if host.port:
        settings = replace(settings, port=host.port)
    if host.identity_file.strip():
        settings = replace(settings, identity_file=host.identity_file)
    if host.extra_args:
        settings = replace(settings, extra_args=tuple(host.extra_args))
    return settings


def apply_group(base: Settings, group: GroupOverride) -> Settings:
    settings = base
    if group.user.strip():
        settings = replace(settings, user=group.user)
    if group.port:
        settings = replace(settings, port=group.port)
    if group.identity_file.strip():
        settings = replace(settings, identity_file=group.identity_file)
    if group.extra_args:
        settings = replace(settings, extra_args=tuple(group.extra_args))
    if group.remote_command.strip():
        settings = replace(settings, remote_command=group.remote_command)
    return settings


def resolve_settings(
    defaults: Defaults,
    host: HostOverride | None = None,
    group: GroupOverride | None = None,
    *,
    remote_command: str = "",
) -> Settings:
    """Merge the override chain for one host.

    Empty strings, a zero port and an empty argument list inherit. The group
    step runs after the host step, so a set group field beats a set host field.
    A non-blank ``remote_command`` replaces whatever the group supplied.
    """
    settings = from_defaults(defaults)
    if host is not None:
        settings = apply_host(settings, host)
    if group is not None:
        settings = apply_group(settings, group)
    if remote_command.strip():
        settings = replace(settings, remote_command=remote_command)
    return settings


def ensure_force_tty(extra_args: tuple[str, ...]) -> tuple[str, ...]:
    if "-t" in extra_args or "-tt" in extra_args:
        return extra_args
    return (*extra_args, "-t")


def keep_session_open(remote_command: str) -> str:
    command = remote_command.strip()
    if not command:
        return ""
    if "exec ${SHELL" in command or "exec $SHELL" in command:
        return command
    return command + "; exec ${SHELL:-sh}"


def one_shot(settings: Settings) -> Settings:
    """Keep the session interactive after a one-off remote command finishes."""
    if not settings.remote_command.strip():
        return settings
    return replace(
        settings,
        extra_args=ensure_force_tty(settings.extra_args),
        remote_command=keep_session_open(settings.remote_command),
    )
