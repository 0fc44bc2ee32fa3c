"""XDG config loading and override lookup."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from sshmux.errors import ExitCode, SshMuxError

CONFIG_DIR_NAME = "sshmux"
CONFIG_FILE_NAME = "config.toml"
DEFAULT_SESSION_NAME = "sshmux"
DEFAULT_PANE_BORDER_FORMAT = (
    "#[bg=green,fg=black] #T#{?pane_synchronized, #[fg=colour196]#[bold][SYNC]#[default],} #[default]"
)

_GROUP_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
_BRACKET_HOST_PATTERN = re.compile(r"^\[(?P<host>.*)\]:(?P<port>[^\]]*)$")


class _SshFields(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    user: str = ""
    port: int = Field(default=0, ge=0, le=65535)
    identity_file: str = ""
    extra_args: list[str] = Field(default_factory=list)


class Defaults(_SshFields):
    port: int = Field(default=22, ge=0, le=65535)
    # Unrecognized policies resolve like "auto"; a blank border status shows "bottom".
    tmux: str = "auto"
    open_mode: str = "auto"
    tmux_session: str = DEFAULT_SESSION_NAME
    window_per_host: bool = False
    pane_split: str = "vertical"
    pane_layout: str = "even-vertical"
    pane_sync: str = "on"
    pane_border_format: str = DEFAULT_PANE_BORDER_FORMAT
    pane_border_status: str = "bottom"

    @field_validator("tmux", "pane_border_status", mode="before")
    @classmethod
    def _normalize_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class HostOverride(_SshFields):
    """Per-host SSH overrides, applied by exact address match."""

    host: str
    hidden: bool = False


class GroupOverride(_SshFields):
    """Named host set whose set fields win over host overrides."""

    name: str
    hosts: list[str] = Field(default_factory=list)
    remote_command: str = ""
    tmux: str = ""
    open_mode: str = ""
    pane_split: str = ""
    pane_layout: str = ""
    pane_sync: str = ""
    pane_border_format: str = ""
    pane_border_status: str = ""

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("name required")
        if not _GROUP_NAME_PATTERN.match(value):
            raise ValueError(
                f"group name {value!r} is invalid: only letters, digits, - and _ are allowed"
            )
        return value


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    version: int = 1
    defaults: Defaults = Field(default_factory=Defaults)
    hosts: list[HostOverride] = Field(default_factory=list)
    groups: list[GroupOverride] = Field(default_factory=list)


def get_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()
    xdg_home = os.getenv("XDG_CONFIG_HOME", "").strip()
    if xdg_home:
        return Path(xdg_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    return Path("~/.config").expanduser() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return AppConfig()
    if resolved.is_dir():
        raise SshMuxError(
            f"Config path is a directory: {resolved}",
            code=ExitCode.CONFIG_ERROR,
            hint="Point --config at a TOML file.",
        )
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SshMuxError(
            f"Config file is not valid TOML: {resolved}",
            code=ExitCode.CONFIG_ERROR,
            hint=str(exc),
        ) from exc
    except OSError as exc:
        raise SshMuxError(
            f"Config file could not be read: {resolved}",
            code=ExitCode.CONFIG_ERROR,
            hint=exc.strerror or str(exc),
        ) from exc
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise SshMuxError(
            f"Invalid config value at {location or 'root'}: {first.get('msg', 'invalid')}",
            code=ExitCode.CONFIG_ERROR,
            hint=f"Fix {resolved} and retry.",
        ) from exc


def _bracket_inner_host(address: str) -> str:
    match = _BRACKET_HOST_PATTERN.match(address)
    if match is None:
        return ""
    host = match.group("host").strip()
    port = match.group("port").strip()
    if port.startswith("+"):
        port = port[1:]
    if not host or not (port.isascii() and port.isdigit()) or int(port) <= 0:
        return ""
    return host


def find_host_override(config: AppConfig, host: str) -> HostOverride | None:
    address = host.strip()
    if not address:
        return None
    for entry in config.hosts:
        if entry.host.strip() == address:
            return entry
    # known_hosts entries carry "[host]:port"; fall back to the bare host.
    base = _bracket_inner_host(address)
    if base:
        for entry in config.hosts:
            if entry.host.strip() == base:
                return entry
    return None


def find_group(config: AppConfig, name: str) -> GroupOverride | None:
    wanted = name.strip().lower()
    for group in config.groups:
        if group.name.lower() == wanted:
            return group
    return None


def config_hosts(config: AppConfig, *, include_hidden: bool = False) -> list[str]:
    hidden = {entry.host.strip() for entry in config.hosts if entry.hidden}
    addresses = {entry.host.strip() for entry in config.hosts}
    for group in config.groups:
        addresses.update(item.strip() for item in group.hosts)
    if not include_hidden:
        addresses -= hidden
    addresses.discard("")
    return sorted(addresses)


class GroupListing(TypedDict):
    name: str
    hosts: list[str]


def group_listing(config: AppConfig) -> list[GroupListing]:
    return [GroupListing(name=group.name, hosts=list(group.hosts)) for group in config.groups]
