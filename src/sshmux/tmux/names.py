"""Window and pane naming."""

from __future__ import annotations

from sshmux.config import GroupOverride

FALLBACK_NAME = "ssh"
MAX_WINDOW_NAME_LENGTH = 30


def window_name(host: str) -> str:
    name = host.strip()
    if name.startswith("["):
        name = name[1:]
    name = name.replace("]", "").replace(":", "_")
    if not name:
        return FALLBACK_NAME
    return name[:MAX_WINDOW_NAME_LENGTH]


def group_window_name(hosts: list[str], group: GroupOverride | str | None = None) -> str:
    group_name = group.name if isinstance(group, GroupOverride) else (group or "")
    if group_name.strip():
        return group_name.strip()
    if not hosts:
        return FALLBACK_NAME
    return window_name(hosts[0])
