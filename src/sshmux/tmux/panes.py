"""Pane display settings resolved from defaults and an optional group."""

from __future__ import annotations

from dataclasses import dataclass

from sshmux.config import Defaults, GroupOverride

_SPLIT_FLAGS = {
    "vertical": "-v",
    "v": "-v",
    "horizontal": "-h",
    "h": "-h",
}
_LAYOUT_ALIASES = {
    "t": "tiled",
    "tiled": "tiled",
    "eh": "even-horizontal",
    "even-horizontal": "even-horizontal",
    "ev": "even-vertical",
    "even-vertical": "even-vertical",
    "mh": "main-horizontal",
    "main-horizontal": "main-horizontal",
    "mv": "main-vertical",
    "main-vertical": "main-vertical",
}
_SYNC_OFF = {"off", "false", "0", "no"}
TILED_MIN_PANES = 4


@dataclass(frozen=True)
class PaneSettings:
    split_flag: str = "-h"
    layout: str = "even-vertical"
    sync_panes: bool = True
    border_format: str = ""
    border_status: str = "bottom"


def _pick(default: str, override: str) -> str:
    value = override.strip()
    return value if value else default.strip()


def resolve_layout(layout: str, pane_count: int) -> str:
    value = layout.strip()
    lowered = value.lower()
    if lowered in ("", "auto"):
        return "tiled" if pane_count >= TILED_MIN_PANES else "even-vertical"
    return _LAYOUT_ALIASES.get(lowered, value)


def resolve_pane_settings(
    defaults: Defaults,
    group: GroupOverride | None,
    pane_count: int,
) -> PaneSettings:
    split = defaults.pane_split.strip()
    layout = defaults.pane_layout.strip()
    sync = defaults.pane_sync.strip()
    border_format = defaults.pane_border_format.strip()
    border_status = defaults.pane_border_status.strip()

    if group is not None:
        split = _pick(split, group.pane_split)
        layout = _pick(layout, group.pane_layout)
        sync = _pick(sync, group.pane_sync)
        border_format = _pick(border_format, group.pane_border_format)
        border_status = _pick(border_status, group.pane_border_status)

    return PaneSettings(
        split_flag=_SPLIT_FLAGS.get(split.lower(), "-h"),
        layout=resolve_layout(layout, pane_count),
        sync_panes=sync.lower() not in _SYNC_OFF,
        border_format=border_format,
        border_status=border_status,
    )
