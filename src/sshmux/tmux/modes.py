"""Open-mode decision: current terminal, tmux window or tmux pane."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum


class OpenMode(str, Enum):
    CURRENT = "current"
    WINDOW = "tmux-window"
    PANE = "tmux-pane"


def in_tmux(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return bool(env.get("TMUX", ""))


def resolve_open_mode(tmux_policy: str, open_mode_policy: str, in_multiplexer: bool) -> OpenMode:
    tmux_value = (tmux_policy or "").strip().lower()
    open_mode_value = (open_mode_policy or "").strip().lower()

    if tmux_value == "never":
        return OpenMode.CURRENT

    if tmux_value == "force":
        if open_mode_value == OpenMode.PANE.value:
            return OpenMode.PANE
        return OpenMode.WINDOW

    if open_mode_value == OpenMode.CURRENT.value:
        return OpenMode.CURRENT
    if open_mode_value == OpenMode.WINDOW.value:
        return OpenMode.WINDOW
    if open_mode_value == OpenMode.PANE.value:
        return OpenMode.PANE

    # "", "auto" and unknown values follow the environment.
    return OpenMode.WINDOW if in_multiplexer else OpenMode.CURRENT
