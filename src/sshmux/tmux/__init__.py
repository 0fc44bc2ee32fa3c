"""tmux window, pane and session control."""

from .client import CallKind, SubprocessRunner, TmuxCall, TmuxClient
from .commands import new_session_cmd, new_window_cmd, split_pane_cmd
from .modes import OpenMode, in_tmux, resolve_open_mode
from .names import group_window_name, window_name
from .onewindow import OneWindowOptions, open_one_window
from .panes import PaneSettings, resolve_pane_settings

__all__ = [
    "CallKind",
    "group_window_name",
    "in_tmux",
    "new_session_cmd",
    "new_window_cmd",
    "OneWindowOptions",
    "open_one_window",
    "OpenMode",
    "PaneSettings",
    "resolve_open_mode",
    "resolve_pane_settings",
    "split_pane_cmd",
    "SubprocessRunner",
    "TmuxCall",
    "TmuxClient",
    "window_name",
]
