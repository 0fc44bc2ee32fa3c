"""Open one tmux window split into one pane per ssh command."""

from __future__ import annotations

import logging as py_logging
from dataclasses import dataclass, field

from sshmux.config import DEFAULT_PANE_BORDER_FORMAT
from sshmux.errors import MultiplexerCommandFailed, NoHostsSelected
from sshmux.tmux.client import TmuxClient
from sshmux.tmux.commands import DEFAULT_WINDOW_NAME, normalize_split_flag
from sshmux.tmux.panes import PaneSettings

logger = py_logging.getLogger(__name__)

_WINDOW_PANE_FORMAT = "#{window_id} #{pane_id}"
_PANE_FORMAT = "#{pane_id}"


@dataclass(frozen=True)
class OneWindowOptions:
    window_name: str = DEFAULT_WINDOW_NAME
    pane_titles: list[str] = field(default_factory=list)
    split_flag: str = "-h"
    layout: str = "even-horizontal"
    sync_panes: bool = False
    border_format: str = DEFAULT_PANE_BORDER_FORMAT
    border_status: str = "bottom"

    @classmethod
    def from_pane_settings(
        cls,
        window_name: str,
        pane_titles: list[str],
        settings: PaneSettings,
    ) -> OneWindowOptions:
        return cls(
            window_name=window_name,
            pane_titles=list(pane_titles),
            split_flag=settings.split_flag,
            layout=settings.layout,
            sync_panes=settings.sync_panes,
            border_format=settings.border_format,
            border_status=settings.border_status,
        )


def _pane_title(titles: list[str], index: int) -> str:
    if index < 0 or index >= len(titles):
        return ""
    return titles[index].strip()


def _apply_window_options(client: TmuxClient, window_id: str, options: OneWindowOptions, pane_count: int) -> None:
    border_status = options.border_status.strip() or "bottom"
    border_format = options.border_format.strip() or DEFAULT_PANE_BORDER_FORMAT

    client.cosmetic("set-window-option", "-t", window_id, "automatic-rename", "off")
    client.cosmetic("set-window-option", "-t", window_id, "allow-rename", "off")
    if border_status.lower() == "off":
        client.cosmetic("set-window-option", "-t", window_id, "pane-border-status", "off")
    else:
        client.cosmetic("set-window-option", "-t", window_id, "pane-border-status", border_status)
        client.cosmetic("set-window-option", "-t", window_id, "pane-border-format", border_format)
    if options.sync_panes and pane_count > 1:
        client.cosmetic("set-window-option", "-t", window_id, "synchronize-panes", "on")


def open_one_window(
    ssh_cmds: list[list[str]],
    options: OneWindowOptions,
    *,
    client: TmuxClient,
) -> int:
    """Create the window, then one split per remaining command.

    Order matters: later steps target the window and pane ids printed by the
    earlier ones. Window and split failures abort; titles, borders, sync and
    layout never do. Returns the number of panes opened.
    """
    if not ssh_cmds:
        raise NoHostsSelected()

    name = options.window_name.strip() or DEFAULT_WINDOW_NAME
    layout = options.layout.strip() or "even-horizontal"
    split_flag = normalize_split_flag(options.split_flag)

    output = client.structural(
        "new-window", "-P", "-F", _WINDOW_PANE_FORMAT, "-n", name, "--", *ssh_cmds[0]
    )
    fields = output.split()
    if len(fields) < 2:
        raise MultiplexerCommandFailed("tmux error: missing window/pane id")
    window_id, first_pane_id = fields[0], fields[1]
    logger.debug("Opened tmux window window=%s pane=%s name=%s", window_id, first_pane_id, name)

    _apply_window_options(client, window_id, options, len(ssh_cmds))

    title = _pane_title(options.pane_titles, 0)
    if title:
        client.cosmetic("select-pane", "-t", first_pane_id, "-T", title)

    opened = 1
    for index, ssh_cmd in enumerate(ssh_cmds[1:], start=1):
        try:
            output = client.structural(
                "split-window", "-t", window_id, split_flag, "-P", "-F", _PANE_FORMAT, "--", *ssh_cmd
            )
        except MultiplexerCommandFailed as exc:
            exc.opened = opened
            raise
        opened += 1
        pane_fields = output.split()
        pane_id = pane_fields[0] if pane_fields else ""
        title = _pane_title(options.pane_titles, index)
        if pane_id and title:
            client.cosmetic("select-pane", "-t", pane_id, "-T", title)

    client.cosmetic("select-layout", "-t", window_id, layout)
    logger.debug("tmux window ready window=%s panes=%s layout=%s", window_id, opened, layout)
    return opened
