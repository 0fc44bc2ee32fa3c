"""Bounded, shell-safe rendering of commands for logs."""

from __future__ import annotations

import shlex

DEFAULT_LOG_TRUNCATE_LIMIT = 400


def truncate_log(value: str, limit: int = DEFAULT_LOG_TRUNCATE_LIMIT) -> str:
    """Truncate log text to the specified limit with ellipsis."""
    value = value.strip()
    if len(value) <= limit:
        return value
    return value[: max(0, limit - 3)] + "..."


def command_for_log(args: list[str], limit: int = DEFAULT_LOG_TRUNCATE_LIMIT) -> str:
    """Return a shell-safe command string bounded for logging."""
    if not args:
        return ""
    return truncate_log(" ".join(shlex.quote(part) for part in args), limit)
