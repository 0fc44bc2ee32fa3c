"""Logging for a process that hands its terminal to ssh or tmux."""

from __future__ import annotations

import logging as py_logging
import os
import sys
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
LOG_FILE_NAME = "sshmux.log"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"
# stderr is shared with the ssh session or tmux client that follows.
_STREAM_FORMAT = "sshmux: %(levelname)s %(message)s"


def normalize_level(level: str) -> str:
    """Return the canonical level name; ``WARNING`` is spelled ``WARN``.

    Raises ``ValueError`` for names outside ``LOG_LEVELS``.
    """
    normalized = level.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}; expected one of: {', '.join(LOG_LEVELS)}")
    return normalized


def default_log_path() -> Path:
    xdg_home = os.getenv("XDG_CONFIG_HOME", "").strip()
    base = Path(xdg_home) if xdg_home else Path("~/.config")
    try:
        resolved = (base / "sshmux" / "logs" / LOG_FILE_NAME).expanduser()
    except RuntimeError:
        # No resolvable home directory.
        resolved = Path.cwd() / ".sshmux" / "logs" / LOG_FILE_NAME
    return resolved.resolve() if not resolved.is_absolute() else resolved


def _file_handler(log_file: str | Path) -> py_logging.Handler | None:
    path = Path(log_file)
    try:
        path = path.expanduser()
    except RuntimeError:
        pass
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = py_logging.FileHandler(path.resolve(), encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(py_logging.DEBUG)
    handler.setFormatter(py_logging.Formatter(_FILE_FORMAT))
    return handler


def configure_logging(
    level: str = "WARN",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Reset the ``sshmux`` logger to a stderr handler plus an optional file.

    Unknown level names fall back to ``WARN``. The file always records DEBUG;
    when it cannot be opened the logger runs with the stream handler alone.
    """
    try:
        resolved = LOG_LEVELS[normalize_level(level)]
    except ValueError:
        resolved = py_logging.WARNING

    logger = py_logging.getLogger("sshmux")
    logger.handlers.clear()
    logger.propagate = False

    stream_handler = py_logging.StreamHandler(stream or sys.stderr)
    stream_handler.setLevel(resolved)
    stream_handler.setFormatter(py_logging.Formatter(_STREAM_FORMAT))
    logger.addHandler(stream_handler)

    file_handler = _file_handler(log_file) if log_file else None
    if file_handler is not None:
        logger.addHandler(file_handler)
    logger.setLevel(py_logging.DEBUG if file_handler is not None else resolved)
    return logger
