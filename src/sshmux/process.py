"""Process replacement for current-terminal and new-session dispatch."""

from __future__ import annotations

import logging as py_logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from sshmux.errors import ExecutableNotFound
from sshmux.security import command_for_log

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecRequest:
    """Replace the calling process with ``argv``; nothing runs afterwards."""

    argv: list[str]

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ""


def exec_replace(
    request: ExecRequest,
    *,
    which: Callable[[str], str | None] = shutil.which,
    execv: Callable[[str, list[str]], object] = os.execv,
) -> None:
    if not request.argv:
        raise ExecutableNotFound("empty exec command")
    path = which(request.program)
    if path is None:
        raise ExecutableNotFound(
            f"{request.program}: executable file not found in PATH",
            hint=f"Install {request.program} or add it to PATH.",
        )
    logger.info("Replacing process with %s", command_for_log(request.argv))
    for handler in py_logging.getLogger("sshmux").handlers:
        handler.flush()
    execv(path, request.argv)
