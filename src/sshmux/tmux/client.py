"""tmux invocations typed as structural (fatal) or cosmetic (best-effort)."""

from __future__ import annotations

import logging as py_logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from sshmux.errors import MultiplexerCommandFailed
from sshmux.security import command_for_log, truncate_log
from sshmux.tmux.commands import TMUX_PROGRAM

logger = py_logging.getLogger(__name__)


class SubprocessRunner(Protocol):
    def __call__(
        self,
        args: list[str],
        *,
        capture_output: bool = False,
        text: bool = False,
        check: bool = False,
        errors: str | None = None,
    ) -> subprocess.CompletedProcess[str]: ...


class CallKind(str, Enum):
    STRUCTURAL = "structural"
    COSMETIC = "cosmetic"


@dataclass(frozen=True)
class TmuxCall:
    kind: CallKind
    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_detail(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip()
        return detail or f"tmux exited with status {self.returncode}"


class TmuxClient:
    """Runs tmux commands strictly one after another.

    Structural calls create windows and panes; a failure raises
    ``MultiplexerCommandFailed`` with tmux's own stderr. Cosmetic calls set
    titles, borders, sync and layout; a failure is logged and reported as
    ``False``.
    """

    def __init__(self, runner: SubprocessRunner = subprocess.run, program: str = TMUX_PROGRAM) -> None:
        self.runner = runner
        self.program = program
        self.calls: list[TmuxCall] = []

    def invoke(self, kind: CallKind, *args: str) -> TmuxCall:
        command = [self.program, *args]
        logger.debug("tmux-run kind=%s command=%s", kind.value, command_for_log(command))
        try:
            # Undecodable tmux output is replaced, never raised.
            result = self.runner(command, capture_output=True, text=True, check=False, errors="replace")
        except OSError as exc:
            call = TmuxCall(kind=kind, args=command, returncode=127, stderr=exc.strerror or str(exc))
        else:
            call = TmuxCall(
                kind=kind,
                args=command,
                returncode=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )
        self.calls.append(call)
        return call

    def structural(self, *args: str) -> str:
        call = self.invoke(CallKind.STRUCTURAL, *args)
        if call.ok:
            return call.stdout
        logger.error(
            "tmux-fail command=%s code=%s stderr=%s",
            command_for_log(call.args),
            call.returncode,
            truncate_log(call.stderr),
        )
        raise MultiplexerCommandFailed(f"tmux error: {call.error_detail()}")

    def cosmetic(self, *args: str) -> bool:
        call = self.invoke(CallKind.COSMETIC, *args)
        if not call.ok:
            logger.warning(
                "tmux cosmetic setting ignored command=%s stderr=%s",
                command_for_log(call.args),
                truncate_log(call.error_detail()),
            )
        return call.ok
