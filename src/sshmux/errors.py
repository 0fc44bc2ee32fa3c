"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    TMUX_ERROR = 6
    VALIDATION_ERROR = 7
    EXECUTABLE_NOT_FOUND = 127


@dataclass
class SshMuxError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class NoHostsSelected(SshMuxError):
    message: str = "no hosts selected"
    code: ExitCode = ExitCode.VALIDATION_ERROR


@dataclass
class MultiHostRequiresMultiplexer(SshMuxError):
    message: str = "multi-host requires tmux (window or pane mode)"
    code: ExitCode = ExitCode.VALIDATION_ERROR
    hint: str = "Set open_mode to tmux-window or tmux-pane, or select a single host."


@dataclass
class MultiHostRequiresSession(SshMuxError):
    message: str = "multi-host requires an active tmux session"
    code: ExitCode = ExitCode.VALIDATION_ERROR
    hint: str = "Start tmux first, then connect again from inside it."


@dataclass
class MultiplexerCommandFailed(SshMuxError):
    message: str = "tmux command failed"
    code: ExitCode = ExitCode.TMUX_ERROR
    opened: int = 0


@dataclass
class InvalidPort(SshMuxError):
    message: str = "invalid port"
    code: ExitCode = ExitCode.VALIDATION_ERROR
    hint: str = "Use a port between 1 and 65535."


@dataclass
class ExecutableNotFound(SshMuxError):
    message: str = "executable not found"
    code: ExitCode = ExitCode.EXECUTABLE_NOT_FOUND


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
