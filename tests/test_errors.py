"""Error taxonomy and exit code contract."""

from __future__ import annotations

import pytest

from sshmux.errors import (
    ExecutableNotFound,
    ExitCode,
    InvalidPort,
    MultiHostRequiresMultiplexer,
    MultiHostRequiresSession,
    MultiplexerCommandFailed,
    NoHostsSelected,
    SshMuxError,
    user_facing_error,
)


def test_user_facing_error_without_hint() -> None:
    assert user_facing_error("something went wrong") == "Error: something went wrong."


def test_user_facing_error_with_hint() -> None:
    result = user_facing_error("something went wrong", hint="try again")
    assert result == "Error: something went wrong. Next step: try again"


def test_exit_code_values() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.CONFIG_ERROR) == 3
    assert int(ExitCode.RUNTIME_ERROR) == 4
    assert int(ExitCode.TMUX_ERROR) == 6
    assert int(ExitCode.VALIDATION_ERROR) == 7
    assert int(ExitCode.EXECUTABLE_NOT_FOUND) == 127


def test_error_str_with_and_without_hint() -> None:
    assert str(SshMuxError("msg")) == "msg"
    assert str(SshMuxError("msg", hint="hint")) == "msg Hint: hint"


@pytest.mark.parametrize(
    ("error_type", "code"),
    [
        (NoHostsSelected, ExitCode.VALIDATION_ERROR),
        (MultiHostRequiresMultiplexer, ExitCode.VALIDATION_ERROR),
        (MultiHostRequiresSession, ExitCode.VALIDATION_ERROR),
        (MultiplexerCommandFailed, ExitCode.TMUX_ERROR),
        (InvalidPort, ExitCode.VALIDATION_ERROR),
        (ExecutableNotFound, ExitCode.EXECUTABLE_NOT_FOUND),
    ],
)
def test_taxonomy_members_are_sshmux_errors_with_fixed_codes(error_type: type[SshMuxError], code: ExitCode) -> None:
    error = error_type()
    assert isinstance(error, SshMuxError)
    assert error.code == code
    assert error.message


def test_multiplexer_failure_keeps_message_and_opened_count() -> None:
    error = MultiplexerCommandFailed("tmux error: no server running", opened=2)
    assert error.message == "tmux error: no server running"
    assert error.opened == 2
    assert error.code == ExitCode.TMUX_ERROR
