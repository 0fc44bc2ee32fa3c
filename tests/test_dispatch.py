from __future__ import annotations

from collections.abc import Callable

import pytest

from sshmux.dispatch import DispatchResult, check_host_count, dispatch
from sshmux.errors import (
    MultiHostRequiresMultiplexer,
    MultiHostRequiresSession,
    MultiplexerCommandFailed,
    NoHostsSelected,
)
from sshmux.process import ExecRequest
from sshmux.tmux.client import TmuxClient
from sshmux.tmux.modes import OpenMode
from sshmux.tmux.panes import PaneSettings

from tmux_fakes import FakeTmux

_PANES = PaneSettings(split_flag="-v", layout="even-vertical", sync_panes=True, border_format="#T")


def _cmds(*hosts: str) -> list[list[str]]:
    return [["ssh", host] for host in hosts]


def test_current_mode_single_host_execs_ssh(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a"], _cmds("a"), OpenMode.CURRENT, in_multiplexer=True, pane_settings=_PANES, client=TmuxClient(runner)
    )

    assert outcome == ExecRequest(argv=["ssh", "a"])
    assert runner.commands == []


def test_current_mode_multi_host_fails_before_any_tmux_call(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    with pytest.raises(MultiHostRequiresMultiplexer) as exc_info:
        dispatch(
            ["a", "b"],
            _cmds("a", "b"),
            OpenMode.CURRENT,
            in_multiplexer=True,
            pane_settings=_PANES,
            client=TmuxClient(runner),
        )

    assert exc_info.value.message == "multi-host requires tmux (window or pane mode)"
    assert runner.commands == []


@pytest.mark.parametrize("mode", [OpenMode.WINDOW, OpenMode.PANE])
def test_outside_tmux_single_host_starts_or_attaches_session(mode: OpenMode, fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a"],
        _cmds("a"),
        mode,
        in_multiplexer=False,
        pane_settings=_PANES,
        session_name="work",
        client=TmuxClient(runner),
    )

    assert outcome == ExecRequest(argv=["tmux", "new-session", "-A", "-s", "work", "--", "ssh", "a"])
    assert runner.commands == []


@pytest.mark.parametrize("mode", [OpenMode.WINDOW, OpenMode.PANE])
def test_outside_tmux_multi_host_requires_session(mode: OpenMode, fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    with pytest.raises(MultiHostRequiresSession):
        dispatch(
            ["a", "b"], _cmds("a", "b"), mode, in_multiplexer=False, pane_settings=_PANES, client=TmuxClient(runner)
        )
    assert runner.commands == []


def test_window_mode_single_host_opens_named_window(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["[10.0.0.1]:2222"],
        [["ssh", "-p", "2222", "10.0.0.1"]],
        OpenMode.WINDOW,
        in_multiplexer=True,
        pane_settings=_PANES,
        client=TmuxClient(runner),
    )

    assert outcome == DispatchResult(opened=1, message="opened 1")
    assert runner.commands == [
        ["tmux", "new-window", "-n", "10.0.0.1_2222", "--", "ssh", "-p", "2222", "10.0.0.1"]
    ]


def test_window_mode_multi_host_uses_one_window(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a", "b", "c"],
        _cmds("a", "b", "c"),
        OpenMode.WINDOW,
        in_multiplexer=True,
        pane_settings=_PANES,
        group_name="prod",
        client=TmuxClient(runner),
    )

    assert outcome == DispatchResult(opened=3, message="opened 3 in one window")
    assert runner.commands[0][:7] == ["tmux", "new-window", "-P", "-F", "#{window_id} #{pane_id}", "-n", "prod"]
    assert runner.subcommands().count("split-window") == 2
    assert runner.commands[-1] == ["tmux", "select-layout", "-t", "@7", "even-vertical"]


def test_pane_mode_single_host_still_uses_one_window(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a"], _cmds("a"), OpenMode.PANE, in_multiplexer=True, pane_settings=_PANES, client=TmuxClient(runner)
    )

    assert outcome == DispatchResult(opened=1, message="opened 1 in one window")
    assert runner.commands[0][6] == "a"
    assert "split-window" not in runner.subcommands()


def test_pane_failure_reports_partial_progress(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux(failures={("split-window", 1): "no space for new pane"})

    with pytest.raises(MultiplexerCommandFailed) as exc_info:
        dispatch(
            ["a", "b", "c"],
            _cmds("a", "b", "c"),
            OpenMode.PANE,
            in_multiplexer=True,
            pane_settings=_PANES,
            client=TmuxClient(runner),
        )

    assert exc_info.value.opened == 1
    assert exc_info.value.hint == "Opened 1 of 3 panes before the failure."
    assert "select-layout" not in runner.subcommands()


def test_window_per_host_opens_one_window_each(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a", "b"],
        _cmds("a", "b"),
        OpenMode.WINDOW,
        in_multiplexer=True,
        pane_settings=_PANES,
        window_per_host=True,
        client=TmuxClient(runner),
    )

    assert outcome == DispatchResult(opened=2, message="opened 2")
    assert runner.commands == [
        ["tmux", "new-window", "-n", "a", "--", "ssh", "a"],
        ["tmux", "new-window", "-n", "b", "--", "ssh", "b"],
    ]


def test_window_per_host_aborts_on_first_failure(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux(failures={("new-window", 2): "create window failed: index in use"})

    with pytest.raises(MultiplexerCommandFailed) as exc_info:
        dispatch(
            ["a", "b", "c"],
            _cmds("a", "b", "c"),
            OpenMode.WINDOW,
            in_multiplexer=True,
            pane_settings=_PANES,
            window_per_host=True,
            client=TmuxClient(runner),
        )

    assert exc_info.value.message == "tmux error: create window failed: index in use"
    assert exc_info.value.opened == 1
    assert exc_info.value.hint == "Opened 1 of 3 windows before the failure."
    assert len(runner.commands) == 2


def test_pane_mode_ignores_window_per_host(fake_tmux: Callable[..., FakeTmux]) -> None:
    runner = fake_tmux()

    outcome = dispatch(
        ["a", "b"],
        _cmds("a", "b"),
        OpenMode.PANE,
        in_multiplexer=True,
        pane_settings=_PANES,
        window_per_host=True,
        client=TmuxClient(runner),
    )

    assert outcome.message == "opened 2 in one window"


def test_empty_and_mismatched_input() -> None:
    with pytest.raises(NoHostsSelected):
        dispatch([], [], OpenMode.WINDOW, in_multiplexer=True, pane_settings=_PANES)
    with pytest.raises(ValueError, match="mismatch"):
        dispatch(["a", "b"], _cmds("a"), OpenMode.WINDOW, in_multiplexer=True, pane_settings=_PANES)


@pytest.mark.parametrize(
    ("count", "mode", "inside", "error_type"),
    [
        (0, OpenMode.WINDOW, True, NoHostsSelected),
        (2, OpenMode.CURRENT, True, MultiHostRequiresMultiplexer),
        (2, OpenMode.CURRENT, False, MultiHostRequiresMultiplexer),
        (2, OpenMode.PANE, False, MultiHostRequiresSession),
    ],
)
def test_check_host_count_rejects(count: int, mode: OpenMode, inside: bool, error_type: type[Exception]) -> None:
    with pytest.raises(error_type):
        check_host_count(count, mode, in_multiplexer=inside)


@pytest.mark.parametrize(
    ("count", "mode", "inside"),
    [(1, OpenMode.CURRENT, False), (1, OpenMode.WINDOW, False), (3, OpenMode.WINDOW, True), (3, OpenMode.PANE, True)],
)
def test_check_host_count_accepts(count: int, mode: OpenMode, inside: bool) -> None:
    check_host_count(count, mode, in_multiplexer=inside)
