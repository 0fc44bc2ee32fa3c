from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tmux_fakes import FakeTmux

_REGRESSION_TEST_FILES = {
    "test_dispatch.py",
    "test_onewindow.py",
}


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        name = path.name

        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)

        if name in _REGRESSION_TEST_FILES:
            item.add_marker(pytest.mark.critical_regression)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TMUX", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def fake_tmux() -> Callable[..., FakeTmux]:
    return FakeTmux
