"""Shared pytest fixtures and configuration for pytest."""

import logging
from collections.abc import Iterator

import pytest
from rich.console import Console

from prdiff.display import console as console_module


@pytest.fixture(autouse=True)
def restore_prdiff_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing prdiff records."""
    prdiff_logger = logging.getLogger("prdiff")
    handlers = list(prdiff_logger.handlers)
    level = prdiff_logger.level
    propagate = prdiff_logger.propagate
    yield
    prdiff_logger.handlers[:] = handlers
    prdiff_logger.setLevel(level)
    prdiff_logger.propagate = propagate


@pytest.fixture
def record_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """Install a recording Console as the shared console."""
    recorder = Console(record=True, width=200, force_terminal=False, color_system=None)
    monkeypatch.setattr(console_module, "_console", recorder)
    return recorder


@pytest.fixture
def isolated_home(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point Path.home() at a temp dir so no real ~/.prdiff is read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home
