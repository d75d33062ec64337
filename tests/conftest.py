# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_cli.core.state import CommandContext
from task_cli.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeConfirmer


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def settings(tasks_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with CommandContext and the handlers.

    We use a SimpleNamespace rather than resolving real config, so tests do
    not depend on the user's config directory or environment.
    """
    return SimpleNamespace(
        tasks_file=tasks_path,
        config_file=None,
        default_priority="medium",
        confirm_remove=True,
        log_level="WARNING",
        log_dir=None,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tasks_path: Path, clock: FakeClock) -> TaskStore:
    return TaskStore.load(tasks_path, now=clock)


@pytest.fixture()
def confirmer() -> FakeConfirmer:
    return FakeConfirmer(answer=True)


@pytest.fixture()
def ctx(settings: SimpleNamespace, store: TaskStore, confirmer: FakeConfirmer) -> CommandContext:
    return CommandContext(settings=settings, store=store, confirm=confirmer)  # type: ignore[arg-type]


@pytest.fixture()
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME / XDG_CONFIG_HOME / cwd at tmp_path and clear TASK_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for name in ("TASK_FILE", "TASK_LOG_LEVEL", "TASK_CONFIRM_REMOVE", "TASK_LOG_DIR"):
        # setenv first so values loaded from a .env file are undone after the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(workdir)
    return workdir
