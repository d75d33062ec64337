# tests/test_bootstrap.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_cli.cli.bootstrap import open_store
from task_cli.cli.main import main
from task_cli.tasks.errors import StoreIOError, TaskNotFoundError
from task_cli.tasks.task_store import TaskStore


class SaveRecorder:
    """Replacement for TaskStore.save that counts calls and optionally fails."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = 0

    # Set on the class, so it is called without the store instance.
    def __call__(self, *args: object) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


def test_open_store_saves_on_success(tasks_path: Path) -> None:
    with open_store(tasks_path) as store:
        store.add("a", "low")

    assert [t.description for t in TaskStore.load(tasks_path)] == ["a"]


def test_open_store_saves_when_block_raises(tasks_path: Path) -> None:
    with pytest.raises(TaskNotFoundError):
        with open_store(tasks_path) as store:
            store.add("a", "low")
            store.complete("zzzzz")

    assert [t.description for t in TaskStore.load(tasks_path)] == ["a"]


def test_open_store_reports_block_error_when_save_also_fails(
    tasks_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    save = SaveRecorder(StoreIOError("disk full"))
    monkeypatch.setattr(TaskStore, "save", save)

    with pytest.raises(TaskNotFoundError):
        with open_store(tasks_path) as store:
            store.complete("zzzzz")
    assert save.calls == 1


def test_save_failure_after_successful_command_fails_it(
    isolated_env: Path,
    tasks_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    save = SaveRecorder(StoreIOError("disk full"))
    monkeypatch.setattr(TaskStore, "save", save)

    assert main(["--file", str(tasks_path), "add", "x"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.strip().endswith("Error: disk full")
    assert save.calls == 1


def test_command_error_is_reported_over_save_error(
    isolated_env: Path,
    tasks_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    save = SaveRecorder(StoreIOError("disk full"))
    monkeypatch.setattr(TaskStore, "save", save)

    assert main(["--file", str(tasks_path), "complete", "zzzzz"]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.strip().splitlines()[-1] == "Error: task not found: zzzzz"
    assert save.calls == 1
