# src/task_cli/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .errors import (
    DuplicateTaskError,
    InvalidDescriptionError,
    StoreDecodeError,
    StoreEncodeError,
    StoreIOError,
    TaskNotFoundError,
)
from .task_ids import generate_id
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    JSON-file task store.

    The whole file is read on load and rewritten on save; there is no
    locking, so two processes saving the same file race (last writer wins).

    Mutations only touch the in-memory list. Callers own the save step
    (see cli.bootstrap.open_store).
    """

    def __init__(
        self,
        file_path: str | Path,
        tasks: list[Task] | None = None,
        *,
        now: Clock | None = None,
    ) -> None:
        self.file_path = Path(file_path)
        self.tasks: list[Task] = list(tasks or [])
        self._now = now or _utc_now

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    # ---- persistence ----

    @classmethod
    def load(cls, file_path: str | Path, *, now: Clock | None = None) -> TaskStore:
        """
        Load the store from file_path.

        A missing file is a first run: an empty store bound to the path is
        returned. Anything unreadable raises StoreIOError; anything that is
        not a task list raises StoreDecodeError.
        """
        path = Path(file_path)
        try:
            raw = path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s, starting empty.", path)
            return cls(path, now=now)
        except UnicodeDecodeError as exc:
            raise StoreDecodeError(f"could not decode task file {path}: {exc}") from exc
        except OSError as exc:
            raise StoreIOError(f"could not read task file {path}: {exc}") from exc

        try:
            data = json.loads(raw)
            tasks = cls._tasks_from_data(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreDecodeError(f"could not decode task file {path}: {exc}") from exc

        logger.debug("Loaded %d tasks from %s", len(tasks), path)
        return cls(path, tasks, now=now)

    @staticmethod
    def _tasks_from_data(data: Any) -> list[Task]:
        if not isinstance(data, dict):
            raise TypeError(f"task file must hold an object, got {type(data).__name__}")
        items = data.get("tasks")
        if items is None:
            return []
        if not isinstance(items, list):
            raise TypeError("'tasks' must be a list")
        return [Task.from_dict(item) for item in items]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "file_path": str(self.file_path),
        }

    def save(self) -> None:
        directory = self.file_path.parent
        try:
            directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreIOError(f"could not create directory {directory}: {exc}") from exc

        try:
            payload = json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as exc:
            raise StoreEncodeError(f"could not encode tasks: {exc}") from exc

        tmp = self.file_path.with_suffix(".tmp")
        try:
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self.file_path)
        except OSError as exc:
            raise StoreIOError(f"could not write task file {self.file_path}: {exc}") from exc

        logger.debug("Saved %d tasks to %s", len(self.tasks), self.file_path)

    # ---- mutations ----

    def add(self, description: str, priority: str | Priority = Priority.MEDIUM) -> Task:
        if not description or not description.strip():
            raise InvalidDescriptionError("task description must not be empty")
        prio = Priority.parse(priority)

        for t in self.tasks:
            if t.description == description:
                raise DuplicateTaskError(description)

        now = self._now()
        task = Task(
            id=generate_id(description, now),
            description=description,
            priority=prio,
            created_at=now,
        )
        self.tasks.append(task)
        logger.info("Added task id=%s priority=%s", task.id, task.priority)
        return task

    def find_task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def complete(self, task_id: str) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        if task.completed:
            # Re-completing overwrites the original completion record.
            logger.warning(
                "Task %s was already completed at %s; re-stamping.", task.id, task.completed_at
            )

        now = self._now()
        task.completed = True
        task.completed_at = now
        task.took_time = now - task.created_at
        logger.info("Completed task id=%s took=%s", task.id, task.took_time)
        return task

    def remove(self, task_id: str) -> Task:
        for i, t in enumerate(self.tasks):
            if t.id == task_id:
                del self.tasks[i]
                logger.info("Removed task id=%s", task_id)
                return t
        raise TaskNotFoundError(task_id)

    def clean_up(self) -> None:
        logger.info("Cleaning up %d tasks.", len(self.tasks))
        self.tasks = []

    # ---- queries ----

    def pending(self) -> list[Task]:
        return [t for t in self.tasks if not t.completed]
