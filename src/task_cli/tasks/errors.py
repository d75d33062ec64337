# src/task_cli/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for every error shown to the user as a command failure."""


class StoreIOError(TaskError):
    """Reading, writing or creating the directory of the task file failed."""


class StoreDecodeError(TaskError):
    """The task file exists but does not hold a valid task list."""


class StoreEncodeError(TaskError):
    pass


class DuplicateTaskError(TaskError):
    def __init__(self, description: str) -> None:
        super().__init__(f"task already exists: {description}")
        self.description = description


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class InvalidPriorityError(TaskError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid priority {value}, must be low, medium, or high")
        self.value = value


class InvalidDescriptionError(TaskError, ValueError):
    pass
