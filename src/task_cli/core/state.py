# src/task_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.task_store import TaskStore
from .ports import Confirmer, console_confirm


@dataclass(slots=True)
class CommandContext:
    """
    Everything a command handler needs for one invocation.

    store is None for commands that do not touch the task file (e.g. version).
    """

    settings: Settings
    store: TaskStore | None = None
    confirm: Confirmer = console_confirm

    def require_store(self) -> TaskStore:
        if self.store is None:
            raise RuntimeError("this command needs a loaded task store")
        return self.store
