# src/task_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root" for one invocation:
- resolves settings once,
- loads the task store and guarantees a save attempt on exit,
- wires store, settings and confirmer into a CommandContext.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ..config import Settings
from ..core.ports import Confirmer, always_confirm, console_confirm
from ..core.state import CommandContext
from ..tasks.task_store import Clock, TaskStore

logger = logging.getLogger(__name__)


@contextmanager
def open_store(path: str | Path, *, now: Clock | None = None) -> Iterator[TaskStore]:
    """
    Load the store at path and save it when the block exits.

    The save runs on success and on failure. When the block raised, a failing
    save is logged and the original error propagates; otherwise the save
    error is raised, since an unsaved mutation is a failed command.
    """
    store = TaskStore.load(path, now=now)
    try:
        yield store
    except BaseException:
        try:
            store.save()
        except Exception:
            logger.exception("Failed to save tasks to %s after command error.", store.file_path)
        raise
    store.save()


def create_context(
    settings: Settings,
    store: TaskStore | None = None,
    *,
    confirm: Confirmer | None = None,
    assume_yes: bool = False,
) -> CommandContext:
    if assume_yes:
        confirm = always_confirm
    return CommandContext(
        settings=settings,
        store=store,
        confirm=confirm or console_confirm,
    )
