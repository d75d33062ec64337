# src/task_cli/cli/render.py

"""Plain-text table rendering for `task list`."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from ..tasks.task_models import Task

DESCRIPTION_WIDTH = 50
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
PLACEHOLDER = "-"
NO_TASKS = "No tasks found."

ROW_FORMAT = "{:<8} {:<10} {:<50} {:<10} {:<22} {:<22} {:<12}"
HEADER = ROW_FORMAT.format(
    "ID", "STATUS", "DESCRIPTION", "PRIORITY", "CREATED", "COMPLETED", "TOOK TIME"
)


def truncate(text: str, limit: int = DESCRIPTION_WIDTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def format_time(value: datetime) -> str:
    return value.astimezone().strftime(TIME_FORMAT)


def format_duration(value: timedelta) -> str:
    """Whole seconds in "1h2m3s" form ("0s", "45s", "2m0s", "1h0m5s")."""
    sign = "-" if value < timedelta(0) else ""
    total = abs(value) // timedelta(seconds=1)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def format_row(task: Task) -> str:
    status = "PENDING"
    completed_at = PLACEHOLDER
    took_time = PLACEHOLDER
    if task.completed:
        status = "DONE"
        if task.completed_at is not None:
            completed_at = format_time(task.completed_at)
        took_time = format_duration(task.took_time)

    return ROW_FORMAT.format(
        task.id,
        status,
        truncate(task.description),
        task.priority.upper(),
        format_time(task.created_at),
        completed_at,
        took_time,
    )


def render_tasks(tasks: Iterable[Task], *, store_empty: bool | None = None) -> str:
    """
    Render the task table for the given (already filtered) tasks.

    An empty store renders NO_TASKS. Otherwise the header is always shown,
    even when the filter left no rows. store_empty defaults to "no tasks given".
    """
    tasks = list(tasks)
    if store_empty is None:
        store_empty = not tasks
    if store_empty:
        return NO_TASKS

    lines = [HEADER, "-" * len(HEADER)]
    lines.extend(format_row(t) for t in tasks)
    return "\n".join(lines)
