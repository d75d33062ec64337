# src/task_cli/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

from .errors import InvalidPriorityError

# Written for tasks that were never completed; read back as None.
ZERO_TIME = "0001-01-01T00:00:00Z"

_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")
_NS_PER_US = 1000


class Priority(StrEnum):
    """Task urgency. Stored lower-case; parsed case-insensitively."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise InvalidPriorityError(str(raw)) from None


def is_valid_priority(value: str) -> bool:
    return value.lower() in {p.value for p in Priority}


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ZERO_TIME
    return value.isoformat()


def parse_timestamp(raw: str | None) -> datetime | None:
    """
    Parse an RFC 3339 timestamp.

    Accepts a trailing "Z" and more than six fractional digits (the extra
    digits are dropped). The zero time maps to None. Naive values are taken
    as UTC.
    """
    if not raw:
        return None
    text = _EXTRA_FRACTION_RE.sub(r"\1", str(raw).strip())
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.year == 1:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def duration_to_ns(value: timedelta) -> int:
    return (value // timedelta(microseconds=1)) * _NS_PER_US


def ns_to_duration(raw: int) -> timedelta:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"duration must be integer nanoseconds, got {raw!r}")
    return timedelta(microseconds=raw // _NS_PER_US)


@dataclass(slots=True)
class Task:
    id: str
    description: str
    priority: Priority
    created_at: datetime
    completed: bool = False
    completed_at: datetime | None = None
    took_time: timedelta = timedelta(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "priority": self.priority.value,
            "completed": self.completed,
            "created_at": format_timestamp(self.created_at),
            "completed_at": format_timestamp(self.completed_at),
            "took_time": duration_to_ns(self.took_time),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """Build a Task from its JSON form. Raises KeyError/TypeError/ValueError on bad input."""
        if not isinstance(raw, dict):
            raise TypeError(f"task entry must be an object, got {type(raw).__name__}")

        task_id = raw["id"]
        description = raw["description"]
        if not isinstance(task_id, str) or not isinstance(description, str):
            raise TypeError("task id and description must be strings")

        created_at = parse_timestamp(raw.get("created_at"))
        if created_at is None:
            raise ValueError(f"task {task_id} has no created_at")

        completed = raw.get("completed")
        if completed is None:
            completed = False
        if not isinstance(completed, bool):
            raise TypeError(f"task {task_id}: completed must be a boolean, got {completed!r}")

        took_time = raw.get("took_time")

        return cls(
            id=task_id,
            description=description,
            priority=Priority.parse(raw.get("priority") or Priority.MEDIUM),
            created_at=created_at,
            completed=completed,
            completed_at=parse_timestamp(raw.get("completed_at")),
            took_time=ns_to_duration(0 if took_time is None else took_time),
        )
