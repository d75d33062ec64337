# tests/test_task_models.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from task_cli.tasks.errors import InvalidPriorityError
from task_cli.tasks.task_models import (
    Priority,
    Task,
    duration_to_ns,
    is_valid_priority,
    parse_timestamp,
)


@pytest.mark.parametrize("value", ["low", "Low", "LOW", "medium", "high"])
def test_is_valid_priority_accepts(value: str) -> None:
    assert is_valid_priority(value)


@pytest.mark.parametrize("value", ["urgent", "", "med"])
def test_is_valid_priority_rejects(value: str) -> None:
    assert not is_valid_priority(value)


def test_priority_parse_normalizes_case() -> None:
    assert Priority.parse(" HIGH ") is Priority.HIGH
    assert Priority.parse(Priority.LOW) is Priority.LOW
    with pytest.raises(InvalidPriorityError, match="invalid priority urgent"):
        Priority.parse("urgent")


def test_parse_timestamp_zero_and_naive() -> None:
    assert parse_timestamp("0001-01-01T00:00:00Z") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None

    naive = parse_timestamp("2024-05-01T09:30:00")
    assert naive == datetime(2024, 5, 1, 9, 30, tzinfo=UTC)


def test_duration_to_ns() -> None:
    assert duration_to_ns(timedelta(0)) == 0
    assert duration_to_ns(timedelta(seconds=1, microseconds=5)) == 1_000_005_000


def test_task_from_dict_defaults_missing_optional_fields() -> None:
    task = Task.from_dict(
        {"id": "abcde", "description": "d", "created_at": "2024-05-01T09:30:00Z"}
    )

    assert task.priority is Priority.MEDIUM
    assert task.completed is False
    assert task.completed_at is None
    assert task.took_time == timedelta(0)
