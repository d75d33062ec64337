# src/task_cli/tasks/task_ids.py

"""
Short task ids.

An id is the SHA-256 of the description plus a high-precision timestamp,
folded to an integer and rendered through Sqids, then cut to ID_LENGTH
characters. Two tasks with the same description created at different
instants get different ids; the same description at the same instant is
already rejected by the duplicate check in the store.
"""

from __future__ import annotations

import hashlib
import sys
from datetime import UTC, datetime

from sqids import Sqids

ID_LENGTH = 5

_sqids = Sqids(min_length=ID_LENGTH)


def generate_id(description: str, now: datetime | None = None) -> str:
    if now is None:
        now = datetime.now(UTC)

    h = hashlib.sha256()
    h.update(description.encode("utf-8"))
    h.update(now.isoformat(timespec="microseconds").encode("ascii"))
    digest = h.digest()

    # Sqids only encodes numbers up to sys.maxsize.
    num = int.from_bytes(digest[:8], "big") & sys.maxsize
    return _sqids.encode([num])[:ID_LENGTH]
