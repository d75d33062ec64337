# src/task_cli/core/ports.py

"""
Ports (interfaces) used by the command layer.

Commands depend on Protocols instead of the terminal, so that interactive
steps can be replaced in tests.
"""

from __future__ import annotations

import sys
from typing import Protocol

YES_ANSWERS = frozenset({"y", "yes"})


class Confirmer(Protocol):
    """Answer a yes/no question. True means the user agreed."""

    def __call__(self, prompt: str) -> bool: ...


def console_confirm(prompt: str) -> bool:
    """Ask on stdout and block on one line of stdin. EOF counts as "no"."""
    sys.stdout.write(prompt)
    sys.stdout.flush()
    try:
        answer = input()
    except EOFError:
        sys.stdout.write("\n")
        return False
    return answer.strip().lower() in YES_ANSWERS


def always_confirm(prompt: str) -> bool:
    return True
