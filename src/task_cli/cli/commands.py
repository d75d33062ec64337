# src/task_cli/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from importlib import metadata

from .. import DIST_NAME, __version__
from ..core.state import CommandContext
from ..tasks.errors import InvalidPriorityError, TaskNotFoundError
from ..tasks.task_models import is_valid_priority
from .render import render_tasks

CommandHandler = Callable[[CommandContext, argparse.Namespace], str]
ArgumentConfigurator = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    configure: ArgumentConfigurator | None = None
    needs_store: bool = True
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """Subcommand registry; the argparse parser is built from it (see cli.main)."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._by_alias: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        configure: ArgumentConfigurator | None = None,
        needs_store: bool = True,
        aliases: list[str] | None = None,
    ) -> None:
        key = name.lower()
        self._commands[key] = Command(
            name=key,
            handler=handler,
            help_text=help_text,
            configure=configure,
            needs_store=needs_store,
            aliases=list(aliases or []),
        )
        for alias in aliases or []:
            self._by_alias[alias.lower()] = key

    def get(self, name: str) -> Command | None:
        key = name.lower()
        return self._commands.get(self._by_alias.get(key, key))

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def handle(self, ctx: CommandContext, args: argparse.Namespace) -> str:
        """Run the handler selected by args.command and return its reply."""
        command = self.get(str(args.command))
        if command is None:
            return f"Unknown command: {args.command}. Use --help to list available commands."
        logger.debug("Running command %s", command.name)
        return command.handler(ctx, args)


registry = CommandRegistry()


def resolve_version() -> str:
    v = __version__
    if v == "dev":
        try:
            v = metadata.version(DIST_NAME)
        except metadata.PackageNotFoundError:
            pass
    return v


# ---- argument configurators ----


def _add_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("description", nargs="+", help="Task description (words are joined).")


def _list_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-a", "--all", dest="show_all", action="store_true", help="Show completed tasks"
    )


def _id_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("id", help="Task id")


# ---- handlers ----


def cmd_add(ctx: CommandContext, args: argparse.Namespace) -> str:
    priority = getattr(args, "priority", None) or ctx.settings.default_priority
    if not is_valid_priority(priority):
        raise InvalidPriorityError(priority)

    description = " ".join(args.description)
    task = ctx.require_store().add(description, priority)
    return f"Added task {task.id}: {task.description} [{task.priority}]"


def cmd_list(ctx: CommandContext, args: argparse.Namespace) -> str:
    store = ctx.require_store()
    shown = store.tasks if getattr(args, "show_all", False) else store.pending()
    return render_tasks(shown, store_empty=len(store) == 0)


def cmd_remove(ctx: CommandContext, args: argparse.Namespace) -> str:
    store = ctx.require_store()
    task = store.find_task(args.id)
    if task is None:
        raise TaskNotFoundError(args.id)

    if ctx.settings.confirm_remove and not ctx.confirm(
        f"Remove task {task.id} ({task.description})? (y/n): "
    ):
        return "Removal cancelled."

    removed = store.remove(args.id)
    return f"Removed task {removed.id}: {removed.description}"


def cmd_complete(ctx: CommandContext, args: argparse.Namespace) -> str:
    ctx.require_store().complete(args.id)
    return f"Task {args.id} marked as completed."


def cmd_clean(ctx: CommandContext, args: argparse.Namespace) -> str:
    if not ctx.confirm("Are you sure you want to clean all tasks? (y/n): "):
        return "Cleanup cancelled."
    ctx.require_store().clean_up()
    return "All tasks cleaned up."


def cmd_version(ctx: CommandContext, args: argparse.Namespace) -> str:
    return f"task version: {resolve_version()}"


registry.register("add", cmd_add, help_text="Add a new task", configure=_add_args)
registry.register("list", cmd_list, help_text="List tasks", configure=_list_args, aliases=["ls"])
registry.register(
    "remove", cmd_remove, help_text="Remove a task by ID", configure=_id_arg, aliases=["rm"]
)
registry.register(
    "complete", cmd_complete, help_text="Mark a task as completed", configure=_id_arg, aliases=["done"]
)
registry.register("clean", cmd_clean, help_text="Clean all tasks")
registry.register(
    "version", cmd_version, help_text="Print the version number of task", needs_store=False
)
