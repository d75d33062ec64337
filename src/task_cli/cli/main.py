# src/task_cli/cli/main.py

"""
CLI entrypoint.

One invocation is one load -> command -> save cycle:
parse arguments, resolve settings, set up logging, open the store (unless
the command does not need it), run the handler, print its reply.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from ..config import get_settings
from ..core.ports import Confirmer
from ..logging_setup import level_from_name, setup_logging
from ..tasks.errors import TaskError
from ..tasks.task_store import Clock
from .bootstrap import create_context, open_store
from .commands import CommandRegistry, registry

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "task is a CLI task tracker that helps you organize your work and personal tasks.\n"
    "Store tasks locally with priorities, mark them complete, and keep track of your productivity."
)


def _global_options() -> argparse.ArgumentParser:
    # SUPPRESS defaults so that options given before and after the
    # subcommand do not overwrite each other.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--file", default=argparse.SUPPRESS, help="Path to storage file"
    )
    common.add_argument(
        "-p",
        "--priority",
        default=argparse.SUPPRESS,
        help="Task priority (low, medium, high)",
    )
    common.add_argument(
        "-y",
        "--yes",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Answer yes to every confirmation prompt",
    )
    return common


def build_parser(commands: CommandRegistry = registry) -> argparse.ArgumentParser:
    common = _global_options()
    parser = argparse.ArgumentParser(
        prog="task",
        description=DESCRIPTION,
        parents=[common],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", metavar="command")
    for command in commands:
        p = sub.add_parser(
            command.name,
            aliases=command.aliases,
            help=command.help_text,
            description=command.help_text,
            parents=[common],
        )
        if command.configure is not None:
            command.configure(p)
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    confirm: Confirmer | None = None,
    now: Clock | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "command", None):
        parser.print_help()
        return 0

    settings = get_settings(file_flag=getattr(args, "file", None))
    setup_logging(console_level=level_from_name(settings.log_level), log_dir=settings.log_dir)
    logger.debug("Using task file %s (config=%s)", settings.tasks_file, settings.config_file)

    command = registry.get(args.command)
    assume_yes = bool(getattr(args, "yes", False))

    try:
        if command is not None and command.needs_store:
            with open_store(settings.tasks_file, now=now) as store:
                ctx = create_context(settings, store, confirm=confirm, assume_yes=assume_yes)
                reply = registry.handle(ctx, args)
        else:
            ctx = create_context(settings, confirm=confirm, assume_yes=assume_yes)
            reply = registry.handle(ctx, args)
    except TaskError as exc:
        logger.debug("Command %s failed.", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if reply:
        print(reply)
    return 0


def run() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
