# src/tasker/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable

from ..core.ports import TaskRepo
from ..errors import UsageError
from ..tasks.task_models import Outcome

CommandHandler = Callable[[TaskRepo, argparse.Namespace], list[str]]
ArgsConfigurer = Callable[[argparse.ArgumentParser], None]

MAX_TASK_ID = 2**32 - 1

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Subcommand registry: owns the argparse subparsers and routes parsed args to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._configure: dict[str, ArgsConfigurer | None] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        configure: ArgsConfigurer | None = None,
    ) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._configure[key] = configure

    def names(self) -> list[str]:
        return list(self._handlers)

    def install(self, parser: argparse.ArgumentParser) -> None:
        """Add one subparser per registered command; the chosen name lands in args.command."""
        sub = parser.add_subparsers(dest="command", metavar="COMMAND")
        sub.required = True
        for name, help_text in self._help.items():
            p = sub.add_parser(name, help=help_text, description=help_text)
            configure = self._configure[name]
            if configure is not None:
                configure(p)

    def handle(self, store: TaskRepo, args: argparse.Namespace) -> list[str]:
        """Run the handler selected by args.command and return its output lines."""
        name = getattr(args, "command", None)
        handler = self._handlers.get(name) if name else None
        if handler is None:
            raise UsageError(f"unknown command: {name} (choose from {', '.join(self.names())})")
        logger.debug("Dispatching command=%s", name)
        return handler(store, args)


registry = CommandRegistry()


def task_id(raw: str) -> int:
    """argparse type for task ids: unsigned 32-bit integer."""
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid task id: {raw!r}") from None
    if value < 0 or value > MAX_TASK_ID:
        raise argparse.ArgumentTypeError(f"task id out of range: {raw!r}")
    return value


def _configure_add(p: argparse.ArgumentParser) -> None:
    p.add_argument("description", help="task text (quote it if it contains spaces)")


def _configure_id(p: argparse.ArgumentParser) -> None:
    p.add_argument("id", type=task_id, help="task id as shown by 'list'")


def cmd_add(store: TaskRepo, args: argparse.Namespace) -> list[str]:
    new_id = store.add(args.description)
    return [f"Added task with ID: {new_id}"]


def cmd_list(store: TaskRepo, args: argparse.Namespace) -> list[str]:
    return [f"{t.id} {t.checkbox}: {t.description}" for t in store.list_tasks()]


def cmd_complete(store: TaskRepo, args: argparse.Namespace) -> list[str]:
    if store.complete(args.id) is Outcome.NOT_FOUND:
        return [f"Task {args.id} not found"]
    return [f"Completed task: {args.id}"]


def cmd_delete(store: TaskRepo, args: argparse.Namespace) -> list[str]:
    if store.delete(args.id) is Outcome.NOT_FOUND:
        return [f"Task {args.id} not found"]
    return [f"Deleted task: {args.id}"]


registry.register("add", cmd_add, help_text="Add a new task.", configure=_configure_add)
registry.register("list", cmd_list, help_text="List all tasks.")
registry.register("complete", cmd_complete, help_text="Mark a task as done.", configure=_configure_id)
registry.register("delete", cmd_delete, help_text="Delete a task.", configure=_configure_id)
