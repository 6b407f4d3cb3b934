# src/tasker/cli/main.py

"""
CLI entrypoint.

One invocation runs exactly one command:
parse argv -> load settings -> set up logging -> open store -> dispatch -> save -> print.

Exit codes:
- 0: command ran (including "Task N not found")
- 1: storage could not be opened, read or written, or its content is corrupt
- 2: usage error or invalid argument value
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ..config import BACKENDS, Settings, get_settings
from ..errors import InvalidInput, StorageUnavailable, UsageError
from ..logging_setup import setup_logging
from .bootstrap import create_store
from .commands import registry

logger = logging.getLogger(__name__)

PROG = "tasker"

EXIT_OK = 0
EXIT_STORAGE = 1
EXIT_USAGE = 2


class _ArgumentParser(argparse.ArgumentParser):
    """argparse that raises UsageError instead of exiting, so main() owns the exit code."""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message, usage=self.format_usage())


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, description="A simple CLI task manager.")
    parser.add_argument("--db", type=Path, default=None, help="path of the task store file")
    parser.add_argument("--backend", choices=BACKENDS, default=None, help="storage backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    registry.install(parser)
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    changes: dict[str, object] = {}
    if args.backend is not None:
        changes["backend"] = args.backend
    if args.db is not None:
        changes["db_path"] = args.db
    return dataclasses.replace(settings, **changes) if changes else settings


def _error(message: str) -> None:
    print(f"{PROG}: error: {message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        sys.stderr.write(exc.usage)
        _error(str(exc))
        return EXIT_USAGE

    settings = _apply_overrides(get_settings(), args)

    if args.verbose:
        console_level = logging.DEBUG
    else:
        console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(console_level=console_level, log_file=settings.log_file)

    store = None
    try:
        store = create_store(settings=settings)
        lines = registry.handle(store, args)
        store.save()
    except (UsageError, InvalidInput) as exc:
        _error(str(exc))
        return EXIT_USAGE
    except StorageUnavailable as exc:
        logger.debug("Storage failure", exc_info=True)
        _error(str(exc))
        return EXIT_STORAGE
    finally:
        if store is not None:
            store.close()

    for line in lines:
        print(line)
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
