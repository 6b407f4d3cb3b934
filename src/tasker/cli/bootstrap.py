# src/tasker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns Settings into a concrete
store. Keeping settings injectable makes the app easy to test and avoids
hidden global config reads.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.ports import TaskRepo
from ..tasks.json_store import JsonTaskStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(*, settings: Settings | None = None) -> TaskRepo:
    """
    Open (and initialize if needed) the store selected by settings.backend.

    Raises StorageUnavailable / CorruptData from the store unchanged.
    """
    if settings is None:
        settings = get_settings()

    path = settings.store_path
    logger.debug("Opening %s store at %s", settings.backend, path)

    if settings.backend == "json":
        return JsonTaskStore(path)
    if settings.backend == "sqlite":
        return TaskStore(path)
    raise ValueError(f"unknown backend: {settings.backend!r}")
