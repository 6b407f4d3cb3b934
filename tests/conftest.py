# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasker.tasks.json_store import JsonTaskStore
from tasker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with cli.bootstrap.

    We intentionally use a SimpleNamespace rather than Settings.from_env(),
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        backend="sqlite",
        store_path=tmp_path / "tasks.db",
        log_level="WARNING",
        log_file=None,
    )


STORE_FACTORIES = {
    "sqlite": (TaskStore, "tasks.db"),
    "json": (JsonTaskStore, "tasks.json"),
}


@pytest.fixture(params=sorted(STORE_FACTORIES))
def open_store(request, tmp_path: Path):
    """
    Factory that (re)opens a store of the parametrized backend on the same file.

    Reopening is how tests simulate a new process invocation.
    """
    cls, filename = STORE_FACTORIES[request.param]
    path = tmp_path / filename

    def _open():
        return cls(path)

    _open.backend = request.param
    _open.path = path
    return _open


@pytest.fixture()
def store(open_store):
    return open_store()
