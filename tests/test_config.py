# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

from tasker.cli.bootstrap import create_store
from tasker.config import Settings
from tasker.logging_setup import setup_logging
from tasker.tasks.json_store import JsonTaskStore
from tasker.tasks.task_store import TaskStore


def _clear(monkeypatch) -> None:
    for name in ("TASKER_BACKEND", "TASKER_DB_PATH", "TASKER_LOG_LEVEL", "TASKER_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    _clear(monkeypatch)
    s = Settings.from_env()
    assert s.backend == "sqlite"
    assert s.db_path is None
    assert s.store_path == Path("tasks.db")
    assert s.log_level == "WARNING"
    assert s.log_file is None


def test_json_backend_default_path(monkeypatch) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("TASKER_BACKEND", "JSON")
    assert Settings.from_env().store_path == Path("tasks.json")


def test_unknown_backend_falls_back(monkeypatch) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("TASKER_BACKEND", "postgres")
    assert Settings.from_env().backend == "sqlite"


def test_explicit_path_and_logging(monkeypatch, tmp_path: Path) -> None:
    _clear(monkeypatch)
    monkeypatch.setenv("TASKER_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("TASKER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKER_LOG_FILE", str(tmp_path / "tasker.log"))
    s = Settings.from_env()
    assert s.store_path == tmp_path / "x.db"
    assert s.log_level == "DEBUG"
    assert s.log_file == tmp_path / "tasker.log"


def test_create_store_picks_backend(settings, tmp_path: Path) -> None:
    assert isinstance(create_store(settings=settings), TaskStore)

    settings.backend = "json"
    settings.store_path = tmp_path / "tasks.json"
    assert isinstance(create_store(settings=settings), JsonTaskStore)
    assert settings.store_path.exists()


def test_setup_logging_writes_debug_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tasker.log"
    setup_logging(console_level=logging.ERROR, log_file=log_file)
    logging.getLogger("tasker.test").debug("hello from test")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "hello from test" in log_file.read_text("utf-8")
