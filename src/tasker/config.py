# src/tasker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole process.
- Every variable is optional; with none set the CLI keeps its store
  in the working directory.
- The store path is passed into the store explicitly, never read globally.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASKER"

BACKENDS = ("sqlite", "json")
DEFAULT_BACKEND = "sqlite"
DEFAULT_PATHS = {
    "sqlite": Path("tasks.db"),
    "json": Path("tasks.json"),
}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# .env is looked up from the working directory, not from this file.
load_dotenv(find_dotenv(usecwd=True), override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Storage ----
    backend: str
    db_path: Path | None

    # ---- Logging ----
    log_level: str
    log_file: Path | None

    @property
    def store_path(self) -> Path:
        """Explicit db_path, or the backend's default file in the working directory."""
        if self.db_path is not None:
            return self.db_path
        return DEFAULT_PATHS[self.backend]

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            backend=_env_choice(_k("BACKEND"), BACKENDS, DEFAULT_BACKEND),
            db_path=_env_path(_k("DB_PATH"), None),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_file=_env_path(_k("LOG_FILE"), None),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
