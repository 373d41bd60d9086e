"""Settings for the task tracker, read from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

STORE_BACKENDS = ("sqlite", "memory")


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.split(",") if p.strip()]


@dataclass(frozen=True)
class Settings:
    app_name: str = "Task Tracker"
    log_level: str = "INFO"
    log_dir: Path = Path("./logs")
    log_to_file: bool = True

    # "sqlite" or "memory"
    task_store: str = "sqlite"
    db_path: str = "./data/tasks.db"

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(override=False)

    task_store = _env("TASK_STORE", "sqlite").lower()
    if task_store not in STORE_BACKENDS:
        raise ValueError(f"TASK_STORE must be one of {', '.join(STORE_BACKENDS)}, got {task_store!r}")

    return Settings(
        app_name=_env("APP_NAME", "Task Tracker"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        log_dir=Path(_env("LOG_DIR", "./logs")).expanduser(),
        log_to_file=_env_bool("LOG_TO_FILE", True),
        task_store=task_store,
        db_path=_env("DB_PATH", "./data/tasks.db"),
        host=_env("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3001),
        cors_origins=_env_list("CORS_ORIGINS", ["*"]),
    )
