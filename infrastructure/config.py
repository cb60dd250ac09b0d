from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

DB_BACKENDS = ("sqlite", "postgres")
SESSION_BACKENDS = ("db", "memory")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from the environment (and `.env`)."""

    db_backend: str = "sqlite"
    db_path: str = "accounts.db"
    postgres_params: dict = field(default_factory=dict)
    session_backend: str = "db"
    argon2_time_cost: Optional[int] = None
    argon2_memory_cost: Optional[int] = None
    argon2_parallelism: Optional[int] = None
    log_level: str = "INFO"


def _optional_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {value}.")
    return value


def _choice(name: str, default: str, choices: tuple) -> str:
    value = os.environ.get(name, default).strip().lower()
    if value not in choices:
        raise RuntimeError(f"{name} must be one of {', '.join(choices)}, got {value!r}.")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build `Settings` from environment variables.

    Raises RuntimeError when a variable holds an unusable value.
    """

    if dotenv:
        load_dotenv()

    port = _optional_int("POSTGRES_PORT") or 5432
    postgres_params = {
        "host": os.environ.get("POSTGRES_HOST", "localhost"),
        "port": port,
        "dbname": os.environ.get("POSTGRES_DB", "accounts"),
        "user": os.environ.get("POSTGRES_USER", "postgres"),
        "password": os.environ.get("POSTGRES_PASSWORD", ""),
    }

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL is not a valid logging level: {log_level!r}.")

    return Settings(
        db_backend=_choice("DB_BACKEND", "sqlite", DB_BACKENDS),
        db_path=os.environ.get("DB_PATH", "accounts.db"),
        postgres_params=postgres_params,
        session_backend=_choice("SESSION_BACKEND", "db", SESSION_BACKENDS),
        argon2_time_cost=_optional_int("ARGON2_TIME_COST"),
        argon2_memory_cost=_optional_int("ARGON2_MEMORY_COST"),
        argon2_parallelism=_optional_int("ARGON2_PARALLELISM"),
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
