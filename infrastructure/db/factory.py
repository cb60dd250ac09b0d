from __future__ import annotations

import logging
from typing import Tuple

from application.passwords import PasswordHasher
from domain.repositories import AccountRepository, SessionRepository
from infrastructure.config import Settings
from infrastructure.db.account_repository_postgres import PostgresAccountRepository
from infrastructure.db.account_repository_sqlite import SqliteAccountRepository
from infrastructure.db.session_repository_postgres import PostgresSessionRepository
from infrastructure.db.session_repository_sqlite import SqliteSessionRepository
from infrastructure.memory.session_repository import InMemorySessionRepository

logger = logging.getLogger(__name__)


def create_repositories(settings: Settings) -> Tuple[AccountRepository, SessionRepository]:
    """Instantiate the account and session stores selected by `settings`."""

    if settings.db_backend == "postgres":
        logger.info("Using Postgres account store at %s", settings.postgres_params.get("host"))
        accounts: AccountRepository = PostgresAccountRepository(settings.postgres_params)
    else:
        logger.info("Using SQLite account store at %s", settings.db_path)
        accounts = SqliteAccountRepository(settings.db_path)

    sessions: SessionRepository
    if settings.session_backend == "memory":
        sessions = InMemorySessionRepository()
    elif settings.db_backend == "postgres":
        sessions = PostgresSessionRepository(settings.postgres_params)
    else:
        sessions = SqliteSessionRepository(settings.db_path)

    return accounts, sessions


def create_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )
