import os
import tempfile
import unittest
from unittest import mock

from infrastructure.config import configure_logging, load_settings
from infrastructure.db.factory import create_password_hasher, create_repositories
from infrastructure.db.account_repository_sqlite import SqliteAccountRepository
from infrastructure.db.session_repository_sqlite import SqliteSessionRepository
from infrastructure.memory.session_repository import InMemorySessionRepository


class LoadSettingsTests(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = load_settings(dotenv=False)

        self.assertEqual(settings.db_backend, "sqlite")
        self.assertEqual(settings.db_path, "accounts.db")
        self.assertEqual(settings.session_backend, "db")
        self.assertIsNone(settings.argon2_time_cost)
        self.assertEqual(settings.postgres_params["port"], 5432)
        self.assertEqual(settings.log_level, "INFO")

    def test_reads_environment(self):
        env = {
            "DB_BACKEND": "Postgres",
            "POSTGRES_HOST": "db",
            "POSTGRES_PORT": "6543",
            "ARGON2_TIME_COST": "4",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings(dotenv=False)

        self.assertEqual(settings.db_backend, "postgres")
        self.assertEqual(settings.postgres_params["host"], "db")
        self.assertEqual(settings.postgres_params["port"], 6543)
        self.assertEqual(settings.argon2_time_cost, 4)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_invalid_values(self):
        for env in (
            {"DB_BACKEND": "mongo"},
            {"SESSION_BACKEND": "cookie"},
            {"ARGON2_MEMORY_COST": "lots"},
            {"ARGON2_PARALLELISM": "0"},
            {"LOG_LEVEL": "LOUD"},
        ):
            with self.subTest(env=env):
                with mock.patch.dict(os.environ, env, clear=True):
                    with self.assertRaises(RuntimeError):
                        load_settings(dotenv=False)


class ConfigureLoggingTests(unittest.TestCase):
    def test_applies_configured_level(self):
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "warning"}, clear=True):
            settings = load_settings(dotenv=False)

        with mock.patch("logging.basicConfig") as basic_config:
            configure_logging(settings)

        self.assertEqual(basic_config.call_args.kwargs["level"], "WARNING")


class FactoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tmpdir.name, "accounts.db")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_sqlite_backends(self):
        with mock.patch.dict(os.environ, {"DB_PATH": self.db_path}, clear=True):
            settings = load_settings(dotenv=False)

        accounts, sessions = create_repositories(settings)

        self.assertIsInstance(accounts, SqliteAccountRepository)
        self.assertIsInstance(sessions, SqliteSessionRepository)

    def test_memory_sessions(self):
        env = {"DB_PATH": self.db_path, "SESSION_BACKEND": "memory"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings(dotenv=False)

        _, sessions = create_repositories(settings)

        self.assertIsInstance(sessions, InMemorySessionRepository)

    def test_password_hasher_uses_configured_cost(self):
        env = {"ARGON2_TIME_COST": "1", "ARGON2_MEMORY_COST": "8", "ARGON2_PARALLELISM": "1"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings(dotenv=False)

        hasher = create_password_hasher(settings)
        hashed = hasher.hash("secret1")

        self.assertIn("m=8,t=1,p=1", hashed)
        self.assertTrue(hasher.verify(hashed, "secret1"))


if __name__ == "__main__":
    unittest.main()
