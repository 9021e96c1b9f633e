import os
import tempfile
import unittest

from cardj.config import Settings
from cardj.db import InMemoryDbClient, SqlDbClient
from cardj.dependencies import select_db_client
from cardj.schema import NewUser
from cardj.sessions import InMemorySessionStore


def _settings(**overrides) -> Settings:
    values = {"database_url": None, "use_in_memory_backends": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class SelectDbClientTests(unittest.TestCase):
    def test_no_database_url_uses_in_memory(self):
        db = select_db_client(_settings())
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertEqual(db.mode, "in_memory")

        # Degraded mode still serves users within the process.
        user = db.create_user(NewUser(username="ana", email="ana@mail.com", password="x"))
        self.assertEqual(db.get_user(user.id), user)

    def test_in_memory_flag_wins_over_database_url(self):
        db = select_db_client(
            _settings(
                database_url="sqlite+pysqlite:///:memory:", use_in_memory_backends=True
            )
        )
        self.assertIsInstance(db, InMemoryDbClient)

    def test_reachable_database_is_used(self):
        db = select_db_client(_settings(database_url="sqlite+pysqlite:///:memory:"))
        self.assertIsInstance(db, SqlDbClient)
        self.assertEqual(db.mode, "persistent")
        db.engine.dispose()

    def test_invalid_url_falls_back(self):
        with self.assertLogs("cardj.dependencies", level="WARNING") as logs:
            db = select_db_client(_settings(database_url="not a database url"))
        self.assertIsInstance(db, InMemoryDbClient)
        self.assertTrue(any("Falling back" in line for line in logs.output))

    def test_unreachable_database_falls_back(self):
        missing_dir = os.path.join(tempfile.gettempdir(), "cardj-missing-dir", "nested")
        url = f"sqlite+pysqlite:///{missing_dir}/cardj.db"
        db = select_db_client(_settings(database_url=url))
        self.assertIsInstance(db, InMemoryDbClient)

    def test_session_settings_applied_to_fallback(self):
        db = select_db_client(
            _settings(session_ttl_seconds=120, session_check_period_seconds=30)
        )
        self.assertIsInstance(db.session_store, InMemorySessionStore)
        self.assertEqual(db.session_store.ttl_seconds, 120)
        self.assertEqual(db.session_store.check_period_seconds, 30)


if __name__ == "__main__":
    unittest.main()
