import sqlite3
from datetime import UTC, datetime
from pathlib import Path

import pytest

from src.adapters.auth.session_store import InMemorySessionStore
from src.app_shell.context import create_install_ports

DB_FILE = "fernpress.db"
SECRET_KEY = "test-secret-key"


class FakeTime:
    def now_utc(self):
        return datetime(2026, 1, 12, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def deploy_root(tmp_path) -> Path:
    """A blank deployment directory with an empty SQLite database file."""
    root = tmp_path / "site"
    root.mkdir()
    sqlite3.connect(root / DB_FILE).close()
    return root


@pytest.fixture
def install_form() -> dict[str, str]:
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "username": "Jane Doe",
        "password": "correct-horse-battery",
        "driver": "sqlite",
        "db-host": "",
        "db-port": "",
        "db-database": DB_FILE,
        "db-user": "fern",
        "db-password": "",
        "db-prefix": "fp_",
    }


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def install_ports(deploy_root, session_store):
    return create_install_ports(deploy_root, SECRET_KEY, session_store)


@pytest.fixture
def query(deploy_root):
    """Run a read query against the deployment database."""

    def _query(sql: str, params: tuple = ()) -> list[dict]:
        conn = sqlite3.connect(deploy_root / DB_FILE)
        conn.row_factory = sqlite3.Row
        try:
            return [dict(row) for row in conn.execute(sql, params).fetchall()]
        finally:
            conn.close()

    return _query
