import sqlite3

import pytest

from src.adapters.store.database import Database
from src.adapters.store.schema import SchemaInitializer, split_statements
from src.components.install.errors import SchemaError


@pytest.fixture
def db(tmp_path):
    conn = sqlite3.connect(tmp_path / "schema.db")
    conn.execute("PRAGMA foreign_keys = ON;")
    database = Database(
        conn,
        driver="sqlite",
        prefix="fp_",
        paramstyle=sqlite3.paramstyle,
        error=sqlite3.Error,
        integrity_error=sqlite3.IntegrityError,
    )
    yield database
    database.close()


def table_names(db):
    rows = db.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")
    return [row["name"] for row in rows]


def test_reset_creates_prefixed_tables(db):
    SchemaInitializer().reset_tables(db)

    assert table_names(db) == [
        "fp_post_tags",
        "fp_posts",
        "fp_settings",
        "fp_tags",
        "fp_users",
    ]


def test_reset_empties_existing_tables(db):
    initializer = SchemaInitializer()
    initializer.reset_tables(db)
    db.run('INSERT INTO "fp_settings" (name, value) VALUES (?, ?)', ("title", "Old"))
    db.commit()

    initializer.reset_tables(db)

    assert db.fetch_all('SELECT * FROM "fp_settings"') == []


def test_reset_leaves_other_prefixes_alone(db):
    db.run("CREATE TABLE other_settings (name TEXT)")
    db.commit()

    SchemaInitializer().reset_tables(db)

    assert "other_settings" in table_names(db)


def test_dashed_prefix(tmp_path):
    conn = sqlite3.connect(tmp_path / "dash.db")
    database = Database(conn, "sqlite", "my-blog_", "qmark", sqlite3.Error, sqlite3.IntegrityError)
    try:
        SchemaInitializer().reset_tables(database)
        assert "my-blog_users" in table_names(database)
    finally:
        database.close()


def test_broken_migration_raises_schema_error(db, tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001_broken.sql").write_text("CREATE TABLE (;\n-- Down\n")

    with pytest.raises(SchemaError) as excinfo:
        SchemaInitializer(migrations).reset_tables(db)

    assert excinfo.value.message.startswith("Unable to create the database schema: ")


def test_missing_migrations_dir_raises_schema_error(db, tmp_path):
    with pytest.raises(SchemaError):
        SchemaInitializer(tmp_path / "nowhere").reset_tables(db)


def test_split_statements_skips_comments():
    script = "-- header\nCREATE TABLE a (x INT);\n\n-- only a comment;\nDROP TABLE b;\n"

    assert split_statements(script) == ["-- header\nCREATE TABLE a (x INT)", "DROP TABLE b"]


def test_placeholder_conversion_for_format_paramstyle():
    database = Database(None, "pgsql", "fp_", "pyformat", Exception, Exception)

    assert database.sql("SELECT * FROM t WHERE a = ? AND b = ?") == (
        "SELECT * FROM t WHERE a = %s AND b = %s"
    )
    assert database.table("users") == "fp_users"
