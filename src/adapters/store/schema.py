import logging
import os
from pathlib import Path

from src.components.install.errors import SchemaError

from .database import Database

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def split_statements(script: str) -> list[str]:
    """Split a script on ``;`` dropping blank and comment-only chunks."""
    statements = []
    for chunk in script.split(";"):
        lines = [ln for ln in chunk.splitlines() if ln.strip() and not ln.strip().startswith("--")]
        if lines:
            statements.append(chunk.strip())
    return statements


class SchemaInitializer:
    """
    Creates the baseline schema.

    Each migration file holds an Up half followed by a ``-- Down`` half.
    ``reset_tables`` runs every Down half (newest first) and then every Up
    half (oldest first), so a retry after a failed install starts from
    empty tables instead of tripping over half-seeded ones.
    """

    def __init__(self, migrations_dir: str | Path = MIGRATIONS_DIR):
        self.migrations_dir = Path(migrations_dir)

    def _migration_files(self) -> list[str]:
        return sorted(f for f in os.listdir(self.migrations_dir) if f.endswith(".sql"))

    def _read_parts(self, filename: str) -> tuple[str, str]:
        with open(self.migrations_dir / filename, encoding="utf-8") as f:
            content = f.read()

        # Simple convention: file starts with Up, optional Down after the marker.
        if "-- Down" in content:
            up_part, down_part = content.split("-- Down", 1)
            return up_part, down_part
        return content, ""

    def _run_script(self, db: Database, script: str) -> None:
        for statement in split_statements(script.replace("{{prefix}}", db.prefix)):
            db.run(statement)

    def reset_tables(self, db: Database) -> None:
        """Drop and recreate every table, or raise SchemaError."""
        try:
            files = self._migration_files()
            parts = {name: self._read_parts(name) for name in files}
        except OSError as e:
            raise SchemaError(str(e)) from e

        try:
            for filename in reversed(files):
                self._run_script(db, parts[filename][1])
            for filename in files:
                logger.info("Applying migration: %s", filename)
                self._run_script(db, parts[filename][0])
            db.commit()
        except db.Error as e:
            db.rollback()
            raise SchemaError(str(e)) from e

        logger.info("Schema initialized with prefix %r", db.prefix)
