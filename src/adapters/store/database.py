"""
Driver-neutral wrapper around a DB-API connection.

Repositories write SQL with ``?`` placeholders and ``{name}`` table tokens;
this wrapper rewrites placeholders for the driver's paramstyle and applies
the table prefix chosen at install time.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any


def dict_factory(cursor: Any, row: Sequence[Any]) -> dict[str, Any]:
    """Convert a DB-API row to a dictionary keyed by column name."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class Database:
    """An open store connection plus the facts repos need about its driver."""

    def __init__(
        self,
        connection: Any,
        driver: str,
        prefix: str,
        paramstyle: str,
        error: type[Exception],
        integrity_error: type[Exception],
    ) -> None:
        self.connection = connection
        self.driver = driver
        self.prefix = prefix
        self.paramstyle = paramstyle
        # DB-API exception classes of the underlying driver
        self.Error = error
        self.IntegrityError = integrity_error

    def table(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def sql(self, query: str) -> str:
        """Adapt a ``?``-placeholder query to the driver's paramstyle."""
        if self.paramstyle in ("format", "pyformat"):
            return query.replace("?", "%s")
        return query

    def execute(self, query: str, params: Sequence[Any] = ()) -> Any:
        cursor = self.connection.cursor()
        cursor.execute(self.sql(query), tuple(params))
        return cursor

    def run(self, query: str, params: Sequence[Any] = ()) -> None:
        """Execute a statement whose result is not needed."""
        self.execute(query, params).close()

    def execute_many(self, query: str, rows: Iterable[Sequence[Any]]) -> None:
        cursor = self.connection.cursor()
        try:
            cursor.executemany(self.sql(query), [tuple(r) for r in rows])
        finally:
            cursor.close()

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> dict[str, Any] | None:
        cursor = self.execute(query, params)
        try:
            row = cursor.fetchone()
            return dict_factory(cursor, row) if row is not None else None
        finally:
            cursor.close()

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        cursor = self.execute(query, params)
        try:
            return [dict_factory(cursor, row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()
