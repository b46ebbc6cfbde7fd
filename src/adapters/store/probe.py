"""
Connectivity Prober.

Opens a connection to the target store with a short timeout and classifies
failures into the closed ConnectivityErrorKind set. Classification relies on
driver error codes and exception classes, never on message text.
"""

from __future__ import annotations

import logging
import socket
import sqlite3
from collections.abc import Callable
from pathlib import Path

import psycopg2
import psycopg2.errors

from src.components.install.errors import ConnectivityError, ConnectivityErrorKind
from src.components.install.models import ConnectionDescriptor

from .database import Database

logger = logging.getLogger(__name__)

# SQLite primary result codes; extended codes carry these in the low byte.
SQLITE_PERM = 3
SQLITE_BUSY = 5
SQLITE_LOCKED = 6
SQLITE_CANTOPEN = 14
SQLITE_AUTH = 23
SQLITE_NOTADB = 26

_SQLITE_KIND_BY_CODE = {
    SQLITE_CANTOPEN: ConnectivityErrorKind.NOT_FOUND,
    SQLITE_NOTADB: ConnectivityErrorKind.NOT_FOUND,
    SQLITE_BUSY: ConnectivityErrorKind.TIMEOUT,
    SQLITE_LOCKED: ConnectivityErrorKind.TIMEOUT,
    SQLITE_AUTH: ConnectivityErrorKind.AUTH,
    SQLITE_PERM: ConnectivityErrorKind.AUTH,
}

_PG_AUTH_ERRORS = (
    psycopg2.errors.InvalidPassword,
    psycopg2.errors.InvalidAuthorizationSpecification,
)


def classify_sqlite_error(exc: sqlite3.Error) -> ConnectivityError:
    code = getattr(exc, "sqlite_errorcode", None)
    kind = ConnectivityErrorKind.OTHER
    if code is not None:
        kind = _SQLITE_KIND_BY_CODE.get(code & 0xFF, ConnectivityErrorKind.OTHER)
    return ConnectivityError(kind, str(exc))


def classify_pg_error(exc: psycopg2.Error) -> ConnectivityError:
    if isinstance(exc, _PG_AUTH_ERRORS):
        return ConnectivityError(ConnectivityErrorKind.AUTH, str(exc).strip())
    if isinstance(exc, psycopg2.errors.InvalidCatalogName):
        return ConnectivityError(ConnectivityErrorKind.NOT_FOUND, str(exc).strip())
    return ConnectivityError(ConnectivityErrorKind.OTHER, str(exc).strip())


def resolve_sqlite_path(root_dir: Path, database: str) -> Path:
    """SQLite databases are files; relative names live under the deployment root."""
    path = Path(database).expanduser()
    if not path.is_absolute():
        path = root_dir / path
    return path.resolve()


def check_reachable(host: str, port: str, timeout: float) -> None:
    """Open and close a TCP connection, raising TIMEOUT when the host does not answer."""
    try:
        port_number = int(port)
    except ValueError:
        raise ConnectivityError(
            ConnectivityErrorKind.OTHER, f"Invalid database port: {port}"
        ) from None

    try:
        with socket.create_connection((host, port_number), timeout=timeout):
            pass
    except (TimeoutError, ConnectionRefusedError, socket.gaierror) as exc:
        raise ConnectivityError(ConnectivityErrorKind.TIMEOUT, str(exc)) from exc
    except OSError as exc:
        raise ConnectivityError(ConnectivityErrorKind.OTHER, str(exc)) from exc


class ConnectivityProber:
    """Connects to the store described by a ConnectionDescriptor."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir = Path(root_dir)
        self._connectors: dict[str, Callable[[ConnectionDescriptor], Database]] = {
            "sqlite": self._connect_sqlite,
            "pgsql": self._connect_pgsql,
        }

    def probe(self, descriptor: ConnectionDescriptor) -> Database:
        """
        Open a connection.

        Raises:
            ConnectivityError: classified as AUTH, NOT_FOUND, TIMEOUT or OTHER.
        """
        connector = self._connectors.get(descriptor.driver)
        if connector is None:
            raise ConnectivityError(
                ConnectivityErrorKind.OTHER,
                f"Unsupported database driver: {descriptor.driver}",
            )

        try:
            db = connector(descriptor)
        except ConnectivityError as exc:
            logger.warning(
                "Store probe failed (%s, kind=%s): %s",
                descriptor.driver,
                exc.kind.value,
                exc.detail,
            )
            raise

        logger.info("Connected to %s store %s", descriptor.driver, descriptor.database)
        return db

    def _connect_sqlite(self, descriptor: ConnectionDescriptor) -> Database:
        path = resolve_sqlite_path(self.root_dir, descriptor.database)
        try:
            # mode=rw: the database must already exist, like a server-side schema.
            conn = sqlite3.connect(
                f"{path.as_uri()}?mode=rw", uri=True, timeout=descriptor.timeout_seconds
            )
        except sqlite3.Error as exc:
            raise classify_sqlite_error(exc) from exc

        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            # Forces a read of the file header, so non-databases fail here.
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as exc:
            conn.close()
            raise classify_sqlite_error(exc) from exc

        return Database(
            conn,
            driver="sqlite",
            prefix=descriptor.prefix,
            paramstyle=sqlite3.paramstyle,
            error=sqlite3.Error,
            integrity_error=sqlite3.IntegrityError,
        )

    def _connect_pgsql(self, descriptor: ConnectionDescriptor) -> Database:
        check_reachable(descriptor.host, descriptor.port, descriptor.timeout_seconds)
        try:
            conn = psycopg2.connect(
                host=descriptor.host,
                port=descriptor.port,
                dbname=descriptor.database,
                user=descriptor.user,
                password=descriptor.password,
                connect_timeout=descriptor.timeout_seconds,
            )
        except psycopg2.Error as exc:
            raise classify_pg_error(exc) from exc

        return Database(
            conn,
            driver="pgsql",
            prefix=descriptor.prefix,
            paramstyle=psycopg2.paramstyle,
            error=psycopg2.Error,
            integrity_error=psycopg2.IntegrityError,
        )
