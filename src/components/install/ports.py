"""
Install component port definitions.

Protocol interfaces for the filesystem, the store and the auth pieces the
orchestrator drives.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from src.domain.entities import Post, Session, Setting, Tag, User

    from .models import ConnectionDescriptor


class DatabasePort(Protocol):
    """An open store connection."""

    prefix: str

    def close(self) -> None: ...


class ConnectivityProberPort(Protocol):
    def probe(self, descriptor: ConnectionDescriptor) -> DatabasePort:
        """Open a connection or raise ConnectivityError."""
        ...


class FilesystemPort(Protocol):
    def provision(self, folders: Sequence[str]) -> None:
        """Create each folder and round-trip a marker file, or raise FilesystemError."""
        ...

    def ensure_access_file(self) -> None:
        """Create the web server access file if absent, or raise FilesystemError."""
        ...


class ConfigCommitterPort(Protocol):
    def commit(self, descriptor: ConnectionDescriptor) -> None:
        """Write the config artifact, or raise CommitError/ConfigExistsError."""
        ...

    def remove(self) -> None:
        """Delete the config artifact."""
        ...


class SchemaPort(Protocol):
    def reset_tables(self, db: Any) -> None:
        """Drop and recreate every table, or raise SchemaError."""
        ...


class SeedRepoPort(Protocol):
    """Insert-only access to the tables the installer seeds."""

    def add_settings(self, settings: Sequence[Setting]) -> None: ...

    def create_user(self, user: User) -> None: ...

    def create_tag(self, tag: Tag) -> None: ...

    def create_post(self, post: Post) -> None: ...

    def get_user_by_slug(self, slug: str) -> User | None: ...


class RepoFactoryPort(Protocol):
    def __call__(self, db: Any) -> SeedRepoPort: ...


class AuthAdapterPort(Protocol):
    def hash_password(self, password: str) -> str: ...

    def verify_password(self, password: str, hash_str: str) -> bool: ...

    def create_token(self, user_id: Any, ttl_minutes: int) -> str: ...


class SessionStorePort(Protocol):
    def save(self, token: str, session: Session) -> None: ...


class InstallLockPort(Protocol):
    def acquire(self) -> None:
        """Take the lock or raise InstallLockedError."""
        ...

    def release(self) -> None: ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
