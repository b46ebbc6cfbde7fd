"""
Install component error types.

Adapters raise these; the orchestrator catches them per stage and turns
them into an InstallOutcome. Each error carries the operator-facing message
and the form fields it implicates.
"""

from __future__ import annotations

from enum import Enum

# Form field names, as posted by the install form.
FIELD_NAME = "name"
FIELD_EMAIL = "email"
FIELD_USERNAME = "username"
FIELD_PASSWORD = "password"
FIELD_DRIVER = "driver"
FIELD_DB_HOST = "db-host"
FIELD_DB_PORT = "db-port"
FIELD_DB_DATABASE = "db-database"
FIELD_DB_USER = "db-user"
FIELD_DB_PASSWORD = "db-password"
FIELD_DB_PREFIX = "db-prefix"


class InstallError(Exception):
    """Base class for every failure the installer reports to the operator."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.fields = fields


# --- Connectivity ---


class ConnectivityErrorKind(Enum):
    AUTH = "auth"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    OTHER = "other"


_CONNECTIVITY_MESSAGES = {
    ConnectivityErrorKind.AUTH: (
        "The database rejected this user or password. Make sure the user exists "
        "and has access to the specified database."
    ),
    ConnectivityErrorKind.NOT_FOUND: "The specified database does not exist.",
    ConnectivityErrorKind.TIMEOUT: "The database is not responding. Is the host correct?",
}

_CONNECTIVITY_FIELDS = {
    ConnectivityErrorKind.AUTH: (FIELD_DB_USER, FIELD_DB_PASSWORD),
    ConnectivityErrorKind.NOT_FOUND: (FIELD_DB_DATABASE,),
    ConnectivityErrorKind.TIMEOUT: (FIELD_DB_HOST,),
    ConnectivityErrorKind.OTHER: (
        FIELD_DB_HOST,
        FIELD_DB_USER,
        FIELD_DB_PASSWORD,
        FIELD_DB_DATABASE,
    ),
}


class ConnectivityError(InstallError):
    """The store could not be reached or refused the connection.

    ``detail`` is the driver's own message. It is shown verbatim only for
    OTHER; the remaining kinds have fixed, operator-friendly messages.
    """

    def __init__(self, kind: ConnectivityErrorKind, detail: str = "") -> None:
        message = _CONNECTIVITY_MESSAGES.get(kind, detail)
        super().__init__(message, _CONNECTIVITY_FIELDS[kind])
        self.kind = kind
        self.detail = detail


# --- Filesystem ---


class FilesystemErrorKind(Enum):
    CREATE_FAILED = "create_failed"
    WRITE_FAILED = "write_failed"
    READ_FAILED = "read_failed"
    ACCESS_FILE_FAILED = "access_file_failed"
    ROOT_UNAVAILABLE = "root_unavailable"


class FilesystemError(InstallError):
    def __init__(self, kind: FilesystemErrorKind, folder: str) -> None:
        if kind is FilesystemErrorKind.CREATE_FAILED:
            message = (
                f"Fernpress could not create the /{folder} folder. Please make sure the "
                "parent directory is writeable or create it manually and try again."
            )
        elif kind is FilesystemErrorKind.WRITE_FAILED:
            message = (
                f"Fernpress needs write access to /{folder}. Please make sure this "
                "directory is writeable and try again."
            )
        elif kind is FilesystemErrorKind.READ_FAILED:
            message = (
                f"Fernpress needs read access to /{folder}. Please make sure this "
                "directory is readable and try again."
            )
        elif kind is FilesystemErrorKind.ROOT_UNAVAILABLE:
            message = (
                f"Fernpress cannot use {folder} as its installation directory. Please make "
                "sure it exists and is writeable and try again."
            )
        else:
            message = (
                f"Unable to create /{folder}. Make sure the directory is writeable or "
                "create the file yourself by copying it from default.htaccess and try again."
            )
        super().__init__(message)
        self.kind = kind
        self.folder = folder


# --- Config commit ---


class CommitError(InstallError):
    """The connection descriptor could not be written."""


class ConfigExistsError(CommitError):
    """A config artifact is already present; this deployment is installed."""


# --- Schema / seed ---


class SchemaError(InstallError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Unable to create the database schema: {detail}")
        self.detail = detail


class SeedError(InstallError):
    """A default record could not be inserted."""


class InvalidIdentifierError(SeedError):
    """The owner's slug is reserved or already taken."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            "This username is reserved and cannot be used.", (FIELD_USERNAME,)
        )
        self.slug = slug


# --- Locking ---


class InstallLockedError(InstallError):
    def __init__(self) -> None:
        super().__init__("Another installation is already in progress.")


# --- Anything else ---


class UnexpectedInstallError(InstallError):
    """Anything the adapters raised that is not an InstallError."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"The installation failed unexpectedly: {detail}")
        self.detail = detail
