"""
Install component data models.

Frozen dataclasses for the operator's request, the resolved connection
descriptor, validation results and the terminal outcome.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from .errors import (
    FIELD_DB_DATABASE,
    FIELD_DB_HOST,
    FIELD_DB_PASSWORD,
    FIELD_DB_PORT,
    FIELD_DB_PREFIX,
    FIELD_DB_USER,
    FIELD_DRIVER,
    FIELD_EMAIL,
    FIELD_NAME,
    FIELD_PASSWORD,
    FIELD_USERNAME,
)

if TYPE_CHECKING:
    from src.domain.entities import Session, User

CONNECT_TIMEOUT_SECONDS = 5


@dataclass(frozen=True)
class InstallInput:
    """Everything the operator submits on the install form."""

    name: str = ""
    email: str = ""
    username: str = ""
    password: str = ""
    driver: str = ""
    db_host: str = ""
    db_port: str = ""
    db_database: str = ""
    db_user: str = ""
    db_password: str = ""
    db_prefix: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> InstallInput:
        """Build an input from flat form fields (``db-host``, ``db-user``...)."""

        def value(key: str) -> str:
            raw = form.get(key)
            return "" if raw is None else str(raw)

        return cls(
            name=value(FIELD_NAME),
            email=value(FIELD_EMAIL),
            username=value(FIELD_USERNAME),
            password=value(FIELD_PASSWORD),
            driver=value(FIELD_DRIVER),
            db_host=value(FIELD_DB_HOST),
            db_port=value(FIELD_DB_PORT),
            db_database=value(FIELD_DB_DATABASE),
            db_user=value(FIELD_DB_USER),
            db_password=value(FIELD_DB_PASSWORD),
            db_prefix=value(FIELD_DB_PREFIX),
        )

    def with_changes(self, **changes: str) -> InstallInput:
        return replace(self, **changes)

    def field_values(self) -> dict[str, str]:
        """Map of form field name to value."""
        return {
            FIELD_NAME: self.name,
            FIELD_EMAIL: self.email,
            FIELD_USERNAME: self.username,
            FIELD_PASSWORD: self.password,
            FIELD_DRIVER: self.driver,
            FIELD_DB_HOST: self.db_host,
            FIELD_DB_PORT: self.db_port,
            FIELD_DB_DATABASE: self.db_database,
            FIELD_DB_USER: self.db_user,
            FIELD_DB_PASSWORD: self.db_password,
            FIELD_DB_PREFIX: self.db_prefix,
        }

    def __repr__(self) -> str:
        # Keep passwords out of logs and tracebacks.
        return (
            f"InstallInput(name={self.name!r}, email={self.email!r}, "
            f"username={self.username!r}, driver={self.driver!r}, "
            f"db_host={self.db_host!r}, db_port={self.db_port!r}, "
            f"db_database={self.db_database!r}, db_user={self.db_user!r}, "
            f"db_prefix={self.db_prefix!r})"
        )


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Resolved store connection parameters."""

    driver: str
    host: str
    port: str
    database: str
    user: str
    password: str = field(repr=False)
    prefix: str
    timeout_seconds: int = CONNECT_TIMEOUT_SECONDS

    @classmethod
    def from_input(
        cls, inp: InstallInput, timeout_seconds: int = CONNECT_TIMEOUT_SECONDS
    ) -> ConnectionDescriptor:
        return cls(
            driver=inp.driver,
            host=inp.db_host,
            port=inp.db_port,
            database=inp.db_database,
            user=inp.db_user,
            password=inp.db_password,
            prefix=inp.db_prefix,
            timeout_seconds=timeout_seconds,
        )

    def placeholders(self) -> dict[str, str]:
        """Values for the config template's ``{{name}}`` tokens."""
        return {
            "driver": self.driver,
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "password": self.password,
            "prefix": self.prefix,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Either valid (with the canonicalized input) or invalid with every bad field."""

    valid: bool
    request: InstallInput | None = None
    fields: tuple[str, ...] = ()
    message: str | None = None

    @classmethod
    def ok(cls, request: InstallInput) -> ValidationResult:
        return cls(valid=True, request=request)

    @classmethod
    def invalid(cls, fields: tuple[str, ...], message: str) -> ValidationResult:
        return cls(valid=False, fields=fields, message=message)


class Stage(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PROBING_CONNECTIVITY = "probing_connectivity"
    PROVISIONING_FILESYSTEM = "provisioning_filesystem"
    COMMITTING_CONFIG = "committing_config"
    INITIALIZING_SCHEMA = "initializing_schema"
    SEEDING_DATA = "seeding_data"
    ESTABLISHING_SESSION = "establishing_session"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def order(self) -> int:
        return _STAGE_ORDER.index(self)

    def is_after_commit_point(self) -> bool:
        """True for the commit stage and everything after it."""
        return self.order >= Stage.COMMITTING_CONFIG.order


_STAGE_ORDER = list(Stage)


@dataclass(frozen=True)
class InstallOutcome:
    """Terminal result of an install run."""

    success: bool
    stage: Stage
    message: str | None = None
    invalid: tuple[str, ...] | None = None
    redirect: str | None = None
    owner: User | None = None
    session: Session | None = None
    token: str | None = None
    stages: tuple[Stage, ...] = ()

    @classmethod
    def succeeded(
        cls,
        redirect: str,
        owner: User | None,
        session: Session | None,
        token: str | None,
        stages: tuple[Stage, ...],
    ) -> InstallOutcome:
        return cls(
            success=True,
            stage=Stage.COMPLETE,
            redirect=redirect,
            owner=owner,
            session=session,
            token=token,
            stages=stages,
        )

    @classmethod
    def failed(
        cls,
        stage: Stage,
        message: str,
        invalid: tuple[str, ...] | None,
        stages: tuple[Stage, ...],
    ) -> InstallOutcome:
        return cls(
            success=False,
            stage=stage,
            message=message,
            invalid=invalid or None,
            stages=stages,
        )

    def to_response(self) -> dict[str, Any]:
        """JSON body returned to the install form."""
        if self.success:
            return {"success": True, "redirect": self.redirect}
        return {
            "success": False,
            "invalid": list(self.invalid) if self.invalid else None,
            "message": self.message,
        }
