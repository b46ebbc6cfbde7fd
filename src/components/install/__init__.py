"""
Install component - One-time deployment provisioning.

Validates the operator's form, probes the store, provisions folders, commits
the connection config, creates the schema, seeds defaults and logs the new
owner in.
"""

from .component import InstallPorts, run, run_install
from .errors import (
    CommitError,
    ConfigExistsError,
    ConnectivityError,
    ConnectivityErrorKind,
    FilesystemError,
    FilesystemErrorKind,
    InstallError,
    InstallLockedError,
    InvalidIdentifierError,
    SchemaError,
    SeedError,
    UnexpectedInstallError,
)
from .models import (
    ConnectionDescriptor,
    InstallInput,
    InstallOutcome,
    Stage,
    ValidationResult,
)
from .ports import (
    ConfigCommitterPort,
    ConnectivityProberPort,
    FilesystemPort,
    InstallLockPort,
    RepoFactoryPort,
    SchemaPort,
    SeedRepoPort,
)
from .validation import validate

__all__ = [
    # Entry points
    "run",
    "run_install",
    "validate",
    "InstallPorts",
    # Models
    "ConnectionDescriptor",
    "InstallInput",
    "InstallOutcome",
    "Stage",
    "ValidationResult",
    # Errors
    "CommitError",
    "ConfigExistsError",
    "ConnectivityError",
    "ConnectivityErrorKind",
    "FilesystemError",
    "FilesystemErrorKind",
    "InstallError",
    "InstallLockedError",
    "InvalidIdentifierError",
    "SchemaError",
    "SeedError",
    "UnexpectedInstallError",
    # Ports
    "ConfigCommitterPort",
    "ConnectivityProberPort",
    "FilesystemPort",
    "InstallLockPort",
    "RepoFactoryPort",
    "SchemaPort",
    "SeedRepoPort",
]
