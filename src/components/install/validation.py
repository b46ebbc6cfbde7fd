"""
Install form validation.

Canonicalizes the username and table prefix, fills in connection defaults
and checks every rule before answering, so the operator sees all offending
fields at once.
"""

from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email

from src.domain.slug import normalize

from .errors import (
    FIELD_DB_DATABASE,
    FIELD_DB_USER,
    FIELD_DRIVER,
    FIELD_EMAIL,
    FIELD_NAME,
    FIELD_PASSWORD,
    FIELD_USERNAME,
)
from .models import InstallInput, ValidationResult

DEFAULT_DRIVER = "sqlite"
DEFAULT_HOST = "localhost"
DEFAULT_PREFIX = "fernpress_"
DEFAULT_PORT = "5432"

SUPPORTED_DRIVERS = ("sqlite", "pgsql")

PASSWORD_MIN_LENGTH = 8

# The store password is not required: some dev databases have none.
REQUIRED_FIELDS = (
    FIELD_NAME,
    FIELD_EMAIL,
    FIELD_USERNAME,
    FIELD_PASSWORD,
    FIELD_DB_USER,
    FIELD_DB_DATABASE,
)

MSG_REQUIRED = "Please correct the highlighted errors."
MSG_PASSWORD_LENGTH = "Passwords need to be at least eight characters."
MSG_INVALID_EMAIL = "Please enter a valid email address."

_PREFIX_UNSAFE = re.compile(r"[^A-Za-z_-]")


def sanitize_prefix(prefix: str) -> str:
    """Replace every character outside ``[A-Za-z_-]`` with an underscore."""
    return _PREFIX_UNSAFE.sub("_", prefix)


def is_valid_email(email: str) -> bool:
    """Syntax-only mailbox check; no DNS lookups."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def canonicalize(inp: InstallInput, default_driver: str = DEFAULT_DRIVER) -> InstallInput:
    """Apply slug/prefix canonicalization and connection defaults."""
    return inp.with_changes(
        username=normalize(inp.username),
        db_prefix=sanitize_prefix(inp.db_prefix) or DEFAULT_PREFIX,
        db_host=inp.db_host or DEFAULT_HOST,
        db_port=inp.db_port or DEFAULT_PORT,
        driver=inp.driver or default_driver,
    )


def validate(inp: InstallInput, default_driver: str = DEFAULT_DRIVER) -> ValidationResult:
    """
    Validate an install request.

    Returns the canonicalized request when valid. Otherwise every failing
    field is listed and the message follows the rule priority: missing
    fields, then password length, then email syntax, then driver.
    """
    request = canonicalize(inp, default_driver)
    values = request.field_values()

    missing = [name for name in REQUIRED_FIELDS if not values[name]]

    short_password = bool(request.password) and len(request.password) < PASSWORD_MIN_LENGTH
    bad_email = bool(request.email) and not is_valid_email(request.email)
    bad_driver = request.driver not in SUPPORTED_DRIVERS

    fields = list(missing)
    if short_password:
        fields.append(FIELD_PASSWORD)
    if bad_email:
        fields.append(FIELD_EMAIL)
    if bad_driver:
        fields.append(FIELD_DRIVER)

    if missing:
        message = MSG_REQUIRED
    elif short_password:
        message = MSG_PASSWORD_LENGTH
    elif bad_email:
        message = MSG_INVALID_EMAIL
    elif bad_driver:
        message = f"Unsupported database driver: {request.driver}."
    else:
        return ValidationResult.ok(request)

    return ValidationResult.invalid(tuple(dict.fromkeys(fields)), message)
