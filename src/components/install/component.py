"""
Install component implementation.

Drives a blank deployment through validation, store probing, folder
provisioning, the config commit, schema creation, seeding and the owner's
first session. The run stops at the first failing stage; everything that
stage and later ones left behind is compensated before the outcome is
returned, so the operator can retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.components.auth import AuthOutput, run_establish
from src.rules.models import InstallRules

from .defaults import FOLDERS
from .errors import ConfigExistsError, InstallError, UnexpectedInstallError
from .models import ConnectionDescriptor, InstallInput, InstallOutcome, Stage
from .ports import (
    AuthAdapterPort,
    ConfigCommitterPort,
    ConnectivityProberPort,
    DatabasePort,
    FilesystemPort,
    InstallLockPort,
    RepoFactoryPort,
    SchemaPort,
    SeedRepoPort,
    SessionStorePort,
    TimePort,
)
from .seeding import seed_defaults
from .validation import validate

logger = logging.getLogger(__name__)


@dataclass
class InstallPorts:
    """Every collaborator the installer drives."""

    prober: ConnectivityProberPort
    filesystem: FilesystemPort
    committer: ConfigCommitterPort
    schema: SchemaPort
    repo_factory: RepoFactoryPort
    auth_adapter: AuthAdapterPort
    session_store: SessionStorePort
    time: TimePort
    lock: InstallLockPort


class _Progress:
    """Records stage transitions for the log and the outcome."""

    def __init__(self) -> None:
        self.stages: list[Stage] = [Stage.IDLE]

    @property
    def current(self) -> Stage:
        return self.stages[-1]

    def enter(self, stage: Stage) -> None:
        logger.info("Install: %s -> %s", self.current.value, stage.value)
        self.stages.append(stage)

    def fail(self, message: str, fields: tuple[str, ...] | None = None) -> InstallOutcome:
        stage = self.current
        logger.warning("Install failed at %s: %s", stage.value, message)
        self.stages.append(Stage.FAILED)
        return InstallOutcome.failed(stage, message, fields, tuple(self.stages))


def _compensate(stage: Stage, committed: bool, committer: ConfigCommitterPort) -> None:
    """Undo what a failed run left behind.

    Only the config artifact needs undoing: the schema is reset on every run
    and nothing before the commit point is destructive. An artifact this run
    did not write (already installed) is left alone.
    """
    if not stage.is_after_commit_point() or not committed:
        return
    logger.warning("Removing config artifact after failure at %s", stage.value)
    committer.remove()


def _admin_url(base_url: str, admin_path: str) -> str:
    return f"{base_url.rstrip('/')}/{admin_path.strip('/')}"


def _establish_session(
    inp: InstallInput,
    ports: InstallPorts,
    repo: SeedRepoPort,
    rules: InstallRules,
) -> AuthOutput | None:
    """Log the owner in. Returns the AuthOutput, or None when that failed."""
    try:
        auth = run_establish(
            inp.username,
            inp.password,
            repo,
            ports.auth_adapter,
            ports.session_store,
            ports.time,
            ttl_minutes=rules.session_ttl_minutes,
        )
    except Exception:
        logger.warning("Could not log in the new owner", exc_info=True)
        return None

    if not auth.success:
        logger.warning("Could not log in the new owner: %s", auth.error)
        return None
    return auth


def run_install(
    inp: InstallInput,
    ports: InstallPorts,
    base_url: str = "",
    rules: InstallRules | None = None,
) -> InstallOutcome:
    """
    Execute the installation.

    Args:
        inp: Raw form input.
        ports: Adapters for the store, filesystem, config and auth.
        base_url: Public URL of the deployment, used for the redirect.
        rules: Installer tunables; defaults when omitted.

    Returns:
        InstallOutcome. No failure escapes as an exception.
    """
    rules = rules or InstallRules()
    progress = _Progress()

    progress.enter(Stage.VALIDATING)
    result = validate(inp, rules.default_driver)
    if not result.valid or result.request is None:
        return progress.fail(result.message or "", result.fields)
    request = result.request
    descriptor = ConnectionDescriptor.from_input(request, rules.connect_timeout_seconds)

    progress.enter(Stage.PROBING_CONNECTIVITY)
    try:
        ports.lock.acquire()
    except InstallError as e:
        return progress.fail(e.message, e.fields)
    except Exception as e:
        logger.exception("Unexpected error acquiring the install lock")
        return progress.fail(UnexpectedInstallError(str(e)).message)

    db: DatabasePort | None = None
    committed = False
    try:
        try:
            db = ports.prober.probe(descriptor)

            progress.enter(Stage.PROVISIONING_FILESYSTEM)
            ports.filesystem.provision(FOLDERS)
            ports.filesystem.ensure_access_file()

            progress.enter(Stage.COMMITTING_CONFIG)
            ports.committer.commit(descriptor)
            committed = True

            progress.enter(Stage.INITIALIZING_SCHEMA)
            ports.schema.reset_tables(db)

            progress.enter(Stage.SEEDING_DATA)
            repo = ports.repo_factory(db)
            owner = seed_defaults(repo, request, ports.auth_adapter, ports.time)
        except ConfigExistsError as e:
            return progress.fail(e.message, e.fields)
        except InstallError as e:
            _compensate(progress.current, committed, ports.committer)
            return progress.fail(e.message, e.fields)
        except Exception as e:
            logger.exception("Unexpected error during %s", progress.current.value)
            _compensate(progress.current, committed, ports.committer)
            return progress.fail(UnexpectedInstallError(str(e)).message)

        progress.enter(Stage.ESTABLISHING_SESSION)
        redirect = _admin_url(base_url, rules.admin_path)
        auth = _establish_session(request, ports, repo, rules)
        if auth is None:
            redirect = f"{redirect}/login"

        progress.enter(Stage.COMPLETE)
        logger.info("Installed; owner is %s", owner.slug)
        return InstallOutcome.succeeded(
            redirect=redirect,
            owner=owner,
            session=auth.session if auth else None,
            token=auth.token_raw if auth else None,
            stages=tuple(progress.stages),
        )
    finally:
        try:
            if db is not None:
                db.close()
        finally:
            ports.lock.release()


def run(
    inp: InstallInput,
    ports: InstallPorts,
    base_url: str = "",
    rules: InstallRules | None = None,
) -> InstallOutcome:
    """Main entry point for the install component."""
    return run_install(inp, ports, base_url, rules)
