from __future__ import annotations

from pathlib import Path

from src.adapters.auth.crypto import JWTAuthAdapter
from src.adapters.auth.session_store import InMemorySessionStore
from src.adapters.clock import SystemClock
from src.adapters.fs.config_writer import ConfigCommitter
from src.adapters.fs.lock import InstallLock
from src.adapters.fs.provisioner import FilesystemProvisioner
from src.adapters.store.probe import ConnectivityProber
from src.adapters.store.repos import seed_repo_factory
from src.adapters.store.schema import SchemaInitializer
from src.components.install import InstallPorts


def create_install_ports(
    root_dir: Path,
    secret_key: str,
    session_store: InMemorySessionStore | None = None,
) -> InstallPorts:
    """Wire the production adapters for a deployment rooted at ``root_dir``."""
    root_dir = Path(root_dir)
    return InstallPorts(
        prober=ConnectivityProber(root_dir),
        filesystem=FilesystemProvisioner(root_dir),
        committer=ConfigCommitter(root_dir),
        schema=SchemaInitializer(),
        repo_factory=seed_repo_factory,
        auth_adapter=JWTAuthAdapter(secret_key),
        session_store=session_store if session_store is not None else InMemorySessionStore(),
        time=SystemClock(),
        lock=InstallLock(root_dir),
    )
