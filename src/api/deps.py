import logging
import os
import secrets
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.auth.session_store import InMemorySessionStore
from src.app_shell.context import create_install_ports
from src.components.install import InstallPorts
from src.rules.loader import load_rules
from src.rules.models import InstallRules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.root_dir = Path(os.environ.get("FERN_ROOT", os.getcwd()))
        self.base_url = os.environ.get("FERN_BASE_URL", "")
        self.rules_path = self.root_dir / "install.yaml"
        secret_key = os.environ.get("FERN_SECRET_KEY")
        if not secret_key:
            logger.warning("FERN_SECRET_KEY is not set; sessions end on restart.")
            secret_key = secrets.token_hex(32)
        self.secret_key = secret_key


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> InstallRules:
    return load_rules(settings.rules_path)


# --- Sessions ---
@lru_cache
def get_session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


# --- Install ---
def get_install_ports(
    settings: Settings = Depends(get_settings),
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> InstallPorts:
    return create_install_ports(settings.root_dir, settings.secret_key, session_store)
