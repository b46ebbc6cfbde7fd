"""
Deployment configuration.

``database.yaml`` is written once by the installer; its presence means the
deployment is installed.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from src.adapters.fs.config_writer import CONFIG_FILE_NAME


class DatabaseConfig(BaseModel):
    driver: str
    host: str
    port: str
    database: str
    user: str
    password: str = ""
    prefix: str


def config_path(root_dir: Path) -> Path:
    return Path(root_dir) / CONFIG_FILE_NAME


def is_installed(root_dir: Path) -> bool:
    return config_path(root_dir).exists()


def load_database_config(root_dir: Path) -> DatabaseConfig:
    """
    Read back the committed connection settings.
    Raises FileNotFoundError if the deployment is not installed.
    Raises ValueError if the file is not valid.
    """
    path = config_path(root_dir)
    if not path.exists():
        raise FileNotFoundError(f"Database config not found at: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax in database config: {e}") from e

    try:
        return DatabaseConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Database config validation failed:\n{e}") from e
