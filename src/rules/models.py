from pydantic import BaseModel, ConfigDict, Field


class InstallRules(BaseModel):
    """Tunables for the installer, read from ``install.yaml``."""

    connect_timeout_seconds: int = Field(default=5, ge=1, le=60)
    session_ttl_minutes: int = Field(default=24 * 60, ge=1)
    admin_path: str = Field(default="admin", min_length=1)
    default_driver: str = "sqlite"

    model_config = ConfigDict(extra="forbid")
