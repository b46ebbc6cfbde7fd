import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.api.deps import get_settings
from src.app_shell.config import is_installed
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Fail fast on a broken rules file rather than on the first install request
    load_rules(settings.rules_path)
    logger.info(
        "Deployment root %s (installed=%s)",
        settings.root_dir,
        is_installed(settings.root_dir),
    )

    yield


app = FastAPI(
    title="Fernpress API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import install  # noqa: E402

app.include_router(install.router, prefix="/api/install", tags=["Install"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
