from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from src.api.deps import Settings, get_install_ports, get_rules, get_settings
from src.app_shell.config import is_installed
from src.components.install import InstallInput, InstallPorts, run_install
from src.rules.models import InstallRules

router = APIRouter()

INSTALL_COMMAND = "install"


@router.post("")
async def install(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    rules: InstallRules = Depends(get_rules),
    ports: InstallPorts = Depends(get_install_ports),
) -> dict[str, Any]:
    """Run the one-time installer from the install form."""
    form = await request.form()
    if is_installed(settings.root_dir) or form.get("cmd") != INSTALL_COMMAND:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    base_url = settings.base_url or str(request.base_url)
    outcome = await run_in_threadpool(
        run_install, InstallInput.from_form(form), ports, base_url=base_url, rules=rules
    )

    if outcome.success and outcome.token:
        max_age = rules.session_ttl_minutes * 60
        response.set_cookie(
            key="access_token",
            value=f"Bearer {outcome.token}",
            httponly=True,
            max_age=max_age,
            expires=max_age,
            samesite="lax",
            secure=base_url.startswith("https://"),
        )

    return outcome.to_response()


@router.get("/status")
def install_status(settings: Settings = Depends(get_settings)) -> dict[str, bool]:
    """Whether this deployment has been installed."""
    return {"installed": is_installed(settings.root_dir)}
