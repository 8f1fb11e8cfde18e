"""Server status API: version and classified plugin list."""

from fastapi import APIRouter, Depends, Request

from stowage.config import get_settings
from stowage.plugins.classifier import classify_all
from stowage.plugins.registry import RegistrationRegistry
from stowage.plugins.schemas import ServerStatus

router = APIRouter(prefix="/api", tags=["status"])


def get_registry(request: Request) -> RegistrationRegistry:
    return request.app.state.plugin_registry


def get_process_path(request: Request) -> str:
    """The server binary path captured when the app started."""
    return request.app.state.process_path


@router.get(
    "/server-status",
    response_model=ServerStatus,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def server_status(
    registry: RegistrationRegistry = Depends(get_registry),
    process_path: str = Depends(get_process_path),
):
    """Report the server version and every registered plugin, flagged built-in or not."""
    return ServerStatus(
        server_version=get_settings().server_version,
        plugins=classify_all(registry.list(), process_path),
    )
