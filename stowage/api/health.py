"""Health check API endpoints."""

from fastapi import APIRouter, Depends

from stowage.api.status import get_registry
from stowage.config import get_settings
from stowage.plugins.registry import RegistrationRegistry

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(registry: RegistrationRegistry = Depends(get_registry)):
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "stowage",
        "version": settings.server_version,
        "registered_plugins": len(registry),
    }
