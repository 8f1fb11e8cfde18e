import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from stowage.config import get_settings
from stowage.observability.logging import configure_logging
from stowage.observability.middleware import RequestContextMiddleware
from stowage.observability.otel import configure_otel
from stowage.api.health import router as health_router
from stowage.api.status import router as status_router
from stowage.plugins.bootstrap import build_registry
from stowage.plugins.classifier import current_process_path
from stowage.plugins.registry import RegistrationRegistry

logger = logging.getLogger(__name__)


def create_app(registry: RegistrationRegistry | None = None) -> FastAPI:
    """Build the status API.

    Without an explicit ``registry`` the built-in plugins and the manifests
    under ``plugins_dir`` are registered at startup. The server binary path
    used for classification is fixed at startup as well.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # fixed for the app lifetime; argv[0] may be relative to the startup cwd
        app.state.process_path = current_process_path()
        if registry is None:
            app.state.plugin_registry = build_registry(app.state.process_path, Path(settings.plugins_dir))
        else:
            app.state.plugin_registry = registry
        logger.info(
            "Starting status server %s with %d registered plugins",
            settings.server_version,
            len(app.state.plugin_registry),
        )
        yield
        logger.info("Status server stopping")

    app = FastAPI(
        title=settings.app_name,
        description="Backup/restore control plane status API",
        version=settings.server_version,
        lifespan=lifespan,
    )
    configure_otel(app, settings)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router)
    app.include_router(status_router)
    return app


def build_server_app() -> FastAPI:
    """uvicorn factory: configures logging, then builds the app."""
    configure_logging(get_settings())
    return create_app()
