from __future__ import annotations

from dataclasses import dataclass

from stowage.adapters import get_deployment_adapter
from stowage.client.status import ServerStatusClient
from stowage.config import Settings, get_settings
from stowage.observability.logging import configure_cli_logging


@dataclass
class CliContext:
    """Settings for one CLI invocation, with command-line overrides applied."""

    settings: Settings

    @classmethod
    def from_cli_args(
        cls,
        namespace: str | None,
        server: str | None,
        log_level: str | None,
    ) -> CliContext:
        overrides = {}
        if namespace:
            overrides["namespace"] = namespace
        if server:
            overrides["server_url"] = server
        if log_level:
            overrides["log_level"] = log_level

        settings = get_settings().model_copy(update=overrides)
        configure_cli_logging(settings.log_level)
        return cls(settings=settings)

    def deployment_adapter(self):
        return get_deployment_adapter(self.settings)

    def status_client(self, timeout: float | None = None) -> ServerStatusClient:
        return ServerStatusClient(
            base_url=self.settings.server_url,
            timeout=timeout if timeout is not None else self.settings.status_timeout_seconds,
        )
