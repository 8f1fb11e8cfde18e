"""Typed errors for plugin registration, resolution, and deployment changes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import InitContainerRecord, ResolutionCandidate


class StowageError(Exception):
    """Base class for stowage errors."""


class RegistrationError(StowageError):
    """Raised when a plugin registration is invalid."""


class DuplicateRegistrationError(RegistrationError):
    """Raised when registering a (kind, name) pair that already exists."""


class ManifestLoadError(StowageError):
    """Raised when an external plugin manifest is missing or invalid."""


class StatusUnavailableError(StowageError):
    """Raised when the server status cannot be fetched or parsed."""


class DeploymentError(StowageError):
    """Raised when the deployment cannot be read or patched."""


class PluginAlreadyInstalledError(DeploymentError):
    """Raised when adding an init container that already exists."""


class PluginResolutionError(StowageError):
    """Base class for user-facing plugin removal failures."""


class BuiltInPluginError(PluginResolutionError):
    """Raised when the requested plugin ships inside the server binary."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"plugin {name} is built-in and cannot be removed")


class PluginNotFoundError(PluginResolutionError):
    """Raised when no init container matches the requested identifier."""

    def __init__(self, arg: str, containers: Sequence[InitContainerRecord]) -> None:
        self.arg = arg
        self.containers = list(containers)
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.containers:
            return f"init container for {self.arg} not found: the deployment has no init containers"
        lines = [f"init container for {self.arg} not found, current init containers:"]
        lines.extend(f"  name: {c.name}, image: {c.image}" for c in self.containers)
        return "\n".join(lines)


class AmbiguousPluginError(PluginResolutionError):
    """Raised when heuristic matching yields more than one init container."""

    def __init__(self, arg: str, candidates: Sequence[ResolutionCandidate]) -> None:
        self.arg = arg
        self.candidates = list(candidates)
        names = ", ".join(c.record.name for c in self.candidates)
        super().__init__(
            f"multiple init containers match {arg} ({names}); "
            "specify the exact init container name or image"
        )
