"""Registry of plugin registration records."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import DuplicateRegistrationError, RegistrationError
from .models import PluginRegistration


class RegistrationRegistry:
    """In-memory store of plugin registrations, keyed by (kind, name)."""

    def __init__(self) -> None:
        self._registrations: dict[tuple[str, str], PluginRegistration] = {}

    def register(self, registration: PluginRegistration) -> None:
        """Record a plugin registration.

        Raises:
            RegistrationError: If the name, kind or command is empty.
            DuplicateRegistrationError: If (kind, name) is already registered.
        """

        name = registration.name.strip()
        if not name:
            raise RegistrationError("Plugin name cannot be empty")
        if not registration.kind.strip():
            raise RegistrationError(f"Plugin kind cannot be empty: {name}")
        if not registration.command:
            raise RegistrationError(f"Plugin command cannot be empty: {name}")

        key = (registration.kind, name)
        existing = self._registrations.get(key)
        if existing is not None:
            raise DuplicateRegistrationError(
                f"Plugin already registered: {registration.kind} {name} (by {existing.command})"
            )
        self._registrations[key] = registration

    def register_many(self, registrations: Iterable[PluginRegistration]) -> None:
        """Register multiple records."""

        for registration in registrations:
            self.register(registration)

    def list(self) -> list[PluginRegistration]:
        """List registrations sorted by kind, then name."""

        return [self._registrations[key] for key in sorted(self._registrations)]

    def clear(self) -> None:
        """Clear all registrations (test utility)."""

        self._registrations.clear()

    def __len__(self) -> int:
        return len(self._registrations)
