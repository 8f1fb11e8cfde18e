"""Bootstrap helpers for plugin registration at server start."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import RegistrationError
from .loader import discover_registrations
from .models import PluginKind, PluginRegistration
from .registry import RegistrationRegistry

logger = logging.getLogger(__name__)

BUILTIN_PLUGINS: list[tuple[str, PluginKind]] = [
    ("stowage.io/pv", PluginKind.BACKUP_ITEM_ACTION),
    ("stowage.io/pod", PluginKind.BACKUP_ITEM_ACTION),
    ("stowage.io/service-account", PluginKind.BACKUP_ITEM_ACTION),
    ("stowage.io/crd-remap-version", PluginKind.BACKUP_ITEM_ACTION),
    ("stowage.io/job", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/pod", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/service", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/service-account", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/secret", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/add-pvc-from-pod", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/change-storage-class", PluginKind.RESTORE_ITEM_ACTION),
    ("stowage.io/pod", PluginKind.ITEM_BLOCK_ACTION),
    ("stowage.io/pvc", PluginKind.ITEM_BLOCK_ACTION),
]


def builtin_registrations(process_path: str) -> list[PluginRegistration]:
    """Registrations for the plugins compiled into the server itself."""

    return [
        PluginRegistration(name=name, kind=kind.value, command=process_path)
        for name, kind in BUILTIN_PLUGINS
    ]


def build_registry(process_path: str, plugins_dir: Path | None = None) -> RegistrationRegistry:
    """Build a registry of built-in plugins plus those installed in ``plugins_dir``.

    External registrations that clash with an existing (kind, name) pair are
    logged and skipped.
    """

    registry = RegistrationRegistry()
    registry.register_many(builtin_registrations(process_path))

    if plugins_dir is None:
        return registry

    for registration in discover_registrations(plugins_dir):
        try:
            registry.register(registration)
        except RegistrationError as e:
            logger.warning(
                "Skipping %s plugin %s from %s: %s", registration.kind, registration.name, registration.command, e
            )

    return registry
