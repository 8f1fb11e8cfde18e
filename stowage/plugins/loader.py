"""Discovery of external plugin registrations from installed manifests.

Each plugin init container copies its binary and a ``manifest.yaml`` into the
shared plugins volume::

    /plugins/
    └── stowage-plugin-for-aws/
        ├── manifest.yaml
        └── stowage-plugin-for-aws

with a manifest such as::

    command: stowage-plugin-for-aws
    plugins:
      - name: stowage.io/aws
        kind: ObjectStore
      - name: stowage.io/aws
        kind: VolumeSnapshotter
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ManifestLoadError
from .models import PluginRegistration

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.yaml"


class ManifestPlugin(BaseModel):
    """One plugin served by the manifest's binary."""

    name: str = Field(..., min_length=1, description="Plugin display name, e.g. 'stowage.io/aws'")
    kind: str = Field(..., min_length=1, description="Capability category, e.g. 'ObjectStore'")


class PluginManifest(BaseModel):
    """Contents of an external plugin's manifest.yaml."""

    command: str = Field(..., min_length=1, description="Binary path, relative to the manifest directory")
    plugins: list[ManifestPlugin] = Field(..., min_length=1)


def load_manifest(plugin_dir: Path) -> PluginManifest:
    """Load and validate the manifest in ``plugin_dir``.

    Raises:
        ManifestLoadError: If the manifest is missing or invalid
    """
    manifest_path = plugin_dir / MANIFEST_FILENAME

    if not manifest_path.exists():
        raise ManifestLoadError(f"No {MANIFEST_FILENAME} found in {plugin_dir}")

    try:
        with open(manifest_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ManifestLoadError(f"Invalid YAML in manifest: {e}") from e

    if not isinstance(data, dict):
        raise ManifestLoadError(f"Manifest must be a mapping: {manifest_path}")

    try:
        return PluginManifest(**data)
    except ValidationError as e:
        raise ManifestLoadError(f"Invalid manifest: {e}") from e


def load_registrations(plugin_dir: Path) -> list[PluginRegistration]:
    """Build registrations for every plugin a manifest declares.

    Raises:
        ManifestLoadError: If the manifest is invalid or its command is missing
    """
    manifest = load_manifest(plugin_dir)
    command = (plugin_dir / manifest.command).absolute()
    if not command.is_file():
        raise ManifestLoadError(f"Plugin command not found: {command}")

    return [
        PluginRegistration(name=plugin.name, kind=plugin.kind, command=str(command))
        for plugin in manifest.plugins
    ]


def discover_registrations(base_dir: Path) -> list[PluginRegistration]:
    """Collect registrations from every manifest under ``base_dir``.

    Invalid manifests are logged and skipped.
    """
    registrations: list[PluginRegistration] = []

    if not base_dir.exists():
        logger.warning("Plugin directory does not exist: %s", base_dir)
        return registrations

    for manifest_path in sorted(base_dir.rglob(MANIFEST_FILENAME)):
        plugin_dir = manifest_path.parent
        try:
            registrations.extend(load_registrations(plugin_dir))
        except ManifestLoadError as e:
            logger.warning("Skipping plugin in %s: %s", plugin_dir, e)

    logger.info("Discovered %d plugin registrations in %s", len(registrations), base_dir)
    return registrations
