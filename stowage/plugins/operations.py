"""Plugin add/remove operations against the server deployment."""

from __future__ import annotations

import logging
from typing import Protocol

from .matcher import container_name_for_image
from .models import InitContainerRecord, ResolutionCandidate
from .resolver import RemovalResolver, StatusSource

logger = logging.getLogger(__name__)


class DeploymentAdapter(Protocol):
    """Read and patch access to the deployment's init containers."""

    async def list_init_containers(self) -> list[InitContainerRecord]: ...

    async def add_init_container(
        self,
        image: str,
        *,
        name: str,
        volume_name: str,
        mount_path: str,
        pull_policy: str,
    ) -> InitContainerRecord: ...

    async def remove_init_container(self, candidate: ResolutionCandidate) -> None: ...


async def remove_plugin(
    adapter: DeploymentAdapter,
    arg: str,
    status_source: StatusSource | None = None,
) -> ResolutionCandidate:
    """Resolve ``arg`` to one init container and remove it.

    The deployment is patched only after resolution succeeds.
    """
    records = await adapter.list_init_containers()
    candidate = await RemovalResolver(status_source).resolve(arg, records)
    await adapter.remove_init_container(candidate)
    logger.info("Removed plugin %s (init container %s, image %s)", arg, candidate.name, candidate.image)
    return candidate


async def add_plugin(
    adapter: DeploymentAdapter,
    image: str,
    *,
    volume_name: str,
    mount_path: str,
    pull_policy: str,
) -> InitContainerRecord:
    """Install a plugin image as a new init container."""
    record = await adapter.add_init_container(
        image,
        name=container_name_for_image(image),
        volume_name=volume_name,
        mount_path=mount_path,
        pull_policy=pull_policy,
    )
    logger.info("Added plugin image %s as init container %s", record.image, record.name)
    return record
