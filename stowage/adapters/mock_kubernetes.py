"""Mock Kubernetes adapter for testing.

Keeps a deployment in memory and applies the same patches the real adapter
would send, without an API server.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from stowage.plugins.errors import DeploymentError
from stowage.plugins.models import InitContainerRecord, ResolutionCandidate

from .kubernetes_adapter import (
    add_init_container_patch,
    build_init_container,
    init_containers_of,
    pod_spec,
)

logger = logging.getLogger(__name__)

DEFAULT_INIT_CONTAINERS = [
    {"name": "stowage-plugin-for-aws", "image": "stowage/stowage-plugin-for-aws:v1.12.0"},
    {"name": "stowage-plugin-for-gcp", "image": "stowage/stowage-plugin-for-gcp:v1.12.0"},
]


class MockKubernetesAdapter:
    """In-memory stand-in for KubernetesAdapter."""

    def __init__(
        self,
        init_containers: list[dict[str, Any]] | None = None,
        namespace: str = "stowage",
        deployment_name: str = "stowage",
    ) -> None:
        self.namespace = namespace
        self.deployment_name = deployment_name
        containers = DEFAULT_INIT_CONTAINERS if init_containers is None else init_containers
        self.deployment: dict[str, Any] = {
            "metadata": {"name": deployment_name, "namespace": namespace},
            "spec": {
                "template": {
                    "spec": {
                        "initContainers": copy.deepcopy(containers),
                        "containers": [{"name": "stowage", "image": "stowage/stowage:latest"}],
                        "volumes": [{"name": "plugins", "emptyDir": {}}],
                    }
                }
            },
        }
        self.patches: list[list[dict[str, Any]]] = []
        self.reads = 0
        logger.debug("[MockKubernetes] Initialized mock Kubernetes adapter")

    @property
    def deployment_ref(self) -> str:
        return f"{self.namespace}/{self.deployment_name}"

    async def close(self) -> None:
        return None

    async def get_deployment(self) -> dict[str, Any]:
        self.reads += 1
        return copy.deepcopy(self.deployment)

    async def list_init_containers(self) -> list[InitContainerRecord]:
        return init_containers_of(await self.get_deployment())

    async def add_init_container(
        self,
        image: str,
        *,
        name: str,
        volume_name: str,
        mount_path: str,
        pull_policy: str,
    ) -> InitContainerRecord:
        container = build_init_container(
            image, name=name, volume_name=volume_name, mount_path=mount_path, pull_policy=pull_policy
        )
        ops = add_init_container_patch(self.deployment, container, volume_name)
        self.patches.append(ops)

        spec = pod_spec(self.deployment)
        spec.setdefault("initContainers", [])
        if spec["initContainers"] is None:
            spec["initContainers"] = []
        spec["initContainers"].append(container)
        volumes = spec.setdefault("volumes", [])
        if not any(v.get("name") == volume_name for v in volumes):
            volumes.append({"name": volume_name, "emptyDir": {}})
        return InitContainerRecord(name=name, image=image)

    async def remove_init_container(self, candidate: ResolutionCandidate) -> None:
        containers = pod_spec(self.deployment).get("initContainers") or []
        if candidate.index >= len(containers) or containers[candidate.index].get("name") != candidate.name:
            raise DeploymentError(
                f"deployment {self.deployment_ref} changed while patching, retry the command"
            )
        self.patches.append([{"op": "remove", "path": f"/spec/template/spec/initContainers/{candidate.index}"}])
        del containers[candidate.index]
