"""Kubernetes adapter for the server deployment's plugin init containers."""

from __future__ import annotations

import logging
import ssl
from typing import Any

import httpx

from stowage.plugins.errors import DeploymentError, PluginAlreadyInstalledError
from stowage.plugins.models import InitContainerRecord, ResolutionCandidate

logger = logging.getLogger(__name__)

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"
_POD_SPEC_PATH = "/spec/template/spec"


def build_init_container(
    image: str,
    *,
    name: str,
    volume_name: str,
    mount_path: str,
    pull_policy: str,
) -> dict[str, Any]:
    """Init container spec that copies a plugin binary into the plugins volume."""
    return {
        "name": name,
        "image": image,
        "imagePullPolicy": pull_policy,
        "volumeMounts": [{"name": volume_name, "mountPath": mount_path}],
    }


def pod_spec(deployment: dict[str, Any]) -> dict[str, Any]:
    return deployment.get("spec", {}).get("template", {}).get("spec", {})


def init_containers_of(deployment: dict[str, Any]) -> list[InitContainerRecord]:
    return [InitContainerRecord.from_spec(c) for c in pod_spec(deployment).get("initContainers") or []]


def add_init_container_patch(
    deployment: dict[str, Any],
    container: dict[str, Any],
    volume_name: str,
) -> list[dict[str, Any]]:
    """JSON patch appending ``container`` and, if missing, the plugins volume.

    Raises:
        PluginAlreadyInstalledError: If an init container with the same name or image exists
    """
    spec = pod_spec(deployment)
    existing = spec.get("initContainers") or []
    for current in existing:
        if current.get("name") == container["name"] or current.get("image") == container["image"]:
            raise PluginAlreadyInstalledError(
                f"init container {current.get('name')} ({current.get('image')}) is already installed"
            )

    ops: list[dict[str, Any]] = []
    if "initContainers" in spec and spec["initContainers"] is not None:
        ops.append({"op": "add", "path": f"{_POD_SPEC_PATH}/initContainers/-", "value": container})
    else:
        ops.append({"op": "add", "path": f"{_POD_SPEC_PATH}/initContainers", "value": [container]})

    volume = {"name": volume_name, "emptyDir": {}}
    volumes = spec.get("volumes")
    if volumes is None:
        ops.append({"op": "add", "path": f"{_POD_SPEC_PATH}/volumes", "value": [volume]})
    elif not any(v.get("name") == volume_name for v in volumes):
        ops.append({"op": "add", "path": f"{_POD_SPEC_PATH}/volumes/-", "value": volume})

    return ops


def remove_init_container_patch(candidate: ResolutionCandidate) -> list[dict[str, Any]]:
    """JSON patch removing ``candidate``, guarded against concurrent reordering."""
    path = f"{_POD_SPEC_PATH}/initContainers/{candidate.index}"
    return [
        {"op": "test", "path": f"{path}/name", "value": candidate.name},
        {"op": "remove", "path": path},
    ]


class KubernetesAdapter:
    """Reads and patches one Deployment through the Kubernetes REST API."""

    def __init__(
        self,
        api_url: str,
        namespace: str,
        deployment_name: str,
        token: str | None = None,
        verify_ssl: bool = True,
        ca_file: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.namespace = namespace
        self.deployment_name = deployment_name
        self._token = token
        self._verify: bool | ssl.SSLContext = ssl.create_default_context(cafile=ca_file) if ca_file else verify_ssl
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def deployment_path(self) -> str:
        return f"/apis/apps/v1/namespaces/{self.namespace}/deployments/{self.deployment_name}"

    @property
    def deployment_ref(self) -> str:
        return f"{self.namespace}/{self.deployment_name}"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers=headers,
                timeout=self._timeout,
                verify=self._verify,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get_deployment(self) -> dict[str, Any]:
        """Fetch the deployment object.

        Raises:
            DeploymentError: If the API is unreachable or the deployment is missing
        """
        client = await self._get_client()
        try:
            response = await client.get(self.deployment_path)
        except httpx.HTTPError as exc:
            raise DeploymentError(f"failed to read deployment {self.deployment_ref}: {exc}") from exc

        if response.status_code == 404:
            raise DeploymentError(f"deployment {self.deployment_ref} not found")
        if response.is_error:
            raise DeploymentError(
                f"failed to read deployment {self.deployment_ref}: HTTP {response.status_code}"
            )
        return response.json()

    async def list_init_containers(self) -> list[InitContainerRecord]:
        """Current init containers of the deployment, in pod-spec order."""
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
        """Append a plugin init container to the deployment."""
        deployment = await self.get_deployment()
        container = build_init_container(
            image, name=name, volume_name=volume_name, mount_path=mount_path, pull_policy=pull_policy
        )
        await self._patch(add_init_container_patch(deployment, container, volume_name))
        logger.info("Added init container %s (%s) to deployment %s", name, image, self.deployment_ref)
        return InitContainerRecord(name=name, image=image)

    async def remove_init_container(self, candidate: ResolutionCandidate) -> None:
        """Remove a resolved init container from the deployment."""
        await self._patch(remove_init_container_patch(candidate))
        logger.info(
            "Removed init container %s (%s) from deployment %s",
            candidate.name,
            candidate.image,
            self.deployment_ref,
        )

    async def _patch(self, ops: list[dict[str, Any]]) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.patch(
                self.deployment_path,
                json=ops,
                headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
            )
        except httpx.HTTPError as exc:
            raise DeploymentError(f"failed to patch deployment {self.deployment_ref}: {exc}") from exc

        if response.status_code == 422:
            raise DeploymentError(
                f"deployment {self.deployment_ref} changed while patching, retry the command"
            )
        if response.is_error:
            raise DeploymentError(
                f"failed to patch deployment {self.deployment_ref}: HTTP {response.status_code}"
            )
        return response.json()
