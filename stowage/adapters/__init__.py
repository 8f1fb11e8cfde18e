"""Adapters package."""

from stowage.config import Settings
from stowage.adapters.kubernetes_adapter import KubernetesAdapter
from stowage.adapters.mock_kubernetes import MockKubernetesAdapter


def get_deployment_adapter(settings: Settings) -> KubernetesAdapter | MockKubernetesAdapter:
    """Adapter for the configured deployment; ``adapter_mode=mock`` keeps it in memory."""
    if settings.adapter_mode.lower().strip() == "mock":
        return MockKubernetesAdapter(namespace=settings.namespace, deployment_name=settings.deployment_name)
    return KubernetesAdapter(
        api_url=settings.kube_api_url,
        namespace=settings.namespace,
        deployment_name=settings.deployment_name,
        token=settings.kube_token,
        verify_ssl=settings.kube_verify_ssl,
        ca_file=settings.kube_ca_file,
        timeout=settings.kube_timeout_seconds,
    )


__all__ = [
    # Real adapters
    "KubernetesAdapter",
    # Mock adapters
    "MockKubernetesAdapter",
    "get_deployment_adapter",
]
