"""Tests for the Kubernetes REST adapter using an in-process transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from stowage.adapters.kubernetes_adapter import (
    JSON_PATCH_CONTENT_TYPE,
    KubernetesAdapter,
    add_init_container_patch,
    build_init_container,
    remove_init_container_patch,
)
from stowage.plugins import InitContainerRecord, ResolutionCandidate
from stowage.plugins.errors import DeploymentError, PluginAlreadyInstalledError

DEPLOYMENT_PATH = "/apis/apps/v1/namespaces/stowage/deployments/stowage"


def _deployment(init_containers=None, volumes=None):
    spec = {"containers": [{"name": "stowage", "image": "stowage/stowage:latest"}]}
    if init_containers is not None:
        spec["initContainers"] = init_containers
    if volumes is not None:
        spec["volumes"] = volumes
    return {"spec": {"template": {"spec": spec}}}


class RecordingTransport:
    """Serves a canned deployment and records every request."""

    def __init__(self, deployment=None, get_status=200, patch_status=200):
        self.deployment = deployment if deployment is not None else _deployment([])
        self.get_status = get_status
        self.patch_status = patch_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            return httpx.Response(self.get_status, json=self.deployment)
        return httpx.Response(self.patch_status, json=self.deployment)

    @property
    def patches(self):
        return [json.loads(r.content) for r in self.requests if r.method == "PATCH"]


def _adapter(handler, **kwargs):
    return KubernetesAdapter(
        api_url="https://kube.example:6443/",
        namespace="stowage",
        deployment_name="stowage",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _run(adapter, coro_fn):
    async def _go():
        try:
            return await coro_fn(adapter)
        finally:
            await adapter.close()

    return asyncio.run(_go())


class TestPatchBuilders:
    def test_remove_patch_tests_name_before_removing(self):
        candidate = ResolutionCandidate(index=2, record=InitContainerRecord(name="aws", image="repo/aws:v1"))

        assert remove_init_container_patch(candidate) == [
            {"op": "test", "path": "/spec/template/spec/initContainers/2/name", "value": "aws"},
            {"op": "remove", "path": "/spec/template/spec/initContainers/2"},
        ]

    def test_add_patch_appends_to_existing_list(self):
        container = build_init_container(
            "repo/aws:v1", name="repo-aws", volume_name="plugins", mount_path="/target", pull_policy="Always"
        )
        deployment = _deployment([{"name": "gcp", "image": "repo/gcp:v1"}], [{"name": "plugins", "emptyDir": {}}])

        ops = add_init_container_patch(deployment, container, "plugins")

        assert ops == [{"op": "add", "path": "/spec/template/spec/initContainers/-", "value": container}]
        assert container["volumeMounts"] == [{"name": "plugins", "mountPath": "/target"}]
        assert container["imagePullPolicy"] == "Always"

    def test_add_patch_creates_lists_and_volume(self):
        container = {"name": "repo-aws", "image": "repo/aws:v1"}

        ops = add_init_container_patch(_deployment(), container, "plugins")

        assert ops == [
            {"op": "add", "path": "/spec/template/spec/initContainers", "value": [container]},
            {"op": "add", "path": "/spec/template/spec/volumes", "value": [{"name": "plugins", "emptyDir": {}}]},
        ]

    def test_add_patch_appends_missing_volume(self):
        container = {"name": "repo-aws", "image": "repo/aws:v1"}
        deployment = _deployment([], [{"name": "scratch", "emptyDir": {}}])

        ops = add_init_container_patch(deployment, container, "plugins")

        assert ops[-1] == {
            "op": "add",
            "path": "/spec/template/spec/volumes/-",
            "value": {"name": "plugins", "emptyDir": {}},
        }

    @pytest.mark.parametrize(
        "existing",
        [{"name": "repo-aws", "image": "other:v1"}, {"name": "other", "image": "repo/aws:v1"}],
    )
    def test_add_patch_rejects_installed_plugin(self, existing):
        with pytest.raises(PluginAlreadyInstalledError):
            add_init_container_patch(
                _deployment([existing]), {"name": "repo-aws", "image": "repo/aws:v1"}, "plugins"
            )


class TestKubernetesAdapter:
    def test_list_init_containers(self):
        transport = RecordingTransport(
            _deployment(
                [
                    {"name": "aws", "image": "repo/aws:v1"},
                    {"name": "gcp", "image": "repo/gcp:v1"},
                ]
            )
        )

        records = _run(_adapter(transport, token="secret"), lambda a: a.list_init_containers())

        assert records == [
            InitContainerRecord(name="aws", image="repo/aws:v1"),
            InitContainerRecord(name="gcp", image="repo/gcp:v1"),
        ]
        request = transport.requests[0]
        assert request.url.path == DEPLOYMENT_PATH
        assert request.headers["Authorization"] == "Bearer secret"

    def test_no_token_sends_no_authorization(self):
        transport = RecordingTransport()

        _run(_adapter(transport), lambda a: a.list_init_containers())

        assert "Authorization" not in transport.requests[0].headers

    def test_missing_deployment(self):
        transport = RecordingTransport(get_status=404)

        with pytest.raises(DeploymentError, match="stowage/stowage not found"):
            _run(_adapter(transport), lambda a: a.get_deployment())

    def test_server_error_on_read(self):
        transport = RecordingTransport(get_status=500)

        with pytest.raises(DeploymentError, match="HTTP 500"):
            _run(_adapter(transport), lambda a: a.get_deployment())

    def test_unreachable_api(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DeploymentError, match="failed to read deployment"):
            _run(_adapter(handler), lambda a: a.list_init_containers())

    def test_remove_sends_guarded_json_patch(self):
        transport = RecordingTransport(_deployment([{"name": "aws", "image": "repo/aws:v1"}]))
        candidate = ResolutionCandidate(index=0, record=InitContainerRecord(name="aws", image="repo/aws:v1"))

        _run(_adapter(transport), lambda a: a.remove_init_container(candidate))

        request = transport.requests[-1]
        assert request.method == "PATCH"
        assert request.headers["Content-Type"] == JSON_PATCH_CONTENT_TYPE
        assert transport.patches == [remove_init_container_patch(candidate)]

    def test_failed_guard_reports_concurrent_change(self):
        transport = RecordingTransport(patch_status=422)
        candidate = ResolutionCandidate(index=0, record=InitContainerRecord(name="aws", image="repo/aws:v1"))

        with pytest.raises(DeploymentError, match="retry the command"):
            _run(_adapter(transport), lambda a: a.remove_init_container(candidate))

    def test_add_reads_then_patches(self):
        transport = RecordingTransport(_deployment([], [{"name": "plugins", "emptyDir": {}}]))

        record = _run(
            _adapter(transport),
            lambda a: a.add_init_container(
                "repo/aws:v1", name="repo-aws", volume_name="plugins", mount_path="/target", pull_policy="IfNotPresent"
            ),
        )

        assert record == InitContainerRecord(name="repo-aws", image="repo/aws:v1")
        assert [r.method for r in transport.requests] == ["GET", "PATCH"]
        [ops] = transport.patches
        assert ops[0]["path"] == "/spec/template/spec/initContainers/-"
        assert ops[0]["value"]["name"] == "repo-aws"

    def test_close_is_idempotent(self):
        adapter = _adapter(RecordingTransport())

        async def _go():
            await adapter.get_deployment()
            await adapter.close()
            await adapter.close()

        asyncio.run(_go())
