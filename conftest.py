# conftest.py - Global pytest configuration
"""
Global pytest configuration.

Every test runs against the in-memory deployment adapter with settings
rebuilt from a clean environment.
"""
import pytest

from stowage.config import get_settings
from stowage.plugins.errors import StatusUnavailableError
from stowage.plugins.schemas import PluginInfo, ServerStatus


@pytest.fixture(autouse=True)
def stowage_env(monkeypatch, tmp_path):
    """Point settings at a temporary plugins dir and the mock adapter."""
    monkeypatch.setenv("STOWAGE_ADAPTER_MODE", "mock")
    monkeypatch.setenv("STOWAGE_PLUGINS_DIR", str(tmp_path / "plugins"))
    monkeypatch.setenv("STOWAGE_KUBE_TOKEN_FILE", str(tmp_path / "no-token"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeStatusSource:
    """Status source returning canned plugins, or failing like an unreachable server."""

    def __init__(self, plugins: list[PluginInfo] | None = None, fail: bool = False):
        self.plugins = plugins or []
        self.fail = fail
        self.calls = 0
        self.closed = False

    async def get_server_status(self) -> ServerStatus:
        self.calls += 1
        if self.fail:
            raise StatusUnavailableError("connection refused")
        return ServerStatus(server_version="test", plugins=self.plugins)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def unreachable_status():
    return FakeStatusSource(fail=True)
