from __future__ import annotations

from stowage.plugins import PluginInfo, ServerStatus


def test_missing_built_in_reads_as_false():
    info = PluginInfo.model_validate({"name": "org/aws", "kind": "ObjectStore"})

    assert info.built_in is False
    assert info.command is None


def test_wire_aliases():
    info = PluginInfo.model_validate(
        {"name": "stowage.io/pod", "kind": "BackupItemAction", "command": "/stowage", "builtIn": True}
    )

    assert info.built_in is True
    assert info.model_dump(by_alias=True) == {
        "name": "stowage.io/pod",
        "kind": "BackupItemAction",
        "command": "/stowage",
        "builtIn": True,
    }


def test_server_status_from_older_server():
    status = ServerStatus.model_validate(
        {
            "serverVersion": "v1.0.0",
            "plugins": [{"name": "org/aws", "kind": "ObjectStore"}],
            "phase": "Processed",
        }
    )

    assert status.server_version == "v1.0.0"
    assert status.plugins[0].built_in is False


def test_find_plugins_returns_every_kind():
    status = ServerStatus(
        plugins=[
            PluginInfo(name="stowage.io/pod", kind="BackupItemAction"),
            PluginInfo(name="stowage.io/pv", kind="BackupItemAction"),
            PluginInfo(name="stowage.io/pod", kind="RestoreItemAction"),
        ]
    )

    assert [p.kind for p in status.find_plugins("stowage.io/pod")] == ["BackupItemAction", "RestoreItemAction"]
    assert status.find_plugins("missing") == []
