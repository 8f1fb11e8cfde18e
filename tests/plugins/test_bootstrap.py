from __future__ import annotations

from stowage.plugins import classify_all
from stowage.plugins.bootstrap import BUILTIN_PLUGINS, build_registry, builtin_registrations

SERVER_PATH = "/usr/local/bin/stowage"

GCP_MANIFEST = """
command: stowage-plugin-for-gcp
plugins:
  - name: stowage.io/gcp
    kind: ObjectStore
  - name: stowage.io/pod
    kind: BackupItemAction
"""


def test_builtin_registrations_use_server_path():
    registrations = builtin_registrations(SERVER_PATH)

    assert len(registrations) == len(BUILTIN_PLUGINS)
    assert {r.command for r in registrations} == {SERVER_PATH}


def test_build_registry_without_plugins_dir_has_only_built_ins():
    registry = build_registry(SERVER_PATH)

    assert all(info.built_in for info in classify_all(registry.list(), SERVER_PATH))


def test_build_registry_adds_external_plugins_and_skips_clashes(tmp_path):
    plugin_dir = tmp_path / "stowage-plugin-for-gcp"
    plugin_dir.mkdir()
    (plugin_dir / "manifest.yaml").write_text(GCP_MANIFEST)
    (plugin_dir / "stowage-plugin-for-gcp").write_text("#!/bin/sh\n")

    registry = build_registry(SERVER_PATH, tmp_path)
    infos = {(i.kind, i.name): i for i in classify_all(registry.list(), SERVER_PATH)}

    assert len(registry) == len(BUILTIN_PLUGINS) + 1
    assert infos[("ObjectStore", "stowage.io/gcp")].built_in is False
    # the clashing external registration does not replace the built-in one
    assert infos[("BackupItemAction", "stowage.io/pod")].built_in is True
