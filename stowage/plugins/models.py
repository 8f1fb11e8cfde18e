"""Dataclasses for plugin registrations and deployment init containers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PluginKind(str, Enum):
    """Capability categories a plugin can register under."""

    BACKUP_ITEM_ACTION = "BackupItemAction"
    BACKUP_ITEM_ACTION_V2 = "BackupItemActionV2"
    RESTORE_ITEM_ACTION = "RestoreItemAction"
    RESTORE_ITEM_ACTION_V2 = "RestoreItemActionV2"
    DELETE_ITEM_ACTION = "DeleteItemAction"
    OBJECT_STORE = "ObjectStore"
    VOLUME_SNAPSHOTTER = "VolumeSnapshotter"
    ITEM_BLOCK_ACTION = "ItemBlockAction"


@dataclass(frozen=True, slots=True)
class PluginRegistration:
    """Which binary registered which named plugin of which kind."""

    name: str
    kind: str
    command: str


@dataclass(frozen=True, slots=True)
class InitContainerRecord:
    """One init container currently present on the deployment pod template."""

    name: str
    image: str

    @classmethod
    def from_spec(cls, spec: dict) -> InitContainerRecord:
        return cls(name=spec.get("name", ""), image=spec.get("image", ""))


@dataclass(frozen=True, slots=True)
class ResolutionCandidate:
    """An init container proposed as the removal target, with its list index."""

    index: int
    record: InitContainerRecord

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def image(self) -> str:
        return self.record.image
