"""Resolve a user-supplied plugin identifier to one removable init container.

Resolution order:

1. exact match on init container name or image;
2. identifiers without ``/`` cannot be plugin names, so they stop here;
3. ask the server whether the plugin is built-in (refuse if so), degrading
   silently when the server cannot be reached;
4. heuristic matching, which must yield exactly one candidate.

The resolver never mutates the deployment.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from .errors import (
    AmbiguousPluginError,
    BuiltInPluginError,
    PluginNotFoundError,
    StatusUnavailableError,
)
from .matcher import find_candidates
from .models import InitContainerRecord, ResolutionCandidate
from .schemas import ServerStatus

logger = logging.getLogger(__name__)


class StatusSource(Protocol):
    """Anything that can fetch the server's classified plugin list."""

    async def get_server_status(self) -> ServerStatus:
        """Raises StatusUnavailableError when the server cannot answer."""


def find_exact(arg: str, records: Sequence[InitContainerRecord]) -> ResolutionCandidate | None:
    """First init container whose name or image equals ``arg``."""
    for index, record in enumerate(records):
        if record.name == arg or record.image == arg:
            return ResolutionCandidate(index=index, record=record)
    return None


class RemovalResolver:
    """Pick the init container to remove for ``plugin remove``."""

    def __init__(self, status_source: StatusSource | None = None) -> None:
        self.status_source = status_source

    async def resolve(self, arg: str, records: Sequence[InitContainerRecord]) -> ResolutionCandidate:
        """Return the single removal target for ``arg``.

        Raises:
            BuiltInPluginError: The server reports ``arg`` as built-in.
            PluginNotFoundError: Nothing matches ``arg``.
            AmbiguousPluginError: Heuristic matching found several containers.
        """
        exact = find_exact(arg, records)
        if exact is not None:
            logger.debug("Resolved %s to init container %s by exact match", arg, exact.name)
            return exact

        if "/" not in arg:
            raise PluginNotFoundError(arg, records)

        status = await self._fetch_status()
        if status is not None and any(p.built_in for p in status.find_plugins(arg)):
            raise BuiltInPluginError(arg)

        candidates = find_candidates(arg, records)
        if not candidates:
            raise PluginNotFoundError(arg, records)
        if len(candidates) > 1:
            raise AmbiguousPluginError(arg, candidates)

        logger.debug("Resolved %s to init container %s by name heuristics", arg, candidates[0].name)
        return candidates[0]

    async def _fetch_status(self) -> ServerStatus | None:
        if self.status_source is None:
            return None
        try:
            return await self.status_source.get_server_status()
        except StatusUnavailableError as exc:
            logger.warning("Server status unavailable, falling back to name heuristics: %s", exc)
            return None
