"""Heuristic matching of plugin display names to init containers.

Two rules, unioned:

- sanitized name: ``/``, ``_`` and ``.`` in the plugin name become ``-`` and
  must equal the container name exactly;
- last segment: the text after the final ``/`` must occur in the container
  name or image.

The substring rule over-matches when containers share a word (for example a
common base image). Callers surface that as an ambiguity error and the exact
container name or image always resolves.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .models import InitContainerRecord, ResolutionCandidate

_SANITIZE_PATTERN = re.compile(r"[/_.]")


def sanitize(name: str) -> str:
    """Replace every ``/``, ``_`` and ``.`` with ``-``."""
    return _SANITIZE_PATTERN.sub("-", name)


def last_segment(name: str) -> str:
    """Return the part of ``name`` after its final ``/``."""
    return name.rsplit("/", 1)[-1]


def find_candidates(plugin_name: str, records: Sequence[InitContainerRecord]) -> list[ResolutionCandidate]:
    """Return init containers that plausibly install ``plugin_name``, in deployment order."""
    sanitized = sanitize(plugin_name)
    segment = last_segment(plugin_name)

    candidates = []
    for index, record in enumerate(records):
        if record.name == sanitized:
            candidates.append(ResolutionCandidate(index=index, record=record))
        elif segment and (segment in record.name or segment in record.image):
            candidates.append(ResolutionCandidate(index=index, record=record))
    return candidates


def container_name_for_image(image: str) -> str:
    """Derive an init container name from an image reference.

    ``docker.io/stowage/stowage-plugin-for-aws:v1.0.0`` becomes
    ``stowage-stowage-plugin-for-aws``.
    """
    reference = image.split("@", 1)[0]

    last_slash = reference.rfind("/")
    colon = reference.rfind(":")
    if colon > last_slash:
        reference = reference[:colon]

    parts = reference.split("/")
    if len(parts) > 2 or (len(parts) == 2 and any(c in parts[0] for c in ".:")):
        parts = parts[1:]

    return sanitize("/".join(parts))
