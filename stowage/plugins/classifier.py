"""Built-in vs. external classification of registered plugins.

A plugin is built-in when it was registered by the running server binary
itself. Init-container binaries always live at a different path than the
server, so comparing paths needs no extra metadata from the plugin.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable

from .models import PluginRegistration
from .schemas import PluginInfo


def current_process_path() -> str:
    """Absolute path of the binary that started this process."""
    entry = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.abspath(entry)


def classify(registration: PluginRegistration, process_path: str) -> PluginInfo:
    """Classify one registration against the server's own binary path.

    Exact string comparison: no symlink resolution, no case folding.
    """
    return PluginInfo(
        name=registration.name,
        kind=registration.kind,
        command=registration.command,
        built_in=registration.command == process_path,
    )


def classify_all(registrations: Iterable[PluginRegistration], process_path: str) -> list[PluginInfo]:
    return [classify(registration, process_path) for registration in registrations]
