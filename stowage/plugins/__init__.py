"""Plugin registrations, classification, and removal resolution."""

from .classifier import classify, classify_all, current_process_path
from .errors import (
    AmbiguousPluginError,
    BuiltInPluginError,
    DeploymentError,
    DuplicateRegistrationError,
    ManifestLoadError,
    PluginAlreadyInstalledError,
    PluginNotFoundError,
    PluginResolutionError,
    RegistrationError,
    StatusUnavailableError,
    StowageError,
)
from .matcher import container_name_for_image, find_candidates, last_segment, sanitize
from .models import InitContainerRecord, PluginKind, PluginRegistration, ResolutionCandidate
from .registry import RegistrationRegistry
from .resolver import RemovalResolver, StatusSource, find_exact
from .schemas import PluginInfo, ServerStatus

__all__ = [
    "AmbiguousPluginError",
    "BuiltInPluginError",
    "DeploymentError",
    "DuplicateRegistrationError",
    "InitContainerRecord",
    "ManifestLoadError",
    "PluginAlreadyInstalledError",
    "PluginInfo",
    "PluginKind",
    "PluginNotFoundError",
    "PluginRegistration",
    "PluginResolutionError",
    "RegistrationError",
    "RegistrationRegistry",
    "RemovalResolver",
    "ResolutionCandidate",
    "ServerStatus",
    "StatusSource",
    "StatusUnavailableError",
    "StowageError",
    "classify",
    "classify_all",
    "container_name_for_image",
    "current_process_path",
    "find_candidates",
    "find_exact",
    "last_segment",
    "sanitize",
]
