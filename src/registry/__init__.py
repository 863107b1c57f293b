"""Registry variants for versioned module URLs.

``REGISTRIES`` is the built-in priority order; callers pass their own list to
override or extend matching.
"""

from .base import RegistryUrl, lookup
from .deno import DenoLand, DenoStd
from .github import GitHubRaw, JsDelivrGitHub
from .npm import EsmSh, JsDelivrNpm, Skypack, Unpkg

REGISTRIES = (
    DenoLand,
    DenoStd,
    Unpkg,
    EsmSh,
    Skypack,
    JsDelivrNpm,
    JsDelivrGitHub,
    GitHubRaw,
)


def registries_by_name():
    """Map each built-in registry's ``name`` to its class."""
    return {registry.name: registry for registry in REGISTRIES}


__all__ = [
    "REGISTRIES",
    "RegistryUrl",
    "lookup",
    "registries_by_name",
    "DenoLand",
    "DenoStd",
    "Unpkg",
    "EsmSh",
    "Skypack",
    "JsDelivrNpm",
    "JsDelivrGitHub",
    "GitHubRaw",
]
