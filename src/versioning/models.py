"""Data models for module references, resolution and update outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from constants import Constants


class ResolutionStatus(Enum):
    """Outcome kind of resolving a target version for one reference."""
    OK = "ok"
    NOT_SEMVER = "not_semver"
    CONSTRAINT_SYNTAX_ERROR = "constraint_syntax_error"
    NO_COMPATIBLE_VERSION = "no_compatible_version"


@dataclass(frozen=True)
class ModuleReference:
    """One versioned import target found in the file."""
    url: str
    version_token: str
    fragment: Optional[str] = None

    @classmethod
    def from_url(cls, url: str, version_token: str) -> "ModuleReference":
        """Build a reference, splitting off the ``#...`` fragment of ``url``."""
        fragment = url.split("#", 1)[1] if "#" in url else None
        return cls(url=url, version_token=version_token, fragment=fragment)

    @property
    def modifier(self) -> Optional[str]:
        """Leading ``^``/``~``/``=``/``<`` of the version token, if any."""
        head = self.version_token[:1]
        return head if head in Constants.MODIFIERS else None

    @property
    def needs_relocation(self) -> bool:
        """True when a modifier sits on a version and no fragment holds it yet."""
        return (
            self.modifier is not None
            and len(self.version_token) > 1
            and self.fragment is None
        )


@dataclass(frozen=True)
class Resolution:
    """Tagged result of target selection.

    Registry failures are not represented here: they propagate as
    ``RegistryFetchError``.
    """
    status: ResolutionStatus
    version: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ResolutionStatus.OK


@dataclass(frozen=True)
class UpdateOutcome:
    """Result for one processed reference.

    ``success`` left as None means nothing needed doing (or the reference was
    skipped), not a failure.
    """
    init_url: str
    init_version: str
    message: Optional[str] = None
    success: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "initUrl": self.init_url,
            "initVersion": self.init_version,
        }
        if self.message is not None:
            data["message"] = self.message
        if self.success is not None:
            data["success"] = self.success
        return data
