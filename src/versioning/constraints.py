"""Constraint algebra over semantic versions.

A constraint is written as one operator optionally followed by a version:

- ``=`` exact match
- ``^`` compatible-with: same major when major > 0, same ``0.minor`` when
  only minor > 0, the exact patch for ``0.0.x``; never below the base
- ``~`` same major.minor, patch at or above the base
- ``<`` strictly below the base

Without an explicit version the operator applies to the reference's current
version, which is how a relocated modifier (``mod.ts#^``) is read back.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from constants import Constants, Modifiers

from .errors import ConstraintSyntaxError, NotSemverError
from .models import ModuleReference
from .semver import Version, compare, parse


def split_modifier(version_token: str) -> Tuple[Optional[str], str]:
    """Split ``"^1.2.3"`` into ``("^", "1.2.3")``; no modifier gives ``(None, token)``."""
    head = version_token[:1]
    if head and head in Constants.MODIFIERS:
        return head, version_token[1:]
    return None, version_token


def _caret(candidate: Version, base: Version) -> bool:
    if compare(candidate, base) < 0:
        return False
    if base.major > 0:
        return candidate.major == base.major
    if base.minor > 0:
        return candidate.major == 0 and candidate.minor == base.minor
    return (candidate.major, candidate.minor, candidate.patch) == (0, 0, base.patch)


def _tilde(candidate: Version, base: Version) -> bool:
    return (
        candidate.major == base.major
        and candidate.minor == base.minor
        and compare(candidate, base) >= 0
    )


_PREDICATES = {
    Modifiers.EXACT.value: lambda candidate, base: compare(candidate, base) == 0,
    Modifiers.CARET.value: _caret,
    Modifiers.TILDE.value: _tilde,
    Modifiers.LESS_THAN.value: lambda candidate, base: compare(candidate, base) < 0,
}


@dataclass(frozen=True)
class VersionConstraint:
    """Predicate over versions, remembering the token it was parsed from."""
    token: str
    operator: str
    base: Version

    def __call__(self, candidate: Version) -> bool:
        return _PREDICATES[self.operator](candidate, self.base)

    def __str__(self) -> str:
        return self.token


def parse_constraint(token: str, current_version: str) -> VersionConstraint:
    """Parse ``token`` (e.g. ``"^"`` or ``"~1.2.0"``) into a constraint.

    Raises:
        ConstraintSyntaxError: on an empty token, an unknown operator, or a
            version that is not semver.
    """
    operator, rest = split_modifier(token.strip())
    if operator is None:
        raise ConstraintSyntaxError(f"invalid semver fragment: #{token}")
    try:
        base = parse(rest or current_version)
    except NotSemverError as e:
        raise ConstraintSyntaxError(f"invalid semver fragment: #{token}") from e
    return VersionConstraint(token=token, operator=operator, base=base)


def from_fragment(ref: ModuleReference) -> Optional[VersionConstraint]:
    """Return the constraint carried by ``ref``'s URL fragment, if it has one."""
    if ref.fragment is None:
        return None
    return parse_constraint(ref.fragment, ref.version_token)
