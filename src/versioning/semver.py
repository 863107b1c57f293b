"""Semantic version model built on ``semantic_version``.

Strings that do not follow ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` are
treated as opaque identifiers (branch or tag names) by callers.
"""

from typing import Iterable, List, Optional

import semantic_version

from .errors import NotSemverError

Version = semantic_version.Version


def parse(text: str) -> Version:
    """Parse ``text`` strictly as a semantic version.

    Raises:
        NotSemverError: when ``text`` does not follow the semver grammar.
    """
    try:
        return semantic_version.Version(text)
    except (TypeError, ValueError) as e:
        raise NotSemverError(f"not a semantic version: {text!r}") from e


def semver_or_none(text: str) -> Optional[Version]:
    """Return the parsed version, or None for non-semver text."""
    try:
        return parse(text)
    except NotSemverError:
        return None


def compare(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 by semver precedence (build metadata ignored)."""
    return (a > b) - (a < b)


def is_prerelease(text: str) -> bool:
    """Report whether ``text`` is a semver carrying a prerelease component."""
    parsed = semver_or_none(text)
    return parsed is not None and bool(parsed.prerelease)


def sort_descending(versions: Iterable[str]) -> List[str]:
    """Order version strings highest first.

    Non-semver entries keep their relative order and follow all semver ones.
    """
    parsed = []
    opaque = []
    for raw in versions:
        ver = semver_or_none(raw)
        if ver is None:
            opaque.append(raw)
        else:
            parsed.append((ver, raw))
    parsed.sort(key=lambda item: item[0], reverse=True)
    return [raw for _, raw in parsed] + opaque
