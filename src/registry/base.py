"""Base type for provider-specific module URLs.

A registry variant recognizes one URL shape through ``pattern``, which must
capture the version component in a group named ``version``. Instances are
immutable: ``at()`` builds a new instance instead of editing ``url``.
"""
from __future__ import annotations

import re
from typing import ClassVar, List, Optional, Pattern, Sequence, Type


class RegistryUrl:
    """A module URL hosted on a specific provider."""

    name: ClassVar[str] = ""
    pattern: ClassVar[Pattern[str]]

    def __init__(self, url: str):
        match = self.pattern.match(url)
        if match is None:
            raise ValueError(f"{url} is not a {self.name} url")
        self._url = url
        self._match = match

    @classmethod
    def try_match(cls, url: str) -> Optional["RegistryUrl"]:
        """Return an instance for ``url`` when it has this provider's shape."""
        if cls.pattern.match(url) is None:
            return None
        return cls(url)

    @property
    def url(self) -> str:
        return self._url

    def group(self, name: str) -> str:
        """Named component of the matched URL (e.g. package name)."""
        return self._match.group(name)

    def version(self) -> str:
        """Version token exactly as written in the URL, modifier included."""
        return self._match.group("version")

    def at(self, version: str) -> "RegistryUrl":
        """Same URL pinned to ``version``; path suffix, query and fragment kept."""
        start, end = self._match.span("version")
        return type(self)(self._url[:start] + version + self._url[end:])

    async def all(self, timeout: Optional[float] = None) -> List[str]:
        """Every published version, latest first.

        Args:
            timeout: Request timeout in seconds; None uses
                ``Constants.REQUEST_TIMEOUT``.

        Raises:
            RegistryFetchError: when the provider cannot be queried.
        """
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._url == other._url  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._url))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._url!r})"


def lookup(url: str, registries: Sequence[Type[RegistryUrl]]) -> Optional[RegistryUrl]:
    """Return the first registry in priority order that recognizes ``url``."""
    for registry in registries:
        module = registry.try_match(url)
        if module is not None:
            return module
    return None


# Version component: anything up to the next path, query or fragment delimiter.
VERSION = r"(?P<version>[^/?#\s'\"]+)"
# npm package name, optionally scoped.
NPM_NAME = r"(?P<name>(?:@[^/@\s'\"]+/)?[^/@?#\s'\"]+)"


def compile_url(template: str) -> Pattern[str]:
    """Compile a URL pattern from ``template`` with ``{version}``/``{name}`` slots."""
    return re.compile(template.format(version=VERSION, name=NPM_NAME))
