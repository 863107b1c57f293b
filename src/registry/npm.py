"""
  npm-backed CDN module URLs. Every CDN here serves packages published to the
  npm registry, so versions are listed from the registry packument.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from constants import Constants
from common.http_client import fetch_json
from common.logging_utils import extra_context, is_debug_enabled
from versioning.semver import sort_descending

from .base import RegistryUrl, compile_url

logger = logging.getLogger(__name__)

PACKUMENT_HEADERS = {
    "Accept": "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8, */*"
}


async def npm_versions(package: str, timeout: Optional[float] = None) -> List[str]:
    """Fetch the published versions of an npm package, latest first.

    Args:
        package: Package name, optionally scoped (``@scope/name``).
        timeout: Request timeout in seconds; None uses the default.
    """
    url = f"{Constants.REGISTRY_URL_NPM}{package}"
    data = await fetch_json(url, context="npm", headers=PACKUMENT_HEADERS, timeout=timeout)
    versions = list(data.get("versions", {}).keys()) if isinstance(data, dict) else []
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched versions",
            extra=extra_context(
                event="versions",
                component="registry",
                action="all",
                package_manager="npm",
                package=package,
                count=len(versions),
            ),
        )
    return sort_descending(versions)


class NpmCdnUrl(RegistryUrl):
    """Module URL of a CDN mirroring the npm registry."""

    async def all(self, timeout: Optional[float] = None) -> List[str]:
        return await npm_versions(self.group("name"), timeout=timeout)


class Unpkg(NpmCdnUrl):
    """``https://unpkg.com/<pkg>@<version>/...``"""

    name = "unpkg"
    pattern = compile_url(r"https?://unpkg\.com/{name}@{version}")


class EsmSh(NpmCdnUrl):
    """``https://esm.sh/[vNN/]<pkg>@<version>...``"""

    name = "esm.sh"
    pattern = compile_url(r"https?://esm\.sh/(?:v[0-9]+/)?{name}@{version}")


class Skypack(NpmCdnUrl):
    """``https://cdn.skypack.dev/<pkg>@<version>...``"""

    name = "skypack"
    pattern = compile_url(r"https?://cdn\.skypack\.dev/{name}@{version}")


class JsDelivrNpm(NpmCdnUrl):
    """``https://cdn.jsdelivr.net/npm/<pkg>@<version>...``"""

    name = "jsdelivr"
    pattern = compile_url(r"https?://cdn\.jsdelivr\.net/npm/{name}@{version}")
