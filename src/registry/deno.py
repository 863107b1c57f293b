"""deno.land module URLs (third-party ``/x/`` modules and the standard library)."""
from __future__ import annotations

import logging
from typing import List, Optional

from constants import Constants
from common.http_client import fetch_json
from common.logging_utils import extra_context, is_debug_enabled
from versioning.semver import sort_descending

from .base import RegistryUrl, compile_url

logger = logging.getLogger(__name__)


async def deno_versions(name: str, timeout: Optional[float] = None) -> List[str]:
    """Fetch the published versions of a deno.land module, latest first."""
    url = f"{Constants.DENO_CDN}/{name}/meta/versions.json"
    data = await fetch_json(url, context="deno", timeout=timeout)
    versions = data.get("versions", []) if isinstance(data, dict) else []
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched versions",
            extra=extra_context(
                event="versions",
                component="registry",
                action="all",
                package_manager="deno",
                package=name,
                count=len(versions),
            ),
        )
    return sort_descending(str(v) for v in versions)


class DenoLand(RegistryUrl):
    """``https://deno.land/x/<name>@<version>/...``"""

    name = "deno.land"
    pattern = compile_url(r"https?://deno\.land/x/(?P<name>[^/@\s'\"]+)@{version}")

    async def all(self, timeout: Optional[float] = None) -> List[str]:
        return await deno_versions(self.group("name"), timeout=timeout)


class DenoStd(RegistryUrl):
    """``https://deno.land/std@<version>/...``"""

    name = "deno.land/std"
    pattern = compile_url(r"https?://deno\.land/std@{version}")

    async def all(self, timeout: Optional[float] = None) -> List[str]:
        return await deno_versions("std", timeout=timeout)
