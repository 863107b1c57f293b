"""GitHub-hosted module URLs, versioned by repository tag.

Supports optional authentication via the GITHUB_TOKEN environment variable.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from constants import Constants
from common.http_client import fetch_json
from common.logging_utils import extra_context, is_debug_enabled, redact
from versioning.semver import sort_descending

from .base import RegistryUrl, compile_url

logger = logging.getLogger(__name__)


def _get_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Request headers including authorization if a token is available."""
    headers = {"Accept": "application/vnd.github+json"}
    token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


async def github_tags(owner: str, repo: str, timeout: Optional[float] = None) -> List[str]:
    """Fetch repository tag names, latest first.

    Only the first page is read; ``REPO_API_PER_PAGE`` tags is plenty to find
    the newest release.
    """
    url = (
        f"{Constants.GITHUB_API_BASE}/repos/{owner}/{repo}/tags"
        f"?per_page={Constants.REPO_API_PER_PAGE}"
    )
    headers = _get_headers()
    data = await fetch_json(url, context="github", headers=headers, timeout=timeout)
    tags = [
        item["name"] for item in data
        if isinstance(item, dict) and isinstance(item.get("name"), str)
    ] if isinstance(data, list) else []
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched tags",
            extra=extra_context(
                event="versions",
                component="registry",
                action="all",
                package_manager="github",
                package=f"{owner}/{repo}",
                count=len(tags),
                auth=redact(headers.get("Authorization")),
            ),
        )
    return sort_descending(tags)


class GitHubRepoUrl(RegistryUrl):
    """Module URL addressing a file inside a tagged GitHub repository."""

    async def all(self, timeout: Optional[float] = None) -> List[str]:
        return await github_tags(self.group("owner"), self.group("repo"), timeout=timeout)


class GitHubRaw(GitHubRepoUrl):
    """``https://raw.githubusercontent.com/<owner>/<repo>/<version>/...``"""

    name = "github"
    pattern = compile_url(
        r"https?://raw\.githubusercontent\.com/(?P<owner>[^/\s'\"]+)/(?P<repo>[^/\s'\"]+)/{version}/"
    )


class JsDelivrGitHub(GitHubRepoUrl):
    """``https://cdn.jsdelivr.net/gh/<owner>/<repo>@<version>...``"""

    name = "jsdelivr-gh"
    pattern = compile_url(
        r"https?://cdn\.jsdelivr\.net/gh/(?P<owner>[^/\s'\"]+)/(?P<repo>[^/@\s'\"]+)@{version}"
    )
