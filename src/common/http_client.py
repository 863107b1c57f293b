"""Shared HTTP helpers used by the registry clients.

Encapsulates request/timeout error handling so registry modules avoid
duplicating try/except blocks. Transport failures are raised as
``RegistryFetchError``; they are fatal for the run and never retried.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from versioning.errors import RegistryFetchError

logger = logging.getLogger(__name__)


async def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform a GET request and parse the JSON body with DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm", "deno").
        headers: Optional request headers.
        timeout: Total request timeout in seconds; defaults to
            ``Constants.REQUEST_TIMEOUT``.

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)

    Raises:
        RegistryFetchError: on timeout or connection failure.
    """
    safe_target = safe_url(url)
    seconds = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    client_timeout = aiohttp.ClientTimeout(total=seconds)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(url, headers=headers) as res:
                    status = res.status
                    res_headers = dict(res.headers)
                    try:
                        data = await res.json(content_type=None)
                    except ValueError:
                        data = None
        except asyncio.TimeoutError as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                seconds,
            )
            raise RegistryFetchError(
                f"{context} request timed out after {seconds} seconds: {safe_target}"
            ) from exc
        except aiohttp.ClientError as exc:  # includes connection errors
            logger.error("%s connection error: %s", context, exc)
            raise RegistryFetchError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success" if status == 200 else "http_error",
                    status_code=status,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
    return status, res_headers, data


async def fetch_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """Return the JSON body of a successful GET.

    Raises:
        RegistryFetchError: on transport failure, a non-200 status, or a body
            that is not JSON.
    """
    status, _, data = await get_json(url, context=context, headers=headers, timeout=timeout)
    if status != 200:
        raise RegistryFetchError(f"{context} returned HTTP {status} for {safe_url(url)}")
    if data is None:
        raise RegistryFetchError(f"{context} returned an invalid JSON body for {safe_url(url)}")
    return data
