"""Shared HTTP client utilities — reusable httpx client."""

import logging
from typing import Any

import httpx

from feedback_form.config import get_settings

logger = logging.getLogger(__name__)

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=get_settings().http_timeout)
    return _client


async def close_shared_client() -> None:
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def appboy_headers() -> dict[str, str]:
    """Build standard Appboy SDK request headers.

    Includes the X-Appboy-Api-Key header only when a key is configured.
    """
    settings = get_settings()
    headers: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if settings.appboy_api_key:
        headers["X-Appboy-Api-Key"] = settings.appboy_api_key
    return headers


async def appboy_post(
    path: str,
    payload: dict[str, Any],
    *,
    context: str = "",
) -> dict[str, Any] | None:
    """POST a JSON payload to the Appboy endpoint with standard error handling.

    Returns the parsed JSON body ({} for an empty body) on a 2xx response.
    Returns None on any error so fire-and-forget callers never see a raise.
    """
    settings = get_settings()
    url = f"{settings.appboy_endpoint.rstrip('/')}{path}"
    client = get_shared_client()
    try:
        resp = await client.post(url, headers=appboy_headers(), json=payload)
        if not resp.is_success:
            logger.warning(
                "Appboy API %d for %s%s",
                resp.status_code,
                url,
                f" ({context})" if context else "",
            )
            return None
        return resp.json() if resp.content else {}
    except (httpx.HTTPError, ValueError):
        logger.exception(
            "Appboy API error for %s%s", url, f" ({context})" if context else ""
        )
        return None
