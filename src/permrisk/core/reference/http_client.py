"""Async HTTP fetching for remotely hosted reference documents.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling, so that catalog and
taxonomy downloads behave consistently and are easy to mock in tests.

Unlike a best-effort scanner, a missing reference document must never be
silently replaced by an empty one: every failure is logged and then raised
as ``ReferenceDataError``.
"""

from __future__ import annotations

import logging

import httpx

from permrisk.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

# Timeout for all reference-data HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "permrisk-reference-loader/0.1"


def is_remote(source: str) -> bool:
    """Return True if ``source`` is an http(s) URL rather than a local path."""
    return source.lower().startswith(("http://", "https://"))


async def fetch_text(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Fetch a URL and return the response body as text.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).

    Returns:
        Response body text.

    Raises:
        ReferenceDataError: On HTTP errors, timeouts, or connection failures.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise ReferenceDataError(f"Timed out fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise ReferenceDataError(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise ReferenceDataError(f"Could not fetch {url}: {exc}") from exc
