"""
HTTP helpers shared by the retailer scrapers.

- one AsyncClient per run with browser-like headers
- bounded concurrency: detail pages are fetched in fixed windows and a
  failing page is dropped instead of failing the run
- a FlareSolverr-compatible client for sites behind Cloudflare
"""
import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import Any, Optional, TypeVar

import httpx

from storehours.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Browser-like headers to avoid bot blocks
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,application/json;q=0.8,*/*;q=0.7",
    "Accept-Language": "hr-HR,hr;q=0.9,en;q=0.8",
}


def make_client(settings: Optional[Settings] = None) -> httpx.AsyncClient:
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        headers=BROWSER_HEADERS,
    )


async def fetch_text(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url)
    response.raise_for_status()
    return response.text


async def fetch_json(client: httpx.AsyncClient, url: str) -> Any:
    response = await client.get(url)
    response.raise_for_status()
    return response.json()


async def gather_in_windows(
    awaitables: Iterable[Awaitable[Optional[T]]],
    window_size: int = 10,
) -> list[T]:
    """
    Await coroutines at most `window_size` at a time.

    Each window is awaited completely before the next one starts. Results that
    raised or returned None are left out of the returned list.

    Args:
        awaitables: Coroutines that have not been started yet
        window_size: Maximum number in flight at once

    Returns:
        Successful results in input order
    """
    pending = list(awaitables)
    results: list[T] = []
    failed = 0

    for start in range(0, len(pending), window_size):
        window = pending[start:start + window_size]
        outcomes = await asyncio.gather(*window, return_exceptions=True)

        for outcome in outcomes:
            if isinstance(outcome, Exception):
                failed += 1
                logger.warning(f"Dropping failed fetch: {outcome!r}")
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            if outcome is not None:
                results.append(outcome)

    if failed:
        logger.info(f"Fetched {len(results)} of {len(pending)} items ({failed} failed)")
    return results


async def bypass_flare(
    client: httpx.AsyncClient,
    url: str,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """
    Fetch a Cloudflare protected page through a FlareSolverr-compatible service.

    When the service solves the challenge without returning the page, the page
    is requested again with the solution's cookies and user agent.

    Returns:
        Page body, or None if the service gave no usable solution
    """
    settings = settings or get_settings()

    response = await client.post(
        settings.flare_bypass_url,
        json={
            "cmd": "request.get",
            "url": url,
            "maxTimeout": settings.flare_max_timeout_ms,
        },
        headers={"Content-Type": "application/json"},
        timeout=settings.flare_max_timeout_ms / 1000 + settings.http_timeout,
    )
    response.raise_for_status()

    solution = response.json().get("solution")
    if not solution:
        logger.error(f"No valid bypass solution for {url}")
        return None

    if solution.get("response") is not None:
        return solution["response"]

    logger.info(f"Challenge solved for {url}, making follow-up request")
    cookies = "; ".join(
        f"{cookie['name']}={cookie['value']}" for cookie in solution.get("cookies", [])
    )
    follow_up = await client.get(
        solution.get("url") or url,
        headers={
            "Cookie": cookies,
            "User-Agent": solution.get("userAgent") or BROWSER_HEADERS["User-Agent"],
        },
    )
    follow_up.raise_for_status()
    return follow_up.text
