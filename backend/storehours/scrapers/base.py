"""Base class for retail chain location scrapers."""
import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.config import Settings, get_settings
from storehours.services.http import bypass_flare, fetch_text, gather_in_windows
from storehours.services.schedule_normalizer import LocationWithWorkHours

logger = logging.getLogger(__name__)

LocationResolver = Callable[[httpx.AsyncClient, str], Awaitable[Optional[LocationWithWorkHours]]]


class BaseScraper(ABC):
    """Fetches every location of one retail chain with a normalized week of work hours."""

    retail_name: str = ""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(f"{__name__}.{self.slug}")

    @property
    def slug(self) -> str:
        return self.retail_name.lower()

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        """
        Fetch and normalize all locations of the chain.

        Failures of individual locations are logged and left out; failures
        that prevent any data from being fetched are raised.
        """
        pass

    async def get_page(self, client: httpx.AsyncClient, url: str) -> str:
        return await fetch_text(client, url)

    async def get_protected_page(self, client: httpx.AsyncClient, url: str) -> Optional[str]:
        """Page body fetched through the Cloudflare bypass service."""
        return await bypass_flare(client, url, self.settings)

    def sitemap_links(self, xml: str) -> list[str]:
        """All <loc> URLs of a sitemap."""
        soup = BeautifulSoup(xml, "xml")
        return [loc.get_text(strip=True) for loc in soup.find_all("loc")]

    async def resolve_concurrently(
        self,
        client: httpx.AsyncClient,
        links: Iterable[str],
        resolver: LocationResolver,
    ) -> list[LocationWithWorkHours]:
        """Resolve detail pages in windows of `scrape_concurrency`."""
        return await gather_in_windows(
            (resolver(client, link) for link in links),
            self.settings.scrape_concurrency,
        )

    async def resolve_sequentially(
        self,
        client: httpx.AsyncClient,
        links: Iterable[str],
        resolver: LocationResolver,
        delay: float = 0,
    ) -> list[LocationWithWorkHours]:
        """Resolve detail pages one at a time, optionally pausing between them."""
        locations = []
        for i, link in enumerate(links):
            if i and delay:
                await asyncio.sleep(delay)
            try:
                location = await resolver(client, link)
            except Exception as e:
                self.logger.warning(f"Skipping location {link}: {e}")
                continue
            if location:
                locations.append(location)
        return locations
