"""Lidl locations from the Cloudflare protected store finder."""
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_sequential
from storehours.utils.text import collapse_whitespace


class LidlScraper(BaseScraper):
    """Scraper for Lidl stores."""

    retail_name = "Lidl"

    SITEMAP_URL = "https://www.lidl.hr/s/hr-HR/trazilica-trgovina/sitemap.xml"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        sitemap = await self.get_protected_page(client, self.SITEMAP_URL)
        if not sitemap:
            raise RuntimeError("Failed to load Lidl sitemap")

        links = self.sitemap_links(sitemap)
        self.logger.info(f"Found {len(links)} store pages")
        return await self.resolve_sequentially(client, links, self.resolve_location)

    async def resolve_location(self, client: httpx.AsyncClient, link: str) -> Optional[LocationWithWorkHours]:
        html = await self.get_protected_page(client, link)
        if not html:
            return None
        return self.parse_location(html)

    def parse_location(self, html: str) -> LocationWithWorkHours:
        soup = BeautifulSoup(html, "lxml")
        title = soup.select_one("h1.lirt-o-store-detail-card__headline")

        address_lines = [
            collapse_whitespace(line.get_text())
            for line in soup.select(".lirt-o-store-detail-card__address")
        ]

        # <p>po 07:00-21:00</p>, starting on the current day
        rows = []
        for row in soup.select("div.lirt-o-store-detail-card__openingHours-data p"):
            parts = row.get_text().split(None, 1)
            if parts:
                rows.append((parts[0], parts[1].strip() if len(parts) > 1 else None))

        return LocationWithWorkHours(
            name=collapse_whitespace(title.get_text()) if title else "",
            address=", ".join(address_lines[:2]),
            work_hours=normalize_sequential(rows),
        )
