"""Spar locations from the Cloudflare protected location sitemap."""
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_sequential
from storehours.utils.text import collapse_whitespace


class SparScraper(BaseScraper):
    """Scraper for Spar and Interspar stores."""

    retail_name = "Spar"

    SITEMAP_URL = "https://www.spar.hr/index.sitemap.lokacije-sitemap.xml"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        sitemap = await self.get_protected_page(client, self.SITEMAP_URL)
        if not sitemap:
            raise RuntimeError("Failed to load Spar sitemap")

        # First entry is the store finder overview page
        links = self.sitemap_links(sitemap)[1:]
        self.logger.info(f"Found {len(links)} store pages")
        return await self.resolve_sequentially(client, links, self.resolve_location)

    async def resolve_location(self, client: httpx.AsyncClient, link: str) -> Optional[LocationWithWorkHours]:
        html = await self.get_protected_page(client, link)
        if not html:
            return None
        return self.parse_location(html)

    def parse_location(self, html: str) -> LocationWithWorkHours:
        soup = BeautifulSoup(html, "lxml")

        def text(selector: str) -> str:
            element = soup.select_one(selector)
            return collapse_whitespace(element.get_text()) if element else ""

        # The list starts today and runs for a week; labels like "Danas" are not weekdays
        rows = []
        for row in soup.select("ul.store-detail__opening-list > li"):
            day = row.select_one(".store-detail__opening-desc > span")
            hours = row.select_one(".store-detail__opening-value > span")
            rows.append((
                day.get_text(strip=True) if day else "",
                hours.get_text(strip=True) if hours else None,
            ))

        return LocationWithWorkHours(
            name=text("h1.store-detail__title"),
            address=text("div.store-detail__address"),
            phone_number=text("span.store-detail__info-value > a") or None,
            work_hours=normalize_sequential(rows),
        )
