"""Studenac locations from the store list and Cloudflare protected store pages."""
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map
from storehours.utils.text import collapse_whitespace


class StudenacScraper(BaseScraper):
    """Scraper for Studenac stores. Store pages are rate limited, so they are fetched one by one."""

    retail_name = "Studenac"

    LISTING_URL = "https://www.studenac.hr/trgovine"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        html = await self.get_page(client, self.LISTING_URL)
        links = self.store_links(html)
        self.logger.info(f"Found {len(links)} store pages")
        return await self.resolve_sequentially(
            client, links, self.resolve_location, delay=self.settings.studenac_request_delay
        )

    def store_links(self, html: str) -> list[str]:
        soup = BeautifulSoup(html, "lxml")
        return [
            link["href"]
            for link in soup.select("#storeList li div.card__cta a")
            if link.get("href")
        ]

    async def resolve_location(self, client: httpx.AsyncClient, link: str) -> Optional[LocationWithWorkHours]:
        html = await self.get_protected_page(client, link)
        if not html:
            return None
        return self.parse_location(html)

    def parse_location(self, html: str) -> LocationWithWorkHours:
        soup = BeautifulSoup(html, "lxml")
        title = soup.select_one("h1.toparea__heading")
        address = soup.select_one("div.marketsingle__meta h2")

        # <li>Ponedjeljak: <strong>07:00 - 21:00</strong></li>
        schedule = []
        for row in soup.select("div.marketsingle__column ul li"):
            hours = row.find("strong")
            schedule.append((
                row.get_text().split(":", 1)[0].strip(),
                hours.get_text(strip=True) if hours else None,
            ))

        return LocationWithWorkHours(
            name=collapse_whitespace(title.get_text()) if title else "",
            address=collapse_whitespace(address.get_text()) if address else "",
            work_hours=normalize_day_map(schedule),
        )
