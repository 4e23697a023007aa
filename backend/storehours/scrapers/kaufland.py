"""Kaufland locations from the sitemap and store detail pages."""
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map
from storehours.utils.text import collapse_whitespace


class KauflandScraper(BaseScraper):
    """Scraper for Kaufland stores."""

    retail_name = "Kaufland"

    SITEMAP_URL = "https://www.kaufland.hr/.sitemap.xml"

    # Outdated store pages still listed in the sitemap
    INVALID_LOCATION_URLS = {
        "https://www.kaufland.hr/usluge/poslovnica/varazdin-banfica-2330.html",
        "https://www.kaufland.hr/usluge/poslovnica/osijek-novi-grad-3130.html",
        "https://www.kaufland.hr/usluge/poslovnica/zagreb-pescenica-7130.html",
        "https://www.kaufland.hr/usluge/poslovnica/zadar-visnjik-2030.html",
        "https://www.kaufland.hr/usluge/poslovnica/rijeka-zamet-1730.html",
        "https://www.kaufland.hr/usluge/poslovnica/zagreb-sesvete-luka-3430.html",
        "https://www.kaufland.hr/usluge/poslovnica/split-ravne-njive-1630.html",
    }
    # Current store pages missing from the sitemap
    ADDITIONAL_LOCATION_URLS = [
        "https://www.kaufland.hr/usluge/poslovnica/varazdin-2330.html",
        "https://www.kaufland.hr/usluge/poslovnica/osijek-3130.html",
        "https://www.kaufland.hr/usluge/poslovnica/zagreb-pescenica-zitnjak-7130.html",
        "https://www.kaufland.hr/usluge/poslovnica/rijeka-1730.html",
        "https://www.kaufland.hr/usluge/poslovnica/split-1630.html",
    ]

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        sitemap = await self.get_page(client, self.SITEMAP_URL)
        links = self.location_links(self.sitemap_links(sitemap))
        self.logger.info(f"Found {len(links)} store pages")
        return await self.resolve_concurrently(client, links, self.resolve_location)

    def location_links(self, links: list[str]) -> list[str]:
        stores = [
            link for link in links
            if "poslovnica" in link and link not in self.INVALID_LOCATION_URLS
        ]
        return stores + [link for link in self.ADDITIONAL_LOCATION_URLS if link not in stores]

    async def resolve_location(self, client: httpx.AsyncClient, link: str) -> Optional[LocationWithWorkHours]:
        return self.parse_location(await self.get_page(client, link))

    def parse_location(self, html: str) -> LocationWithWorkHours:
        soup = BeautifulSoup(html, "lxml")

        def text(selector: str) -> str:
            element = soup.select_one(selector)
            return collapse_whitespace(element.get_text()) if element else ""

        # <dt class="m-store-info__day">Pon - Pet</dt><dd class="m-store-info__hours">07:00 - 21:00 h</dd>
        schedule = []
        for day in soup.select("dl.m-store-info__shophours-data dt.m-store-info__day"):
            hours = day.find_next_sibling("dd", class_="m-store-info__hours")
            schedule.append((
                day.get_text(strip=True),
                hours.get_text(strip=True).replace("h", "").strip() if hours else None,
            ))

        return LocationWithWorkHours(
            name=text("div.m-store-info__name"),
            address=f"{text('div.m-store-info__street')}, {text('div.m-store-info__city')}",
            phone_number=text("div.m-store-info__telephone") or None,
            work_hours=normalize_day_map(schedule),
        )
