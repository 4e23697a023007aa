"""Eurospin locations from the store sitemap and store pages."""
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map
from storehours.utils.text import capitalize, clean_html_tags, collapse_whitespace

_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)


class EurospinScraper(BaseScraper):
    """Scraper for Eurospin stores."""

    retail_name = "Eurospin"

    SITEMAP_URL = "https://www.eurospin.hr/store-sitemap.xml"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        sitemap = await self.get_page(client, self.SITEMAP_URL)
        links = self.sitemap_links(sitemap)
        self.logger.info(f"Found {len(links)} store pages")
        return await self.resolve_concurrently(client, links, self.resolve_location)

    async def resolve_location(self, client: httpx.AsyncClient, link: str) -> Optional[LocationWithWorkHours]:
        return self.parse_location(await self.get_page(client, link))

    def parse_location(self, html: str) -> LocationWithWorkHours:
        """
        The store block is loose markup:

            <h1>Name</h1> Street 1, 10000 Zagreb<br> ...
            <h2>Radno vrijeme</h2> Ponedjeljak: 08:00-21:00<br> ...
            <div class="row sn_store_brochure_lists">
        """
        soup = BeautifulSoup(html, "lxml")

        title = soup.select_one("section.sn_store_brochure h1")
        container = soup.select_one("div.col-xs-12.col-sm-6")
        if container is None:
            raise ValueError("Store container element not found")
        markup = container.decode_contents()

        after_title = markup.split("</h1>", 1)[1] if "</h1>" in markup else ""
        address = clean_html_tags(_LINE_BREAK.split(after_title)[0]) if after_title else ""

        hours_markup = markup.split("</h2>", 1)[1] if "</h2>" in markup else ""
        hours_markup = hours_markup.split('<div class="row sn_store_brochure_lists">', 1)[0]

        schedule = []
        for line in _LINE_BREAK.split(hours_markup):
            day, separator, hours = line.partition(":")
            if not separator:
                continue
            schedule.append((capitalize(clean_html_tags(day)), clean_html_tags(hours)))

        return LocationWithWorkHours(
            name=collapse_whitespace(title.get_text()) if title else "",
            address=address,
            work_hours=normalize_day_map(schedule),
        )
