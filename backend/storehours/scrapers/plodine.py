"""Plodine locations from the supermarket listing page."""
import httpx
from bs4 import BeautifulSoup

from storehours.scrapers.base import BaseScraper
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map
from storehours.utils.text import collapse_whitespace


class PlodineScraper(BaseScraper):
    """Scraper for Plodine supermarkets. Every store is on a single page."""

    retail_name = "Plodine"

    LISTING_URL = "https://www.plodine.hr/supermarketi"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        html = await self.get_page(client, self.LISTING_URL)
        return self.parse_listing(html)

    def parse_listing(self, html: str) -> list[LocationWithWorkHours]:
        soup = BeautifulSoup(html, "lxml")
        markets = soup.select("li.market")
        self.logger.info(f"Found {len(markets)} markets on listing page")

        locations = []
        for market in markets:
            try:
                locations.append(self.parse_market(market))
            except (AttributeError, ValueError) as e:
                self.logger.warning(f"Skipping market: {e}")
        return locations

    def parse_market(self, market) -> LocationWithWorkHours:
        title = market.select_one("h2.market__title")
        address = ",".join(
            collapse_whitespace(p.get_text()) for p in market.select(".market__location p")
        )

        # First row is the "Radno vrijeme" heading; the rest look like
        # "Pon-Pet: 07:00-21:00", "Subotom: 07:00-20:00", "Nedjelja: Zatvoreno"
        schedule = []
        for row in market.select(".market__workhours div")[1:]:
            line = row.get_text()
            days, _, hours = line.partition(":")
            schedule.append((days.strip(), hours.strip()))

        return LocationWithWorkHours(
            name=collapse_whitespace(title.get_text()) if title else "",
            address=address,
            work_hours=normalize_day_map(schedule),
        )
