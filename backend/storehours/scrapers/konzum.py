"""Konzum locations from the public store-finder API."""
import json

import httpx

from storehours.scrapers.base import BaseScraper
from storehours.services.http import fetch_json
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map


class KonzumScraper(BaseScraper):
    """Scraper for Konzum stores."""

    retail_name = "Konzum"

    LOCATIONS_URL = "https://trgovine.konzum.hr/api/locations/"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        data = await fetch_json(client, self.LOCATIONS_URL)
        nodes = data.get("locations", [])
        self.logger.info(f"Found {len(nodes)} locations in response")

        locations = []
        for node in nodes:
            try:
                locations.append(self.parse_location(node))
            except (KeyError, TypeError, ValueError) as e:
                self.logger.warning(f"Skipping location {node.get('address')}: {e}")
        return locations

    def parse_location(self, node: dict) -> LocationWithWorkHours:
        """
        Map one API location.

        `work_hours` is a JSON encoded list of
        {"name": "Ponedjeljak", "from_hour": "<iso datetime>", "to_hour": "<iso datetime>"}.
        """
        work_hours = node.get("work_hours") or "[]"
        if isinstance(work_hours, str):
            work_hours = json.loads(work_hours)

        schedule = [
            (day.get("name", ""), (day.get("from_hour"), day.get("to_hour")))
            for day in work_hours
        ]

        return LocationWithWorkHours(
            name=node["name"],
            address=node["address"],
            phone_number=node.get("phone_number"),
            description=",".join(node.get("type") or []),
            work_hours=normalize_day_map(schedule),
        )
