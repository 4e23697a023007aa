"""Tommy locations from the webshop channels API."""
import httpx

from storehours.scrapers.base import BaseScraper
from storehours.services.http import fetch_json
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_three_schedules


class TommyScraper(BaseScraper):
    """Scraper for Tommy stores."""

    retail_name = "Tommy"

    CHANNELS_URL = "https://spiza.tommy.hr/api/v2/shop/channels?itemsPerPage=500"

    async def fetch(self, client: httpx.AsyncClient) -> list[LocationWithWorkHours]:
        data = await fetch_json(client, self.CHANNELS_URL)
        nodes = data.get("hydra:member", [])
        self.logger.info(f"Found {len(nodes)} channels in response")

        locations = []
        for node in nodes:
            try:
                locations.append(self.parse_location(node))
            except (KeyError, TypeError) as e:
                self.logger.warning(f"Skipping channel {node.get('name')}: {e}")
        return locations

    def parse_location(self, node: dict) -> LocationWithWorkHours:
        hours = node.get("businessHours") or {}
        return LocationWithWorkHours(
            name=node["name"],
            address=self.format_address(node["address"]),
            phone_number=node.get("phoneNumber"),
            description=node.get("storeType"),
            work_hours=normalize_three_schedules(
                hours.get("workweekSchedule"),
                hours.get("saturdaySchedule"),
                hours.get("sundaySchedule"),
            ),
        )

    @staticmethod
    def format_address(address: dict) -> str:
        """Format as "Street 1, 21000 Split" so the city is the last segment."""
        street = (address.get("street") or "").strip()
        city = " ".join(
            part for part in ((address.get("postcode") or "").strip(), (address.get("city") or "").strip())
            if part
        )
        return f"{street}, {city}"
