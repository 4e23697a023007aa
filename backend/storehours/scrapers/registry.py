"""Registry of retail chain scrapers, keyed by lower-cased chain name."""
from typing import Optional

from storehours.config import Settings
from storehours.scrapers.base import BaseScraper
from storehours.scrapers.eurospin import EurospinScraper
from storehours.scrapers.kaufland import KauflandScraper
from storehours.scrapers.konzum import KonzumScraper
from storehours.scrapers.lidl import LidlScraper
from storehours.scrapers.plodine import PlodineScraper
from storehours.scrapers.spar import SparScraper
from storehours.scrapers.studenac import StudenacScraper
from storehours.scrapers.tommy import TommyScraper

SCRAPERS: dict[str, type[BaseScraper]] = {
    scraper.retail_name.lower(): scraper
    for scraper in (
        KonzumScraper,
        KauflandScraper,
        EurospinScraper,
        PlodineScraper,
        TommyScraper,
        StudenacScraper,
        SparScraper,
        LidlScraper,
    )
}


class UnknownRetailerError(LookupError):
    """No scraper is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown retailer: {name}")
        self.name = name


def get_scraper(name: str, settings: Optional[Settings] = None) -> BaseScraper:
    """Scraper instance for a retailer name (case-insensitive)."""
    scraper_class = SCRAPERS.get(name.lower())
    if scraper_class is None:
        raise UnknownRetailerError(name)
    return scraper_class(settings)


def get_all_scrapers(settings: Optional[Settings] = None) -> list[BaseScraper]:
    """Return instances of all scrapers."""
    return [scraper_class(settings) for scraper_class in SCRAPERS.values()]
