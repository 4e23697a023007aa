"""Tests for scrape -> persist -> invalidate runs."""

import asyncio
from unittest.mock import AsyncMock

import httpx

from storehours.config import Settings
from storehours.models import Location
from storehours.scrapers.base import BaseScraper
from storehours.services.cache import CacheService
from storehours.services.pipeline import clear_cache, run_all, run_retailer
from storehours.services.schedule_normalizer import LocationWithWorkHours, normalize_day_map


class StaticScraper(BaseScraper):
    """Returns a fixed list of locations."""

    def __init__(self, retail_name, locations, settings=None):
        self.retail_name = retail_name
        self.locations = locations
        super().__init__(settings)

    async def fetch(self, client):
        return self.locations


class FailingScraper(BaseScraper):
    retail_name = "Lidl"

    async def fetch(self, client):
        raise httpx.ConnectError("sitemap unreachable")


def location(name, address):
    return LocationWithWorkHours(
        name=name,
        address=address,
        work_hours=normalize_day_map({"Pon-Sub": "07-21", "Ned": "08-13"}),
    )


def mock_cache():
    return AsyncMock(spec=CacheService)


SETTINGS = Settings(persist_batch_size=10)


def test_run_retailer_saves_and_invalidates(session_factory):
    cache = mock_cache()
    scraper = StaticScraper("Konzum", [location("Konzum Ilica", "Ilica 1, 10000 Zagreb")], SETTINGS)

    result = asyncio.run(run_retailer(scraper, session_factory, cache, settings=SETTINGS))

    assert result["status"] == "success"
    assert result["saved"] == 1
    assert "timestamp" in result
    cache.invalidate_retailer.assert_awaited_once_with("Konzum")

    with session_factory() as db:
        saved = db.query(Location).one()
        assert saved.open_this_sunday is True


def test_run_retailer_without_data(session_factory):
    """Test an empty scrape writes nothing and keeps the cache."""
    cache = mock_cache()
    scraper = StaticScraper("Tommy", [], SETTINGS)

    result = asyncio.run(run_retailer(scraper, session_factory, cache, settings=SETTINGS))

    assert result["status"] == "no_data"
    cache.invalidate_retailer.assert_not_awaited()


def test_run_retailer_failure_is_reported(session_factory):
    """Test a fetch failure gives an error summary instead of raising."""
    cache = mock_cache()

    result = asyncio.run(run_retailer(FailingScraper(SETTINGS), session_factory, cache, settings=SETTINGS))

    assert result["status"] == "error"
    assert "sitemap unreachable" in result["error"]
    cache.invalidate_retailer.assert_not_awaited()
    with session_factory() as db:
        assert db.query(Location).count() == 0


def test_run_all_continues_after_failure(session_factory):
    """Test one failing retailer does not stop the others, then the combined key is dropped."""
    cache = mock_cache()
    scrapers = [
        FailingScraper(SETTINGS),
        StaticScraper("Spar", [location("Spar Split", "Put Brodarice 6, 21000 Split")], SETTINGS),
    ]

    results = asyncio.run(run_all(scrapers, session_factory, cache, SETTINGS))

    assert [result["status"] for result in results] == ["error", "success"]
    cache.invalidate_retailer.assert_awaited_once_with("Spar")
    cache.delete.assert_awaited_once_with("retail:all")


def test_clear_cache():
    cache = mock_cache()
    scrapers = [StaticScraper("Konzum", [], SETTINGS), StaticScraper("Spar", [], SETTINGS)]

    asyncio.run(clear_cache(scrapers, cache))

    cache.invalidate_all.assert_awaited_once_with(["Konzum", "Spar"])
