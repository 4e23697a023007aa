"""
Scrape -> normalize -> persist -> invalidate runs.

Retailers are processed one after another. A retailer that fails before
producing data is logged and reported with status "error"; nothing was
written for it, and the remaining retailers still run.
"""
import logging
from datetime import datetime
from typing import Optional

import httpx
from sqlalchemy.orm import sessionmaker

from storehours.config import Settings, get_settings
from storehours.scrapers.base import BaseScraper
from storehours.services.cache import CacheService, KEY_ALL_RETAILERS
from storehours.services.http import make_client
from storehours.services.persistence import save_locations_in_batches
from storehours.services.schedule_normalizer import LocationWithWorkHours

logger = logging.getLogger(__name__)


async def _fetch_locations(
    scraper: BaseScraper,
    client: Optional[httpx.AsyncClient],
    settings: Settings,
) -> list[LocationWithWorkHours]:
    if client is not None:
        return await scraper.fetch(client)
    async with make_client(settings) as own_client:
        return await scraper.fetch(own_client)


async def run_retailer(
    scraper: BaseScraper,
    session_factory: sessionmaker,
    cache: CacheService,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Scrape one retail chain, save its locations and invalidate its cache key.

    Returns:
        Run summary with a "status" of success, partial, no_data or error
    """
    settings = settings or get_settings()
    start_time = datetime.now()
    logger.info(f"Starting {scraper.retail_name} scrape")

    try:
        locations = await _fetch_locations(scraper, client, settings)
        logger.info(f"Fetched {len(locations)} locations from {scraper.retail_name}")

        if locations:
            result = save_locations_in_batches(
                session_factory,
                locations,
                scraper.retail_name,
                settings.persist_batch_size,
            )
        else:
            result = {
                "retailer": scraper.retail_name,
                "locations": 0,
                "saved": 0,
                "failed_batches": 0,
                "status": "no_data",
            }

        if result["saved"]:
            await cache.invalidate_retailer(scraper.retail_name)

    except Exception as e:
        logger.error(f"Error scraping {scraper.retail_name}: {e}", exc_info=True)
        result = {
            "retailer": scraper.retail_name,
            "locations": 0,
            "saved": 0,
            "failed_batches": 0,
            "status": "error",
            "error": str(e),
        }

    result["timestamp"] = start_time.isoformat()
    result["duration_seconds"] = (datetime.now() - start_time).total_seconds()
    return result


async def run_all(
    scrapers: list[BaseScraper],
    session_factory: sessionmaker,
    cache: CacheService,
    settings: Optional[Settings] = None,
) -> list[dict]:
    """Run every scraper in turn, then invalidate the combined listing."""
    settings = settings or get_settings()
    results = []

    async with make_client(settings) as client:
        for scraper in scrapers:
            results.append(await run_retailer(scraper, session_factory, cache, client, settings))

    await cache.delete(KEY_ALL_RETAILERS)

    for result in results:
        if result["status"] in ("success", "partial"):
            logger.info(f"{result['retailer']}: {result['saved']} locations saved")
        else:
            logger.warning(f"{result['retailer']}: {result['status']} {result.get('error', '')}".rstrip())
    return results


async def clear_cache(scrapers: list[BaseScraper], cache: CacheService):
    """Invalidate every retailer's cache key and the combined key."""
    await cache.invalidate_all([scraper.retail_name for scraper in scrapers])
