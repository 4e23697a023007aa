"""Scrape trigger endpoints. Runs proceed in the background after the response."""
import logging
import signal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import sessionmaker

from storehours.config import Settings, get_settings
from storehours.database import get_session_factory
from storehours.schemas import CacheCleared, Retailer, ScrapeTriggered
from storehours.scrapers.registry import UnknownRetailerError, get_all_scrapers, get_scraper
from storehours.services.cache import CacheService, KEY_ALL_RETAILERS, cache, retailer_key
from storehours.services.pipeline import clear_cache, run_all, run_retailer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scrape"])


def get_cache() -> CacheService:
    return cache


def exit_if_one_shot(settings: Settings):
    """Stop the server after a run when deployed as a one-shot process."""
    if settings.exit_after_run:
        logger.info("Run finished, exiting")
        signal.raise_signal(signal.SIGTERM)


async def _scrape_all(session_factory: sessionmaker, cache: CacheService, settings: Settings):
    try:
        await run_all(get_all_scrapers(settings), session_factory, cache, settings)
    finally:
        exit_if_one_shot(settings)


async def _scrape_one(retailer: str, session_factory: sessionmaker, cache: CacheService, settings: Settings):
    try:
        await run_retailer(get_scraper(retailer, settings), session_factory, cache, settings=settings)
    finally:
        exit_if_one_shot(settings)


@router.get("/retailers", response_model=list[Retailer])
def list_retailers(settings: Settings = Depends(get_settings)):
    """List retail chains with a scraper."""
    return [
        Retailer(slug=scraper.slug, name=scraper.retail_name)
        for scraper in get_all_scrapers(settings)
    ]


@router.get("/scrape", response_model=ScrapeTriggered)
def trigger_all(
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
    cache: CacheService = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """Scrape every retail chain."""
    background_tasks.add_task(_scrape_all, session_factory, cache, settings)
    return ScrapeTriggered(
        message="Scraping triggered",
        retailers=[scraper.retail_name for scraper in get_all_scrapers(settings)],
    )


@router.get("/scrape/{retailer}", response_model=ScrapeTriggered)
def trigger_retailer(
    retailer: str,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
    cache: CacheService = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """Scrape a single retail chain (konzum, kaufland, lidl, ...)."""
    try:
        scraper = get_scraper(retailer, settings)
    except UnknownRetailerError as e:
        raise HTTPException(status_code=404, detail=str(e))

    background_tasks.add_task(_scrape_one, scraper.slug, session_factory, cache, settings)
    return ScrapeTriggered(
        message=f"Scraping {scraper.retail_name} triggered",
        retailers=[scraper.retail_name],
    )


@router.get("/clear-cache", response_model=CacheCleared)
async def clear_cache_endpoint(
    background_tasks: BackgroundTasks,
    cache: CacheService = Depends(get_cache),
    settings: Settings = Depends(get_settings),
):
    """Invalidate every retailer listing and the combined listing."""
    scrapers = get_all_scrapers(settings)
    await clear_cache(scrapers, cache)
    background_tasks.add_task(exit_if_one_shot, settings)
    return CacheCleared(
        message="Cache cleared",
        keys=[retailer_key(scraper.retail_name) for scraper in scrapers] + [KEY_ALL_RETAILERS],
    )
