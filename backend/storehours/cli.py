"""Command line entry point: run one scrape and exit."""
import argparse
import asyncio
import logging
import sys

from storehours.config import get_settings
from storehours.database import init_db, dispose_db, get_session_factory
from storehours.scrapers.registry import SCRAPERS, UnknownRetailerError, get_all_scrapers, get_scraper
from storehours.services.cache import CacheService
from storehours.services.pipeline import clear_cache, run_all, run_retailer


def setup_logging(verbose: bool = False):
    """Configure logging.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


async def run(retailer: str, only_clear_cache: bool = False) -> int:
    """Run a scrape (or a cache clear) with process-scoped resources.

    Args:
        retailer: Retailer slug or "all"
        only_clear_cache: Skip scraping and only invalidate the cache

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger = logging.getLogger(__name__)
    settings = get_settings()

    try:
        scrapers = get_all_scrapers(settings) if retailer == "all" else [get_scraper(retailer, settings)]
    except UnknownRetailerError as e:
        logger.error(str(e))
        logger.info(f"Available retailers: {', '.join(SCRAPERS.keys())}")
        return 1

    cache = CacheService(settings.redis_url)
    await cache.connect()
    try:
        if only_clear_cache:
            await clear_cache(scrapers, cache)
            return 0

        init_db()
        session_factory = get_session_factory()

        if retailer == "all":
            results = await run_all(scrapers, session_factory, cache, settings)
        else:
            results = [await run_retailer(scrapers[0], session_factory, cache, settings=settings)]

        for result in results:
            logger.info(
                f"{result['retailer']}: {result['status']} "
                f"({result['saved']}/{result['locations']} locations saved)"
            )
        return 0 if all(r["status"] in ("success", "no_data") for r in results) else 1
    finally:
        await cache.disconnect()
        dispose_db()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scrape store locations and opening hours of Croatian retail chains"
    )
    parser.add_argument(
        'retailer',
        nargs='?',
        default='all',
        choices=['all', *SCRAPERS.keys()],
        help="Retailer to scrape (default: all)"
    )
    parser.add_argument(
        '--clear-cache',
        action='store_true',
        help="Only invalidate cached listings"
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="Enable verbose output"
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    exit_code = asyncio.run(run(args.retailer, args.clear_cache))
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
