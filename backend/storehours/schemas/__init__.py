from storehours.schemas.scrape import Retailer, ScrapeTriggered, CacheCleared

__all__ = [
    "Retailer",
    "ScrapeTriggered",
    "CacheCleared",
]
