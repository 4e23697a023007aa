import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storehours.config import get_settings
from storehours.database import init_db, dispose_db
from storehours.routers.scrape import router as scrape_router
from storehours.services.cache import cache

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and cache on startup, release them on shutdown."""
    logger.info("Starting up... Initializing database")
    init_db()
    logger.info("Connecting to Redis cache...")
    await cache.connect()
    yield
    logger.info("Shutting down...")
    await cache.disconnect()
    dispose_db()


app = FastAPI(
    title="Store Hours Scraper",
    description="Scrape store locations and opening hours of Croatian retail chains",
    version="1.0.0",
    lifespan=lifespan
)

# Include routers
app.include_router(scrape_router, prefix=settings.api_prefix)


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "Store Hours Scraper",
        "version": "1.0.0"
    }
