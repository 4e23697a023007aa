import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from storehours.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL."""
    # SQLite needs different config than PostgreSQL
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False}  # Needed for SQLite
        )

    # Every sync transaction runs read committed, read write
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        isolation_level="READ COMMITTED",
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@lru_cache()
def get_engine() -> Engine:
    return build_engine(get_settings().database_url)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return build_session_factory(get_engine())


def init_db(engine: Engine | None = None):
    """Create the retail chain, city, location and work hour tables."""
    # Register models on Base.metadata
    import storehours.models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")


def dispose_db():
    """Release the connection pool."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
        logger.info("Database connection pool released")
