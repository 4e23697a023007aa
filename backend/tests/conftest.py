"""Shared fixtures."""

from datetime import datetime

import pytest

from storehours.database import build_engine, build_session_factory, init_db


@pytest.fixture
def engine(tmp_path):
    """Create temporary SQLite database with all tables."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def wednesday():
    """Wednesday 8 May 2024, the Monday of that week is 6 May."""
    return datetime(2024, 5, 8, 14, 30)
