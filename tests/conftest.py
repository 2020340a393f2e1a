"""Pytest configuration and shared fixtures.

Organization:
    - Environment: keep EVENTSEARCH_* variables from the host out of tests
    - Event Fixtures: fresh rows for the three event tables
    - Database Fixtures: in-memory SQLite engine, session provider, searcher

Row builders live in tests/utils.py.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

import pytest

from eventsearch.core.settings import get_db_settings, get_logging_settings
from eventsearch.features.events.service import EventSearcher
from eventsearch.infra.database.session import SessionProvider
from tests.utils import (
    build_fs_events,
    build_log_events,
    build_provider_events,
    create_memory_engine,
    insert_rows,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from eventsearch.core.database.base import Base
    from eventsearch.features.events.models import FsEvent, LogEvent, ProviderEvent


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop EVENTSEARCH_* variables and settings caches around every test."""
    for key in list(os.environ):
        if key.startswith("EVENTSEARCH_"):
            monkeypatch.delenv(key)
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    yield
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def fs_events() -> list[FsEvent]:
    return build_fs_events()


@pytest.fixture
def provider_events() -> list[ProviderEvent]:
    return build_provider_events()


@pytest.fixture
def log_events() -> list[LogEvent]:
    return build_log_events()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite and empty event tables.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = await create_memory_engine()
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def seed(db_engine: AsyncEngine) -> Callable[[Sequence[Base]], Awaitable[None]]:
    """Insert rows into the test database.

    Example:
        async def test_search(seed, fs_events):
            await seed(fs_events)
    """

    async def _seed(rows: Sequence[Base]) -> None:
        await insert_rows(db_engine, rows)

    return _seed


@pytest.fixture
async def seeded_engine(
    db_engine: AsyncEngine,
    fs_events: list[FsEvent],
    provider_events: list[ProviderEvent],
    log_events: list[LogEvent],
) -> AsyncEngine:
    """Engine with all fixture rows inserted."""
    await insert_rows(db_engine, [*fs_events, *provider_events, *log_events])
    return db_engine


@pytest.fixture
def session_provider(db_engine: AsyncEngine) -> SessionProvider:
    return SessionProvider(db_engine, query_timeout=5.0)


@pytest.fixture
def searcher(seeded_engine: AsyncEngine) -> EventSearcher:
    """EventSearcher over the fully seeded in-memory store."""
    return EventSearcher(SessionProvider(seeded_engine, query_timeout=5.0))
