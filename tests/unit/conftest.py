"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import aiosqlite
import pytest

from socialmeta.cache import MetadataCache
from socialmeta.config import Settings
from socialmeta.resolver import ContentResolver
from socialmeta.state import AppState
from socialmeta.store import AppConfigStore, OptionStore, PageRegistry


@pytest.fixture()
async def db():
    async with aiosqlite.connect(":memory:") as conn:
        yield conn


@pytest.fixture()
async def cache(db):
    """In-memory SQLite cache for unit tests."""
    c = MetadataCache(db)
    await c.init_db()
    return c


@pytest.fixture()
async def options(db):
    store = OptionStore(db)
    await store.init_db()
    return store


@pytest.fixture()
def registry(options) -> PageRegistry:
    return PageRegistry(options)


@pytest.fixture()
def app_config(options) -> AppConfigStore:
    return AppConfigStore(options, Settings().gateway)


@pytest.fixture()
def app_state(cache, registry, app_config, stub_graph) -> AppState:
    """AppState wired with the stub Graph client instead of httpx."""
    settings = Settings()
    return AppState(
        settings=settings,
        cache=cache,
        graph=stub_graph,  # type: ignore[arg-type]
        resolver=ContentResolver(cache, stub_graph, ttl_seconds=settings.cache.ttl_seconds),  # type: ignore[arg-type]
        pages=registry,
        app_config=app_config,
    )
