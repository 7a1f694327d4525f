"""Application state: every long-lived component, wired explicitly.

Render entry points and callbacks receive an ``AppState`` instead of reaching
for module-level singletons.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from socialmeta.cache import MetadataCache
from socialmeta.graph import GraphClient, build_http_client
from socialmeta.resolver import ContentResolver
from socialmeta.store import AppConfigStore, OptionStore, PageRegistry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from socialmeta.config import Settings

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    cache: MetadataCache
    graph: GraphClient
    resolver: ContentResolver
    pages: PageRegistry
    app_config: AppConfigStore
    http_client: httpx.AsyncClient | None = None


async def build_app_state(
    settings: Settings,
    db: aiosqlite.Connection,
    http_client: httpx.AsyncClient,
) -> AppState:
    """Wire components around an open database connection and HTTP client."""
    cache = MetadataCache(db, scope=settings.cache.scope)
    await cache.init_db()
    options = OptionStore(db)
    await options.init_db()

    graph = GraphClient(http_client, settings.graph)
    resolver = ContentResolver(
        cache,
        graph,
        ttl_seconds=settings.cache.ttl_seconds,
        bypass_cache=settings.cache.bypass,
    )
    return AppState(
        settings=settings,
        cache=cache,
        graph=graph,
        resolver=resolver,
        pages=PageRegistry(options),
        app_config=AppConfigStore(options, settings.gateway),
        http_client=http_client,
    )


@asynccontextmanager
async def open_app_state(settings: Settings) -> AsyncIterator[AppState]:
    """Open the database and HTTP client for the lifetime of the process."""
    db_path = Path(settings.cache.db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db, build_http_client() as http_client:
        await db.execute("PRAGMA journal_mode = WAL")
        state = await build_app_state(settings, db, http_client)
        await state.cache.cleanup_if_due(settings.cache.cleanup_interval_hours)
        log.info(
            "app_state_ready",
            db_path=str(db_path),
            cache_scope=settings.cache.scope,
            cache_bypass=settings.cache.bypass,
        )
        yield state
