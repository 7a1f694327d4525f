"""Durable options store: page registry and app configuration.

Unlike the metadata cache, storage errors here propagate: a failed write to
the registry must not be reported to the gateway as a successful sync.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog

from socialmeta.models.callbacks import AppConfig
from socialmeta.models.pages import PageRecord

if TYPE_CHECKING:
    import aiosqlite

    from socialmeta.config import GatewaySettings

log = structlog.get_logger()

OPTION_PAGES = "fb_get_page_info"
OPTION_APP_ID = "fb_get_app_id"
OPTION_APP_SECRET = "fb_get_app_secret"
OPTION_GATEWAY_URL = "fb_get_gateway_url"

_CREATE_OPTIONS_TABLE = """
CREATE TABLE IF NOT EXISTS options (
    name   TEXT PRIMARY KEY,
    value  TEXT NOT NULL
)
"""

_MISSING = object()


class OptionStore:
    """JSON values stored by name, one row per option."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        await self._db.execute(_CREATE_OPTIONS_TABLE)
        await self._db.commit()

    async def get(self, name: str, default: Any = None) -> Any:
        cursor = await self._db.execute("SELECT value FROM options WHERE name = ?", (name,))
        row = await cursor.fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    async def set(self, name: str, value: Any) -> None:
        await self._db.execute(
            "INSERT OR REPLACE INTO options (name, value) VALUES (?, ?)",
            (name, json.dumps(value)),
        )
        await self._db.commit()

    async def delete(self, name: str) -> bool:
        """Remove an option. Returns True if it existed."""
        cursor = await self._db.execute("DELETE FROM options WHERE name = ?", (name,))
        await self._db.commit()
        return cursor.rowcount > 0


class PageRegistry:
    """The synchronized list of Facebook pages and their access tokens."""

    def __init__(self, options: OptionStore) -> None:
        self._options = options

    async def all(self) -> list[PageRecord]:
        raw = await self._options.get(OPTION_PAGES, [])
        return [PageRecord.model_validate(item) for item in raw]

    async def find(self, page_id: str) -> PageRecord | None:
        """Return the last record whose id matches *page_id*."""
        if not page_id:
            return None
        match = None
        for page in await self.all():
            if page.id == page_id:
                match = page
        return match

    async def replace(self, pages: list[PageRecord]) -> None:
        await self._options.set(OPTION_PAGES, [page.model_dump() for page in pages])
        log.info("pages_synced", count=len(pages))

    async def clear(self) -> None:
        await self._options.delete(OPTION_PAGES)
        log.info("pages_cleared")


class AppConfigStore:
    """Facebook app credentials; unset values fall back to configured defaults."""

    def __init__(self, options: OptionStore, settings: GatewaySettings) -> None:
        self._options = options
        self._settings = settings

    async def load(self) -> AppConfig:
        app_id = await self._options.get(OPTION_APP_ID, _MISSING)
        app_secret = await self._options.get(OPTION_APP_SECRET, None)
        gateway_url = await self._options.get(OPTION_GATEWAY_URL, _MISSING)
        return AppConfig(
            app_id=self._settings.default_app_id if app_id is _MISSING else app_id,
            app_secret=app_secret or None,
            gateway_url=(
                self._settings.default_gateway_url if gateway_url is _MISSING else gateway_url
            ),
        )

    async def save(
        self,
        app_id: str | None,
        app_secret: str | None,
        gateway_url: str | None = None,
    ) -> None:
        """Store each non-empty value; an empty or missing value deletes the option."""
        for name, value in (
            (OPTION_APP_ID, app_id),
            (OPTION_APP_SECRET, app_secret),
            (OPTION_GATEWAY_URL, gateway_url),
        ):
            if value:
                await self._options.set(name, value)
            else:
                await self._options.delete(name)
        log.info("app_config_saved", has_app_secret=bool(app_secret))
