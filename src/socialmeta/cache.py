"""SQLite metadata cache with a fixed TTL.

All cache operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return ``None`` (treated as a miss by the resolver),
write failures are logged and ignored (the fetched payload is still returned).
Infrastructure errors never cross the MetadataCache class boundary.

Slots are keyed by ``(page_id, kind)`` by default. With ``scope="kind"`` every
page shares a single slot per kind, so a different page rendered inside the
TTL window receives the previous page's data.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal

import aiosqlite
import structlog

from socialmeta.models.cache import MetadataCacheEntry

if TYPE_CHECKING:
    from socialmeta.models.pages import MetadataKind

log = structlog.get_logger()

_CREATE_METADATA_TABLE = """
CREATE TABLE IF NOT EXISTS metadata_cache (
    cache_key   TEXT PRIMARY KEY,
    kind        TEXT NOT NULL,
    page_id     TEXT NOT NULL,
    payload     TEXT NOT NULL,
    fetched_at  TEXT NOT NULL,
    expires_at  TEXT NOT NULL
)
"""

_CREATE_SERVER_METADATA_TABLE = """
CREATE TABLE IF NOT EXISTS server_metadata (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

_CREATE_METADATA_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_metadata_expires ON metadata_cache(expires_at)"
)


class MetadataCache:
    """SQLite-backed TTL cache for Graph API results."""

    def __init__(
        self,
        db: aiosqlite.Connection,
        scope: Literal["page", "kind"] = "page",
    ) -> None:
        self._db = db
        self._scope = scope

    async def init_db(self) -> None:
        """Create tables. Called once at startup."""
        await self._db.execute(_CREATE_METADATA_TABLE)
        await self._db.execute(_CREATE_SERVER_METADATA_TABLE)
        await self._db.execute(_CREATE_METADATA_INDEX)
        await self._db.commit()

    def cache_key(self, kind: MetadataKind, page_id: str) -> str:
        if self._scope == "kind":
            return kind.value
        return f"{page_id}:{kind.value}"

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    async def get(self, kind: MetadataKind, page_id: str) -> MetadataCacheEntry | None:
        """Read an unexpired entry. Returns ``None`` on miss, expiry or read failure."""
        key = self.cache_key(kind, page_id)
        try:
            cursor = await self._db.execute(
                "SELECT cache_key, kind, page_id, payload, fetched_at, expires_at "
                "FROM metadata_cache WHERE cache_key = ?",
                (key,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            expires_at = datetime.fromisoformat(row[5])
            if datetime.now(UTC) >= expires_at:
                return None

            return MetadataCacheEntry(
                cache_key=row[0],
                kind=row[1],
                page_id=row[2],
                payload=json.loads(row[3]),
                fetched_at=datetime.fromisoformat(row[4]),
                expires_at=expires_at,
            )
        except (aiosqlite.Error, json.JSONDecodeError):
            log.warning("cache_read_error", key=key, exc_info=True)
            return None

    async def set(
        self,
        kind: MetadataKind,
        page_id: str,
        payload: Any,
        ttl_seconds: int,
    ) -> None:
        """Write an entry, replacing whatever the slot held. Non-fatal on failure."""
        key = self.cache_key(kind, page_id)
        try:
            now = datetime.now(UTC)
            expires_at = now + timedelta(seconds=ttl_seconds)
            await self._db.execute(
                "INSERT OR REPLACE INTO metadata_cache "
                "(cache_key, kind, page_id, payload, fetched_at, expires_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    key,
                    kind.value,
                    page_id,
                    json.dumps(payload),
                    now.isoformat(),
                    expires_at.isoformat(),
                ),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", key=key, exc_info=True)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def clear(self) -> int:
        """Delete every entry. Returns the number of rows removed (0 on failure)."""
        try:
            cursor = await self._db.execute("DELETE FROM metadata_cache")
            deleted = cursor.rowcount
            await self._db.commit()
            log.info("cache_cleared", deleted=deleted)
            return deleted
        except aiosqlite.Error:
            log.warning("cache_clear_error", exc_info=True)
            return 0

    async def cleanup_expired(self) -> None:
        """Delete entries past their expiry. Non-fatal on failure."""
        try:
            now = datetime.now(UTC).isoformat()
            cursor = await self._db.execute(
                "DELETE FROM metadata_cache WHERE expires_at < ?", (now,)
            )
            deleted = cursor.rowcount
            await self._db.commit()
            log.info("cache_cleanup_complete", deleted=deleted)
        except aiosqlite.Error:
            log.warning("cache_cleanup_error", exc_info=True)

    async def cleanup_if_due(self, interval_hours: int) -> None:
        """Run :meth:`cleanup_expired` unless it already ran within *interval_hours*.

        A failure reading the last-run timestamp falls through to cleanup.
        """
        try:
            cursor = await self._db.execute(
                "SELECT value FROM server_metadata WHERE key = 'last_cleanup_at'"
            )
            row = await cursor.fetchone()
            if row is not None:
                last_run = datetime.fromisoformat(row[0])
                if datetime.now(UTC) - last_run < timedelta(hours=interval_hours):
                    log.debug("cache_cleanup_skipped", last_cleanup_at=row[0])
                    return
        except aiosqlite.Error:
            log.warning("cache_metadata_read_error", exc_info=True)

        await self.cleanup_expired()

        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO server_metadata (key, value) "
                "VALUES ('last_cleanup_at', ?)",
                (datetime.now(UTC).isoformat(),),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_metadata_write_error", exc_info=True)
