"""Content resolution: cached payload or a fresh Graph API fetch.

The resolver never raises for fetch problems. A network failure, a body that
is not JSON, and a page that simply has no business hours all come back the
same way (``None`` or a payload without the wanted field), and presentation
code renders the empty state for each of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from socialmeta.errors import classify_payload
from socialmeta.models.pages import MetadataKind

if TYPE_CHECKING:
    from socialmeta.cache import MetadataCache
    from socialmeta.graph import GraphClient
    from socialmeta.models.pages import PageRecord

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 180

_PATH_TEMPLATES: dict[MetadataKind, str] = {
    MetadataKind.BUSINESS_HOURS: "{id}/?fields=hours&access_token={token}",
    MetadataKind.ABOUT: "{id}/?fields=about&access_token={token}",
    MetadataKind.LAST_POST: (
        "{id}/published_posts?fields=message,permalink_url,created_time"
        "&limit=1&access_token={token}"
    ),
}


def build_path(page: PageRecord, kind: MetadataKind) -> str:
    """Graph API path (relative to the base URL) for *kind* on *page*."""
    return _PATH_TEMPLATES[kind].format(id=page.id, token=page.access_token)


class ContentResolver:
    def __init__(
        self,
        cache: MetadataCache,
        graph: GraphClient,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        bypass_cache: bool = False,
    ) -> None:
        self._cache = cache
        self._graph = graph
        self._ttl_seconds = ttl_seconds
        self._bypass_cache = bypass_cache

    async def resolve(self, page: PageRecord | None, kind: MetadataKind) -> Any:
        if page is None:
            return None

        if not self._bypass_cache:
            entry = await self._cache.get(kind, page.id)
            if entry is not None:
                log.debug("cache_hit", kind=kind.value, page_id=page.id)
                return entry.payload

        result = await self._graph.fetch(build_path(page, kind))

        problem = classify_payload(result)
        if problem is not None:
            log.info("resolve_without_data", kind=kind.value, page_id=page.id, reason=problem)

        if not self._bypass_cache:
            await self._cache.set(kind, page.id, result, self._ttl_seconds)
        return result
