from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from socialmeta.models.pages import MetadataKind


class MetadataCacheEntry(BaseModel):
    """Cached Graph API result for one metadata kind."""

    cache_key: str  # "<kind>" or "<page_id>:<kind>" depending on cache scope
    kind: MetadataKind
    page_id: str
    payload: Any  # Decoded JSON, or None when the fetch failed
    fetched_at: datetime
    expires_at: datetime
