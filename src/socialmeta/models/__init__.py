from __future__ import annotations

from socialmeta.models.cache import MetadataCacheEntry
from socialmeta.models.callbacks import (
    AppConfig,
    AppSettingsOutput,
    SaveAppDataInput,
    SyncPagesInput,
    WidgetSettings,
)
from socialmeta.models.pages import MetadataKind, PageRecord

__all__ = [
    # pages
    "MetadataKind",
    "PageRecord",
    # cache
    "MetadataCacheEntry",
    # callbacks
    "AppConfig",
    "AppSettingsOutput",
    "SaveAppDataInput",
    "SyncPagesInput",
    "WidgetSettings",
]
