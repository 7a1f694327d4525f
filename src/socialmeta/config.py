"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SOCIALMETA__CACHE__BYPASS=true)
  2. socialmeta.yaml        (searched in cwd, then ~/.config/socialmeta/)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("socialmeta")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "socialmeta.db")

DEFAULT_APP_ID = "475478070525107"
DEFAULT_GATEWAY_URL = "https://www.cloud86.de/wp-admin/admin-ajax.php"


def _find_config_file() -> str | None:
    """Return the path of the first socialmeta.yaml found, or None."""
    candidates = [
        Path("socialmeta.yaml"),
        Path.home() / ".config" / "socialmeta" / "socialmeta.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "127.0.0.1"
    port: int = 8080


class GraphSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = "https://graph.facebook.com/"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ttl_seconds: int = 180
    # Staging escape hatch: every resolution becomes a live fetch.
    bypass: bool = False
    # "page" keys slots by (page_id, kind); "kind" shares one slot per kind.
    scope: Literal["page", "kind"] = "page"
    db_path: str = _DEFAULT_DB_PATH
    cleanup_interval_hours: int = 6


class GatewaySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_app_id: str = DEFAULT_APP_ID
    default_gateway_url: str = DEFAULT_GATEWAY_URL
    # Callback URL of this service, handed out when a private app secret is set
    local_url: str = "http://127.0.0.1:8080/ajax"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SOCIALMETA__SERVER__PORT=9090
        env_prefix="SOCIALMETA__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    server: ServerSettings = ServerSettings()
    graph: GraphSettings = GraphSettings()
    cache: CacheSettings = CacheSettings()
    gateway: GatewaySettings = GatewaySettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
