"""Unit tests for configuration defaults and validation."""

from __future__ import annotations

import platformdirs
import pytest
from pydantic import ValidationError

from socialmeta.config import (
    _DEFAULT_DATA_DIR,
    _DEFAULT_DB_PATH,
    DEFAULT_APP_ID,
    DEFAULT_GATEWAY_URL,
    CacheSettings,
    Settings,
)


class TestPlatformDefaults:
    """Verify config defaults use platformdirs instead of hardcoded Unix paths."""

    def test_default_data_dir_matches_platformdirs(self) -> None:
        expected = platformdirs.user_data_dir("socialmeta")
        assert expected == _DEFAULT_DATA_DIR

    def test_default_db_path_under_data_dir(self) -> None:
        assert _DEFAULT_DB_PATH.startswith(_DEFAULT_DATA_DIR)
        assert _DEFAULT_DB_PATH.endswith("socialmeta.db")

    def test_cache_settings_uses_platform_default(self) -> None:
        assert CacheSettings().db_path == _DEFAULT_DB_PATH


class TestCacheDefaults:
    def test_ttl_is_three_minutes(self) -> None:
        assert Settings().cache.ttl_seconds == 180

    def test_bypass_off_by_default(self) -> None:
        assert Settings().cache.bypass is False

    def test_cache_keyed_by_page_by_default(self) -> None:
        assert Settings().cache.scope == "page"

    def test_bypass_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOCIALMETA__CACHE__BYPASS", "true")
        assert Settings().cache.bypass is True

    def test_gateway_defaults(self) -> None:
        settings = Settings()
        assert settings.gateway.default_app_id == DEFAULT_APP_ID
        assert settings.gateway.default_gateway_url == DEFAULT_GATEWAY_URL
        assert settings.graph.base_url == "https://graph.facebook.com/"


class TestConfigValidation:
    def test_wrong_type_raises_validation_error(self) -> None:
        """A non-integer port raises ValidationError immediately."""
        with pytest.raises(ValidationError):
            Settings(server={"port": "not-a-number"})  # type: ignore[arg-type]

    def test_unknown_scope_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            CacheSettings(scope="site")  # type: ignore[arg-type]

    def test_unknown_top_level_field_raises_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            Settings(completely_unknown_field="oops")  # type: ignore[call-arg]

    def test_unknown_nested_field_raises_validation_error(self) -> None:
        """A typo like 'ttl_secnds' is caught instead of silently using the default."""
        with pytest.raises(ValidationError):
            CacheSettings(ttl_secnds=60)  # type: ignore[call-arg]

    def test_data_dir_is_not_a_setting(self) -> None:
        """The database location is configured through cache.db_path only."""
        with pytest.raises(ValidationError):
            Settings(data_dir="/tmp/socialmeta")  # type: ignore[call-arg]
