"""Unit tests for socialmeta.store."""

from __future__ import annotations

from socialmeta.config import DEFAULT_APP_ID, DEFAULT_GATEWAY_URL
from socialmeta.models.pages import PageRecord
from socialmeta.store import (
    OPTION_APP_SECRET,
    OPTION_PAGES,
    AppConfigStore,
    OptionStore,
    PageRegistry,
)


class TestOptionStore:
    async def test_get_missing_returns_default(self, options: OptionStore) -> None:
        assert await options.get("nothing", []) == []

    async def test_set_and_get_json(self, options: OptionStore) -> None:
        await options.set("colors", {"primary": "blue", "ids": [1, 2]})
        assert await options.get("colors") == {"primary": "blue", "ids": [1, 2]}

    async def test_delete(self, options: OptionStore) -> None:
        await options.set("temp", 1)
        assert await options.delete("temp") is True
        assert await options.delete("temp") is False
        assert await options.get("temp") is None


class TestPageRegistry:
    async def test_empty_registry(self, registry: PageRegistry) -> None:
        assert await registry.all() == []
        assert await registry.find("1001") is None

    async def test_replace_and_find(
        self, registry: PageRegistry, sample_pages: list[PageRecord]
    ) -> None:
        await registry.replace(sample_pages)
        assert await registry.all() == sample_pages
        page = await registry.find("1002")
        assert page is not None
        assert page.name == "Harbour Cafe"

    async def test_replace_is_wholesale(
        self, registry: PageRegistry, sample_pages: list[PageRecord]
    ) -> None:
        await registry.replace(sample_pages)
        await registry.replace([sample_pages[1]])
        assert await registry.find("1001") is None

    async def test_find_returns_last_duplicate(self, registry: PageRegistry) -> None:
        await registry.replace(
            [
                PageRecord(id="1001", name="Old name", access_token="a"),
                PageRecord(id="1001", name="New name", access_token="b"),
            ]
        )
        page = await registry.find("1001")
        assert page is not None
        assert page.name == "New name"

    async def test_find_empty_id(
        self, registry: PageRegistry, sample_pages: list[PageRecord]
    ) -> None:
        await registry.replace(sample_pages)
        assert await registry.find("") is None

    async def test_clear_deletes_option(
        self, registry: PageRegistry, options: OptionStore, sample_pages: list[PageRecord]
    ) -> None:
        await registry.replace(sample_pages)
        await registry.clear()
        assert await options.get(OPTION_PAGES) is None
        assert await registry.all() == []


class TestAppConfigStore:
    async def test_defaults(self, app_config: AppConfigStore) -> None:
        config = await app_config.load()
        assert config.app_id == DEFAULT_APP_ID
        assert config.app_secret is None
        assert config.gateway_url == DEFAULT_GATEWAY_URL
        assert config.use_gateway is True

    async def test_save_private_app(self, app_config: AppConfigStore) -> None:
        await app_config.save("123", "s3cret", "https://gw.example.test/ajax")
        config = await app_config.load()
        assert config.app_id == "123"
        assert config.app_secret == "s3cret"
        assert config.gateway_url == "https://gw.example.test/ajax"
        assert config.use_gateway is False

    async def test_empty_values_delete_rather_than_store(
        self, app_config: AppConfigStore, options: OptionStore
    ) -> None:
        await app_config.save("123", "s3cret")
        await app_config.save("", "")

        assert await options.get(OPTION_APP_SECRET) is None
        config = await app_config.load()
        assert config.app_id == DEFAULT_APP_ID
        assert config.use_gateway is True
