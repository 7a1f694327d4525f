from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from socialmeta.models.pages import MetadataKind, PageRecord


class SyncPagesInput(BaseModel):
    """Body posted by the OAuth gateway after the user picked their pages."""

    data: list[PageRecord] | None = None


class SaveAppDataInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    app_id: str | None = Field(default=None, alias="appId")
    app_secret: str | None = Field(default=None, alias="appSecret")
    gateway_url: str | None = Field(default=None, alias="gatewayUrl")


class AppConfig(BaseModel):
    app_id: str
    app_secret: str | None = None
    gateway_url: str

    @property
    def use_gateway(self) -> bool:
        """Without a private app secret the remote gateway performs OAuth."""
        return not self.app_secret


class AppSettingsOutput(BaseModel):
    app_id: str
    gateway_url: str
    use_gateway: bool


class WidgetSettings(BaseModel):
    title: str = ""
    page_id: str = ""
    show_page_name: bool = False
    kind: MetadataKind = MetadataKind.BUSINESS_HOURS
