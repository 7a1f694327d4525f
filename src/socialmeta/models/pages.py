from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, field_validator


class MetadataKind(StrEnum):
    BUSINESS_HOURS = "BusinessHours"
    ABOUT = "About"
    LAST_POST = "LastPost"


class PageRecord(BaseModel):
    """A Facebook Page as synchronized by the OAuth gateway."""

    id: str
    name: str
    access_token: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        # Gateways occasionally send numeric page ids
        if isinstance(v, int):
            return str(v)
        return v
