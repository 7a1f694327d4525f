"""Shared fixtures: sample page records and a stub Graph client."""

from __future__ import annotations

import pytest

from socialmeta.models.pages import PageRecord
from tests.stubs import StubGraphClient


@pytest.fixture()
def sample_pages() -> list[PageRecord]:
    return [
        PageRecord(id="1001", name="Corner Bakery", access_token="token-bakery"),
        PageRecord(id="1002", name="Harbour Cafe", access_token="token-cafe"),
    ]


@pytest.fixture()
def stub_graph() -> StubGraphClient:
    return StubGraphClient(payload={"hours": {"mon_1_open": "09:00", "mon_1_close": "17:00"}})
