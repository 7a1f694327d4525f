"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and a real GraphClient
(HTTP mocked with respx in the tests), plus an httpx client driving the
FastAPI app in-process.
"""

from __future__ import annotations

import os

import aiosqlite
import httpx
import pytest

from socialmeta.config import Settings
from socialmeta.server import create_app
from socialmeta.state import AppState, build_app_state


@pytest.fixture()
async def app_state():
    async with aiosqlite.connect(":memory:") as db, httpx.AsyncClient() as http_client:
        state = await build_app_state(Settings(), db, http_client)
        yield state


@pytest.fixture()
async def client(app_state: AppState):
    app = create_app(state=app_state)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture()
def subprocess_env(tmp_path) -> dict[str, str]:
    """Environment for server subprocesses, isolated from the user's data dir."""
    env = os.environ.copy()
    env["SOCIALMETA__CACHE__DB_PATH"] = str(tmp_path / "socialmeta.db")
    return env
