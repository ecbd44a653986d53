from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from placeholder.config import Settings
from placeholder.main import create_app
from placeholder.stats import StatsStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, static_dir=str(tmp_path / "public"))


@pytest.fixture
def stats_store() -> StatsStore:
    return StatsStore()


@pytest_asyncio.fixture
async def client(settings: Settings, stats_store: StatsStore) -> httpx.AsyncClient:
    app = create_app(settings, stats_store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
