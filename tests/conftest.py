"""
Pytest configuration and fixtures.
Provides isolated settings (temp SQLite file), a controllable rate provider
and a TestClient bound to a fresh app.
"""

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from currency_converter.core.config import Settings
from currency_converter.db.schema import init_db
from currency_converter.db.storage import KeyValueStore
from currency_converter.main import create_app
from currency_converter.models.rates import RateSnapshot
from currency_converter.services.history import HistoryStore
from currency_converter.services.rates.base import RateProvider

BASE_RATES = {"USD": 1.0, "BRL": 5.0, "EUR": 0.5}


class FakeRateProvider(RateProvider):
    """Serves queued rate tables; a queued exception is raised instead."""

    def __init__(self, *responses):
        self.responses: List[object] = list(responses) or [dict(BASE_RATES)]
        self.calls = 0

    async def fetch_snapshot(self) -> RateSnapshot:  # type: ignore[override]
        self.calls += 1
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return RateSnapshot(rates=dict(item))


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "test.sqlite3",
        exchange_rate_provider="static",
    )
    s.init_post_load()
    return s


@pytest.fixture
def kv_store(settings) -> KeyValueStore:
    init_db(settings.db_path)
    return KeyValueStore(settings.db_path)


@pytest.fixture
def history_store(kv_store, settings) -> HistoryStore:
    return HistoryStore.from_settings(kv_store, settings)


@pytest.fixture
def make_client(settings):
    clients: List[TestClient] = []

    def _make(provider: Optional[RateProvider] = None, rates: Optional[Dict[str, float]] = None):
        provider = provider or FakeRateProvider(dict(rates or BASE_RATES))
        client = TestClient(create_app(settings_override=settings, provider=provider))
        client.__enter__()  # run lifespan (initial load)
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def fake_provider():
    return FakeRateProvider
