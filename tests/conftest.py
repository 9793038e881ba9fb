import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from tourfx.core.config import Settings
from tourfx.main import create_app
from tourfx.services.currency import CurrencyService
from tourfx.services.rates.base import RateSource
from tourfx.services.rates.cache_service import RateCache
from tourfx.services.rates.conversion import ConversionEngine

LIVE_RATES = {"USD": 1.0, "GHS": 12.0, "EUR": 0.9, "GBP": 0.8, "JPY": 150.0}


class FakeClock:
    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class CountingSource(RateSource):
    """In-memory source recording how often the cache asked for fresh rates."""

    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self.rates = dict(LIVE_RATES if rates is None else rates)
        self.calls = 0

    async def fetch_live(self) -> Dict[str, float]:  # type: ignore[override]
        self.calls += 1
        await asyncio.sleep(0)
        return dict(self.rates)


class ExplodingSource(RateSource):
    async def fetch_live(self) -> Dict[str, float]:  # type: ignore[override]
        raise RuntimeError("provider exploded")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> CountingSource:
    return CountingSource()


@pytest.fixture
def cache(source, clock) -> RateCache:
    return RateCache(source, ttl_seconds=3600, clock=clock)


@pytest.fixture
def engine(cache) -> ConversionEngine:
    return ConversionEngine(cache)


@pytest.fixture
def service(engine, cache) -> CurrencyService:
    return CurrencyService(engine, cache, api_enabled=True)


@pytest.fixture
def exploding_service() -> CurrencyService:
    cache = RateCache(ExplodingSource())
    return CurrencyService(ConversionEngine(cache), cache, api_enabled=True)


@pytest.fixture
def offline_settings() -> Settings:
    """Settings with no API key: fallback-only mode, never hits the network."""
    return Settings(_env_file=None, open_exchange_rates_api_key=None)


@pytest.fixture
def offline_client(offline_settings) -> TestClient:
    return TestClient(create_app(settings_override=offline_settings))


@pytest.fixture
def live_client(offline_settings, service) -> TestClient:
    return TestClient(create_app(settings_override=offline_settings, currency_service=service))


@pytest.fixture
def make_engine(clock):
    def _make(rates: Dict[str, float]) -> ConversionEngine:
        return ConversionEngine(RateCache(CountingSource(rates), clock=clock))

    return _make
