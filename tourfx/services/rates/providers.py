from __future__ import annotations

"""Concrete rate sources and factory.

'OpenExchangeRatesSource' is the live provider (openexchangerates.org, base USD).
Without an API key it runs in fallback-only mode. 'StaticRateSource' never touches
the network and is meant for local runs and demos.
"""
import logging
from typing import Dict, Optional, TYPE_CHECKING

import httpx
from pydantic import ValidationError

from .base import RateSource
from tourfx.models.constants import FALLBACK_RATES
from tourfx.models.rates import ExchangeRatesResponse
from tourfx.services.http_client import get_json, HttpError

if TYPE_CHECKING:  # pragma: no cover
    from tourfx.core.config import Settings

logger = logging.getLogger("tourfx.rates.source")


def fallback_rates() -> Dict[str, float]:
    return dict(FALLBACK_RATES)


class StaticRateSource(RateSource):
    async def fetch_live(self) -> Dict[str, float]:  # type: ignore[override]
        return fallback_rates()


class OpenExchangeRatesSource(RateSource):
    """Single-attempt fetch of ``latest.json``; every failure degrades to the fallback table."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str = "https://openexchangerates.org/api/latest.json",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def api_enabled(self) -> bool:
        return bool(self._api_key)

    async def fetch_live(self) -> Dict[str, float]:  # type: ignore[override]
        if not self._api_key:
            logger.warning("Open Exchange Rates API key not configured, using fallback rates")
            return fallback_rates()

        try:
            data = await get_json(
                self._url,
                params={"app_id": self._api_key},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
                transport=self._transport,
            )
            payload = ExchangeRatesResponse.model_validate(data)
        except (HttpError, ValidationError) as e:
            logger.error("failed to fetch live exchange rates, falling back to static rates: %s", e)
            return fallback_rates()

        logger.info(
            "fetched live exchange rates",
            extra={"currency_count": len(payload.rates), "base": payload.base},
        )
        return payload.rates


_SOURCE_REGISTRY = {
    "static": lambda settings: StaticRateSource(),
    "open-exchange-rates": lambda settings: OpenExchangeRatesSource(
        api_key=settings.open_exchange_rates_api_key,
        url=settings.exchange_rates_url,
        timeout=settings.http_timeout_seconds,
    ),
}


def make_rate_source(settings: "Settings") -> RateSource:
    factory = _SOURCE_REGISTRY.get(settings.exchange_rate_provider)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{settings.exchange_rate_provider}'")
    return factory(settings)
