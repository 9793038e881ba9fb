"""Price formatting and USD/GHS helpers used by the booking pages.

Two flavours of every helper:
- ``*_sync`` functions use the fixed fallback rate only. They never touch the
  cache or the network, so first paint always has a price.
- ``CurrencyService`` methods go through the live conversion engine and fall
  back to the sync result (logging the cause) if anything goes wrong.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tourfx.models.constants import (
    CURRENCY_SYMBOLS,
    FALLBACK_GHS_TO_USD,
    FALLBACK_USD_TO_GHS,
)
from tourfx.models.rates import (
    CacheStatus,
    ExchangeRateStatus,
    PaymentConversion,
    RateMonitorReport,
)
from tourfx.services.money import round0, round2
from tourfx.services.rates.cache_service import RateCache
from tourfx.services.rates.conversion import ConversionEngine, ConversionResult
from tourfx.services.rates.providers import make_rate_source

if TYPE_CHECKING:  # pragma: no cover
    from tourfx.core.config import Settings

logger = logging.getLogger("tourfx.currency")


def format_price(amount: float, currency: str = "USD") -> str:
    """Whole-unit display with thousands separators, e.g. ``GH₵1,550``."""
    currency = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{round0(amount):,}"


def _dual_price(usd_amount: float, ghs_amount: float) -> str:
    return f"{format_price(usd_amount, 'USD')} (≈ {format_price(ghs_amount, 'GHS')})"


def convert_usd_to_ghs_sync(usd_amount: float) -> int:
    return round0(usd_amount * FALLBACK_USD_TO_GHS)


def convert_ghs_to_usd_sync(ghs_amount: float) -> float:
    return round2(ghs_amount * FALLBACK_GHS_TO_USD)


def format_price_with_conversion_sync(usd_amount: float) -> str:
    return _dual_price(usd_amount, convert_usd_to_ghs_sync(usd_amount))


def prepare_payment_conversion_sync(usd_amount: float) -> PaymentConversion:
    ghs_amount = convert_usd_to_ghs_sync(usd_amount)
    return PaymentConversion(
        original_amount=usd_amount,
        original_currency="USD",
        payment_amount=ghs_amount,
        payment_currency="GHS",
        exchange_rate=FALLBACK_USD_TO_GHS,
        conversion_info=(
            f"{format_price(usd_amount, 'USD')} = {format_price(ghs_amount, 'GHS')} "
            f"(Rate: 1 USD = {FALLBACK_USD_TO_GHS:g} GHS)"
        ),
    )


class CurrencyService:
    """Live-rate currency operations for the storefront and admin panel."""

    def __init__(self, engine: ConversionEngine, rate_cache: RateCache, api_enabled: bool = False):
        self._engine = engine
        self._cache = rate_cache
        self._api_enabled = api_enabled

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CurrencyService":
        cache = RateCache(make_rate_source(settings), ttl_seconds=settings.rates_cache_ttl_seconds)
        api_enabled = settings.api_enabled and settings.exchange_rate_provider != "static"
        return cls(ConversionEngine(cache), cache, api_enabled=api_enabled)

    @property
    def rate_cache(self) -> RateCache:
        return self._cache

    # Engine passthroughs ---------------------------------------
    async def get_rates(self):
        return await self._cache.get_rates()

    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> float:
        return await self._engine.get_rate(from_currency, to_currency)

    async def convert_currency(self, amount: float, from_currency: str, to_currency: str) -> float:
        return await self._engine.convert(amount, from_currency, to_currency)

    async def convert_detailed(
        self, amount: float, from_currency: str, to_currency: str
    ) -> ConversionResult:
        return await self._engine.convert_detailed(amount, from_currency, to_currency)

    # USD <-> GHS ------------------------------------------------
    async def convert_usd_to_ghs(self, usd_amount: float) -> float:
        try:
            return await self._engine.convert(usd_amount, "USD", "GHS")
        except Exception:
            logger.exception("failed to convert USD to GHS, using fallback rate")
            return convert_usd_to_ghs_sync(usd_amount)

    async def convert_ghs_to_usd(self, ghs_amount: float) -> float:
        try:
            return await self._engine.convert(ghs_amount, "GHS", "USD")
        except Exception:
            logger.exception("failed to convert GHS to USD, using fallback rate")
            return convert_ghs_to_usd_sync(ghs_amount)

    async def format_price_with_conversion(self, usd_amount: float) -> str:
        try:
            ghs_amount = await self._engine.convert(usd_amount, "USD", "GHS")
        except Exception:
            logger.exception("live price conversion failed, using fallback rate")
            return format_price_with_conversion_sync(usd_amount)
        return _dual_price(usd_amount, ghs_amount)

    async def prepare_payment_conversion(self, usd_amount: float) -> PaymentConversion:
        try:
            rate = await self._engine.get_rate("USD", "GHS")
        except Exception:
            logger.exception("failed to prepare payment conversion with live rates, using fallback")
            return prepare_payment_conversion_sync(usd_amount)
        ghs_amount = round0(usd_amount * rate)
        return PaymentConversion(
            original_amount=usd_amount,
            original_currency="USD",
            payment_amount=ghs_amount,
            payment_currency="GHS",
            exchange_rate=rate,
            conversion_info=(
                f"{format_price(usd_amount, 'USD')} = {format_price(ghs_amount, 'GHS')} "
                f"(Rate: 1 USD = {rate:.2f} GHS)"
            ),
        )

    # Cache introspection ---------------------------------------
    def get_cache_status(self) -> CacheStatus:
        return self._cache.status()

    def get_exchange_rate_status(self) -> ExchangeRateStatus:
        return ExchangeRateStatus(
            **self._cache.status().model_dump(),
            fallback_rate=FALLBACK_USD_TO_GHS,
            api_enabled=self._api_enabled,
        )

    def clear_cache(self) -> None:
        self._cache.clear()

    async def refresh_rates(self) -> ExchangeRateStatus:
        self._cache.clear()
        await self._cache.get_rates()
        return self.get_exchange_rate_status()

    async def monitor(self, usd_amount: float = 100) -> RateMonitorReport:
        """Compare the live USD/GHS rate against the fallback table."""
        live_rate = await self.get_exchange_rate("USD", "GHS")
        ghs_live = await self.convert_usd_to_ghs(usd_amount)
        ghs_fallback = convert_usd_to_ghs_sync(usd_amount)
        difference = abs(ghs_live - ghs_fallback)
        return RateMonitorReport(
            live_rate=live_rate,
            fallback_rate=FALLBACK_USD_TO_GHS,
            rate_deviation_pct=round2((live_rate - FALLBACK_USD_TO_GHS) / FALLBACK_USD_TO_GHS * 100),
            usd_amount=usd_amount,
            ghs_live=ghs_live,
            ghs_fallback=ghs_fallback,
            amount_difference=round2(difference),
            amount_difference_pct=round2(difference / ghs_fallback * 100) if ghs_fallback else 0.0,
            status=self.get_exchange_rate_status(),
        )
