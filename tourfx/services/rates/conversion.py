from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from tourfx.models.constants import BASE_CURRENCY, FALLBACK_RATES
from tourfx.services.money import round2
from .base import SupportsRates

"""Pairwise rate & amount conversion.

All rates come from the injected cache, quoted per 1 USD. Pairs not involving
USD are triangulated through it (rate_to / rate_from).

Missing data never raises: a code absent from both the live map and the
fallback table resolves to a multiplier of 1. Zero counts as absent.
"""


@dataclass(frozen=True)
class ConversionResult:
    original_amount: float
    from_currency: str
    to_currency: str
    rate: float
    converted_amount: float


def _resolve(rates: Mapping[str, float], currency: str) -> float | None:
    return rates.get(currency) or FALLBACK_RATES.get(currency) or None


class ConversionEngine:
    def __init__(self, rate_cache: SupportsRates):
        self._rates = rate_cache

    async def get_rate(self, from_currency: str, to_currency: str) -> float:
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()
        if from_currency == to_currency:
            return 1.0

        rates = await self._rates.get_rates()
        if from_currency == BASE_CURRENCY:
            return _resolve(rates, to_currency) or 1.0
        if to_currency == BASE_CURRENCY:
            rate = _resolve(rates, from_currency)
            return 1 / rate if rate else 1.0

        rate_from = _resolve(rates, from_currency) or 1.0
        rate_to = _resolve(rates, to_currency) or 1.0
        return rate_to / rate_from

    async def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        rate = await self.get_rate(from_currency, to_currency)
        return round2(amount * rate)

    async def convert_detailed(
        self, amount: float, from_currency: str, to_currency: str
    ) -> ConversionResult:
        rate = await self.get_rate(from_currency, to_currency)
        return ConversionResult(
            original_amount=amount,
            from_currency=from_currency.upper(),
            to_currency=to_currency.upper(),
            rate=rate,
            converted_amount=round2(amount * rate),
        )
