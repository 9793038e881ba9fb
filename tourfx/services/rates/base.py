from __future__ import annotations

"""Rate source abstraction.

A source answers one question: what are the current rates, quoted as units of
each currency per 1 unit of the base currency (USD). Caching and conversion are
layered on top and never live in a source.
"""
from abc import ABC, abstractmethod
from typing import Dict, Protocol

from tourfx.models.constants import BASE_CURRENCY


class RateSource(ABC):
    base_currency: str = BASE_CURRENCY

    @abstractmethod
    async def fetch_live(self) -> Dict[str, float]:
        """Return {currency code: units per 1 base unit}. Must not raise."""
        raise NotImplementedError


class SupportsRates(Protocol):
    async def get_rates(self) -> Dict[str, float]: ...
