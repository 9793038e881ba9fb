"""Pydantic models and currency constants for the tour rates service."""

from .constants import (
    BASE_CURRENCY,
    CURRENCY_SYMBOLS,
    FALLBACK_RATES,
)  # re-export
from .rates import (
    CacheStatus,
    ExchangeRateStatus,
    ExchangeRatesResponse,
    PaymentConversion,
    RateMonitorReport,
)

__all__ = [
    "BASE_CURRENCY",
    "CURRENCY_SYMBOLS",
    "FALLBACK_RATES",
    "CacheStatus",
    "ExchangeRateStatus",
    "ExchangeRatesResponse",
    "PaymentConversion",
    "RateMonitorReport",
]
