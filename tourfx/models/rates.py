from __future__ import annotations
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import BASE_CURRENCY


class ExchangeRatesResponse(BaseModel):
    """Payload of the Open Exchange Rates ``latest.json`` endpoint.

    Only ``rates`` is required; the other fields are informational.
    """

    disclaimer: Optional[str] = None
    license: Optional[str] = None
    timestamp: Optional[int] = None
    base: str = BASE_CURRENCY
    rates: Dict[str, float]

    @field_validator("rates")
    @classmethod
    def non_empty_positive(cls, v: Dict[str, float]) -> Dict[str, float]:
        if not v:
            raise ValueError("rates must not be empty")
        if any(rate < 0 for rate in v.values()):
            raise ValueError("rates must not be negative")
        return v


class CacheStatus(BaseModel):
    cached: bool
    expires_in_seconds: Optional[int] = None
    last_updated: Optional[datetime] = None


class ExchangeRateStatus(CacheStatus):
    fallback_rate: float
    api_enabled: bool


class PaymentConversion(BaseModel):
    original_amount: float
    original_currency: str = "USD"
    payment_amount: float
    payment_currency: str = "GHS"
    exchange_rate: float = Field(..., gt=0)
    conversion_info: str


class RateMonitorReport(BaseModel):
    live_rate: float
    fallback_rate: float
    rate_deviation_pct: float
    usd_amount: float
    ghs_live: float
    ghs_fallback: float
    amount_difference: float
    amount_difference_pct: float
    status: ExchangeRateStatus
