from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from tourfx.models.constants import BASE_CURRENCY, MAX_AMOUNT
from tourfx.models.rates import ExchangeRateStatus, PaymentConversion, RateMonitorReport
from tourfx.services.currency import (
    CurrencyService,
    format_price,
    format_price_with_conversion_sync,
    prepare_payment_conversion_sync,
)

"""Rates router exposing the currency layer to the storefront & admin panel.

Endpoints:
    - GET /rates                      -> current USD-based rate map
    - GET /rates/status               -> cache + API status
    - GET /rates/exchange             -> rate between two currencies
    - GET /rates/convert              -> converted amount (2 decimals)
    - GET /rates/format               -> display string for an amount
    - GET /rates/format-with-conversion, /rates/payment-conversion
                                      -> USD price with GHS equivalent (live or fallback)
    - GET /rates/monitor              -> live vs fallback comparison
    - POST /rates/refresh, DELETE /rates/cache -> force refresh / clear
"""

router = APIRouter(prefix="/rates", tags=["rates"])

CURRENCY_PATTERN = "^[A-Za-z]{3}$"


def currency_query(default: str, alias: str | None = None):
    return Query(default, alias=alias, pattern=CURRENCY_PATTERN)


def amount_query(default, *, allow_negative: bool = False):
    return Query(
        default,
        ge=-MAX_AMOUNT if allow_negative else 0,
        le=MAX_AMOUNT,
        allow_inf_nan=False,
    )


def get_currency_service(request: Request) -> CurrencyService:
    return request.app.state.currency_service


class RatesOut(BaseModel):
    base: str
    rates: Dict[str, float]


class ExchangeRateOut(BaseModel):
    from_currency: str
    to_currency: str
    rate: float


class ConversionOut(BaseModel):
    original_amount: float
    from_currency: str
    to_currency: str
    rate: float
    converted_amount: float


class FormattedOut(BaseModel):
    formatted: str


@router.get("", response_model=RatesOut, summary="Current exchange rates (per 1 USD)")
async def list_rates(svc: CurrencyService = Depends(get_currency_service)):
    return RatesOut(base=BASE_CURRENCY, rates=await svc.get_rates())


@router.get("/status", response_model=ExchangeRateStatus, summary="Cache and API status")
async def rate_status(svc: CurrencyService = Depends(get_currency_service)):
    return svc.get_exchange_rate_status()


@router.get("/exchange", response_model=ExchangeRateOut, summary="Exchange rate between two currencies")
async def exchange_rate(
    from_currency: str = currency_query("USD", alias="from"),
    to_currency: str = currency_query("GHS", alias="to"),
    svc: CurrencyService = Depends(get_currency_service),
):
    rate = await svc.get_exchange_rate(from_currency, to_currency)
    return ExchangeRateOut(
        from_currency=from_currency.upper(), to_currency=to_currency.upper(), rate=rate
    )


@router.get("/convert", response_model=ConversionOut, summary="Convert an amount")
async def convert(
    amount: float = amount_query(...),
    from_currency: str = currency_query("USD", alias="from"),
    to_currency: str = currency_query("GHS", alias="to"),
    svc: CurrencyService = Depends(get_currency_service),
):
    result = await svc.convert_detailed(amount, from_currency, to_currency)
    return ConversionOut(**result.__dict__)


@router.get("/format", response_model=FormattedOut, summary="Format an amount for display")
async def format_amount(
    amount: float = amount_query(..., allow_negative=True),
    currency: str = currency_query("USD"),
):
    return FormattedOut(formatted=format_price(amount, currency))


@router.get(
    "/format-with-conversion",
    response_model=FormattedOut,
    summary="USD price with approximate GHS equivalent",
)
async def format_with_conversion(
    usd_amount: float = amount_query(...),
    live: bool = Query(True, description="false = fallback rate, no cache access"),
    svc: CurrencyService = Depends(get_currency_service),
):
    if not live:
        return FormattedOut(formatted=format_price_with_conversion_sync(usd_amount))
    return FormattedOut(formatted=await svc.format_price_with_conversion(usd_amount))


@router.get("/payment-conversion", response_model=PaymentConversion, summary="USD -> GHS payment record")
async def payment_conversion(
    usd_amount: float = amount_query(...),
    live: bool = Query(True),
    svc: CurrencyService = Depends(get_currency_service),
):
    if not live:
        return prepare_payment_conversion_sync(usd_amount)
    return await svc.prepare_payment_conversion(usd_amount)


@router.get("/monitor", response_model=RateMonitorReport, summary="Live vs fallback rate comparison")
async def monitor(
    usd_amount: float = amount_query(100),
    svc: CurrencyService = Depends(get_currency_service),
):
    return await svc.monitor(usd_amount)


@router.post("/refresh", response_model=ExchangeRateStatus, summary="Clear cache and refetch rates")
async def refresh(svc: CurrencyService = Depends(get_currency_service)):
    return await svc.refresh_rates()


@router.delete("/cache", response_model=ExchangeRateStatus, summary="Clear the rate cache")
async def clear_cache(svc: CurrencyService = Depends(get_currency_service)):
    svc.clear_cache()
    return svc.get_exchange_rate_status()
