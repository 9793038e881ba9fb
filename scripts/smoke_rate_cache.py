"""Smoke script for the exchange rate cache.

Demonstrates:
 1. First access triggers a source fetch (live if OPEN_EXCHANGE_RATES_API_KEY is set,
    fallback table otherwise).
 2. Subsequent access within TTL reuses the snapshot (same fetched_at).
 3. Forced refresh via clear() fetches again.
 4. Sync vs live price strings side by side.

NOTE: This is a lightweight diagnostic and not a formal test.
"""

import asyncio
from pprint import pprint

from tourfx.core.config import get_settings
from tourfx.core.logging import init_logging
from tourfx.services.currency import CurrencyService, format_price_with_conversion_sync


async def run():
    settings = get_settings()
    init_logging(debug=settings.debug)
    svc = CurrencyService.from_settings(settings)
    out = {}

    out["initial_rate"] = await svc.get_exchange_rate("USD", "GHS")
    out["initial_status"] = svc.get_exchange_rate_status().model_dump(mode="json")

    out["second_rate"] = await svc.get_exchange_rate("USD", "GHS")
    out["second_status"] = svc.get_exchange_rate_status().model_dump(mode="json")

    out["after_refresh"] = (await svc.refresh_rates()).model_dump(mode="json")

    out["prices"] = {
        "sync": format_price_with_conversion_sync(100),
        "live": await svc.format_price_with_conversion(100),
    }
    out["payment"] = (await svc.prepare_payment_conversion(100)).model_dump()

    pprint(out)


if __name__ == "__main__":
    asyncio.run(run())
