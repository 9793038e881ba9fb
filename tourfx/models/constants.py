"""Currency constants shared by the rate source, conversion engine and formatter.

The fallback table is quoted like the live provider: units of the currency per
1 USD. It is read-only; callers that need a mutable copy take ``dict(...)``.
"""

from types import MappingProxyType
from typing import Dict, Mapping

BASE_CURRENCY = "USD"

FALLBACK_RATES: Mapping[str, float] = MappingProxyType(
    {
        "GHS": 15.5,  # 1 USD = 15.5 GHS
        "EUR": 0.85,
        "GBP": 0.73,
        "CAD": 1.25,
    }
)

# Rate used by the synchronous first-paint helpers
FALLBACK_USD_TO_GHS: float = FALLBACK_RATES["GHS"]
FALLBACK_GHS_TO_USD: float = 1 / FALLBACK_USD_TO_GHS

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "GHS": "GH₵",
    "EUR": "€",
    "GBP": "£",
    "CAD": "C$",
}

MINOR_UNITS_PER_MAJOR = 100  # pesewas per cedi, cents per dollar

# Largest amount accepted over HTTP; keeps amount * rate well inside float range
MAX_AMOUNT = 1_000_000_000_000
