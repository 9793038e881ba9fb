"""Money / rounding helpers.

Centralized so the conversion engine, formatter and payment records use
identical rounding semantics (half-up, like the storefront's Math.round).
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP

from tourfx.models.constants import MINOR_UNITS_PER_MAJOR


def _finite(value: float) -> Decimal:
    if not math.isfinite(value):
        raise ValueError(f"amount must be finite, got {value!r}")
    return Decimal(str(value))


def round2(value: float) -> float:
    return float(_finite(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round0(value: float) -> int:
    return int(_finite(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def pesewas_to_cedis(pesewas: int) -> float:
    """Minor units (pesewas, cents) to major units, e.g. 15000 -> 150.0."""
    return round2(pesewas / MINOR_UNITS_PER_MAJOR)


def cedis_to_pesewas(cedis: float) -> int:
    minor = _finite(cedis) * MINOR_UNITS_PER_MAJOR
    return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
