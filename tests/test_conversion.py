import itertools

import pytest

CODES = ["USD", "GHS", "EUR", "GBP", "JPY", "CAD"]


@pytest.mark.parametrize("code", ["USD", "GHS", "XYZ"])
@pytest.mark.asyncio
async def test_identity_rate_is_one_without_cache_access(engine, source, code):
    assert await engine.get_rate(code, code) == 1
    assert source.calls == 0


@pytest.mark.asyncio
async def test_from_base_uses_live_then_fallback_then_one(engine):
    assert await engine.get_rate("USD", "GHS") == 12.0
    assert await engine.get_rate("USD", "CAD") == 1.25  # only in fallback table
    assert await engine.get_rate("USD", "XYZ") == 1.0


@pytest.mark.asyncio
async def test_to_base_inverts(engine):
    assert await engine.get_rate("GHS", "USD") == pytest.approx(1 / 12)
    assert await engine.get_rate("CAD", "USD") == pytest.approx(0.8)
    assert await engine.get_rate("XYZ", "USD") == 1.0


@pytest.mark.asyncio
async def test_zero_rate_counts_as_missing(make_engine):
    engine = make_engine({"GHS": 0.0, "ZZZ": 0.0})
    assert await engine.get_rate("USD", "GHS") == 15.5
    assert await engine.get_rate("ZZZ", "USD") == 1.0
    assert await engine.get_rate("ZZZ", "EUR") == 0.85


@pytest.mark.asyncio
async def test_cross_rate_triangulates_through_usd(engine):
    assert await engine.get_rate("EUR", "GBP") == pytest.approx(0.8 / 0.9)
    assert await engine.get_rate("EUR", "CAD") == pytest.approx(1.25 / 0.9)
    assert await engine.get_rate("GHS", "XYZ") == pytest.approx(1 / 12)


@pytest.mark.asyncio
async def test_codes_are_case_insensitive(engine):
    assert await engine.get_rate("usd", "ghs") == 12.0
    assert await engine.get_rate("Usd", "USD") == 1


@pytest.mark.asyncio
async def test_convert_rounds_to_cents(engine):
    assert await engine.convert(100, "USD", "GHS") == 1200.0
    assert await engine.convert(10, "GHS", "USD") == 0.83
    assert await engine.convert(1.005, "USD", "USD") == 1.01


@pytest.mark.asyncio
async def test_convert_zero_is_zero(engine):
    for a, b in itertools.product(CODES, repeat=2):
        assert await engine.convert(0, a, b) == 0


@pytest.mark.asyncio
async def test_rates_are_reciprocal(engine):
    for a, b in itertools.permutations(CODES, 2):
        forward = await engine.get_rate(a, b)
        backward = await engine.get_rate(b, a)
        assert forward * backward == pytest.approx(1)


@pytest.mark.asyncio
async def test_convert_round_trip_within_rounding(engine):
    for a, b in itertools.permutations(CODES, 2):
        there = await engine.convert(1000, a, b)
        back = await engine.convert(there, b, a)
        assert back == pytest.approx(1000, abs=0.01 * max(1.0, await engine.get_rate(b, a)))


@pytest.mark.asyncio
async def test_convert_detailed(engine):
    result = await engine.convert_detailed(50, "usd", "eur")
    assert result.from_currency == "USD"
    assert result.to_currency == "EUR"
    assert result.rate == 0.9
    assert result.converted_amount == 45.0
