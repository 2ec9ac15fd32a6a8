from __future__ import annotations

import pytest

from human_durations.units import FORMAT_ORDER, UNITS, display_symbol, lookup_unit


def test_units_strictly_increasing_with_exact_factors() -> None:
    ascending = list(reversed(FORMAT_ORDER))
    factors = [big.nanos // small.nanos for small, big in zip(ascending, ascending[1:])]
    assert factors == [1000, 1000, 1000, 60, 60, 24, 7]
    for small, big in zip(ascending, ascending[1:]):
        assert big.nanos % small.nanos == 0


@pytest.mark.parametrize(
    "symbol,millis",
    [
        ("ns", 0.000001),
        ("us", 0.001),
        ("µs", 0.001),
        ("ms", 1.0),
        ("s", 1000.0),
        ("m", 60000.0),
        ("h", 3600000.0),
        ("d", 86400000.0),
        ("w", 604800000.0),
    ],
)
def test_unit_millis(symbol: str, millis: float) -> None:
    unit = lookup_unit(symbol)
    assert unit is not None
    assert unit.millis == pytest.approx(millis)


def test_lookup_unit_is_case_insensitive() -> None:
    assert lookup_unit("MS") is UNITS["ms"]
    assert lookup_unit(" H ") is UNITS["h"]
    assert lookup_unit("mo") is None


def test_unit_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        UNITS["y"] = UNITS["w"]  # type: ignore[index]


def test_display_symbol_ascii() -> None:
    assert display_symbol(UNITS["us"]) == "µs"
    assert display_symbol(UNITS["us"], ascii_only=True) == "us"
    assert display_symbol(UNITS["ms"], ascii_only=True) == "ms"
