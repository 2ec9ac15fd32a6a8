from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


NANOS_PER_MILLI = 1_000_000


@dataclass(frozen=True)
class Unit:
    symbol: str
    nanos: int

    @property
    def millis(self) -> float:
        return self.nanos / NANOS_PER_MILLI


NANOSECOND = Unit("ns", 1)
MICROSECOND = Unit("µs", 1_000)
MILLISECOND = Unit("ms", 1_000 * MICROSECOND.nanos)
SECOND = Unit("s", 1_000 * MILLISECOND.nanos)
MINUTE = Unit("m", 60 * SECOND.nanos)
HOUR = Unit("h", 60 * MINUTE.nanos)
DAY = Unit("d", 24 * HOUR.nanos)
WEEK = Unit("w", 7 * DAY.nanos)

# Largest first; the formatter walks this order.
FORMAT_ORDER: Tuple[Unit, ...] = (WEEK, DAY, HOUR, MINUTE, SECOND, MILLISECOND, MICROSECOND, NANOSECOND)

UNITS: Mapping[str, Unit] = MappingProxyType(
    {
        "ns": NANOSECOND,
        "us": MICROSECOND,
        "µs": MICROSECOND,
        "μs": MICROSECOND,  # greek small letter mu
        "ms": MILLISECOND,
        "s": SECOND,
        "m": MINUTE,
        "h": HOUR,
        "d": DAY,
        "w": WEEK,
    }
)

ASCII_SYMBOLS: Mapping[str, str] = MappingProxyType({"µs": "us"})


def lookup_unit(symbol: str, *, units: Mapping[str, Unit] = UNITS) -> Optional[Unit]:
    """
    Case-insensitive lookup of a unit symbol. Returns None when unknown.
    """
    return units.get(symbol.strip().lower())


def display_symbol(unit: Unit, *, ascii_only: bool = False) -> str:
    if ascii_only:
        return ASCII_SYMBOLS.get(unit.symbol, unit.symbol)
    return unit.symbol
