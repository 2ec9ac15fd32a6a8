from __future__ import annotations

import math
from typing import List

from human_durations.units import FORMAT_ORDER, NANOS_PER_MILLI, display_symbol


def format_millis(millis: float, *, ascii_only: bool = False) -> str:
    """
    Formats milliseconds as a canonical duration string, e.g. 5400000 -> "1h30m".

    Components are emitted largest unit first, zero components are left out,
    and anything below one nanosecond is dropped. Zero formats as "0".
    With `ascii_only`, microseconds are written "us" instead of "µs".
    """
    if not math.isfinite(millis):
        raise ValueError(f"cannot format non-finite duration: {millis!r}")

    nanos = abs(millis) * NANOS_PER_MILLI
    nearest = round(nanos)
    # Float noise leaves 0.001 ms a hair short of 1000ns; snap only within a few ulps, floor otherwise.
    if abs(nanos - nearest) <= max(1e-6, 8 * math.ulp(nanos)):
        remaining = int(nearest)
    else:
        remaining = math.floor(nanos)
    if remaining == 0:
        return "0"

    parts: List[str] = []
    for unit in FORMAT_ORDER:
        count, remaining = divmod(remaining, unit.nanos)
        if count > 0:
            parts.append(f"{count}{display_symbol(unit, ascii_only=ascii_only)}")

    sign = "-" if millis < 0 else ""
    return sign + "".join(parts)
