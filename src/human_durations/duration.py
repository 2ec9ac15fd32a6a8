from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from human_durations.errors import UnknownUnit
from human_durations.formatter import format_millis
from human_durations.parser import parse_millis, safe_parse_millis, try_parse
from human_durations.units import lookup_unit


_MILLIS_PER_SECOND = 1000.0


@dataclass(frozen=True)
class Duration:
    """
    Immutable signed time span, stored in milliseconds.

    Arithmetic is exposed as named methods (add/subtract/scale/compare) rather
    than operators; conversions to and from timedelta are explicit.
    """

    millis: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.millis):
            raise ValueError(f"duration must be finite, got {self.millis!r}")
        # Normalize -0.0 and ints to a plain float.
        object.__setattr__(self, "millis", float(self.millis) + 0.0)

    # -- constructors

    @classmethod
    def zero(cls) -> "Duration":
        return cls(0.0)

    @classmethod
    def of(cls, amount: float, unit: str = "ms") -> "Duration":
        resolved = lookup_unit(unit)
        if resolved is None:
            raise UnknownUnit(unit)
        return cls(amount * resolved.millis)

    @classmethod
    def parse(cls, text: str, *, lenient: bool = False) -> "Duration":
        return cls(parse_millis(text, lenient=lenient))

    @classmethod
    def try_parse(cls, text: str) -> Optional["Duration"]:
        result = try_parse(text)
        if not result.ok:
            return None
        return cls(result.millis)

    @classmethod
    def safe_parse(cls, text: str, default: Optional["Duration"] = None) -> "Duration":
        fallback = default if default is not None else cls.zero()
        return cls(safe_parse_millis(text, default=fallback.millis))

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "Duration":
        return cls(td / timedelta(milliseconds=1))

    # -- accessors

    def total_seconds(self) -> float:
        return self.millis / _MILLIS_PER_SECOND

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.millis)

    def in_unit(self, unit: str) -> float:
        resolved = lookup_unit(unit)
        if resolved is None:
            raise UnknownUnit(unit)
        return self.millis / resolved.millis

    def format(self, *, ascii_only: bool = False) -> str:
        return format_millis(self.millis, ascii_only=ascii_only)

    def __str__(self) -> str:
        return self.format()

    def is_zero(self) -> bool:
        return self.millis == 0

    # -- arithmetic

    def add(self, other: "Duration") -> "Duration":
        return Duration(self.millis + other.millis)

    def subtract(self, other: "Duration") -> "Duration":
        return Duration(self.millis - other.millis)

    def scale(self, factor: float) -> "Duration":
        return Duration(self.millis * factor)

    def negate(self) -> "Duration":
        return Duration(-self.millis)

    def abs(self) -> "Duration":
        return Duration(abs(self.millis))

    def compare(self, other: "Duration") -> int:
        if self.millis < other.millis:
            return -1
        if self.millis > other.millis:
            return 1
        return 0

    # -- datetime helpers

    def after(self, moment: datetime) -> datetime:
        return moment + self.to_timedelta()

    def before(self, moment: datetime) -> datetime:
        return moment - self.to_timedelta()

    @classmethod
    def since(cls, moment: datetime, *, now: Optional[datetime] = None) -> "Duration":
        """Time elapsed from `moment` to `now` (defaults to the current time in moment's tz)."""
        current = now if now is not None else datetime.now(moment.tzinfo)
        return cls.from_timedelta(current - moment)

    @classmethod
    def until(cls, moment: datetime, *, now: Optional[datetime] = None) -> "Duration":
        current = now if now is not None else datetime.now(moment.tzinfo)
        return cls.from_timedelta(moment - current)

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "Duration":
        """`start - end`, so a later start gives a positive duration."""
        return cls.from_timedelta(start - end)
