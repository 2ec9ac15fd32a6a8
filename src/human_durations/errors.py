from __future__ import annotations


class DurationError(ValueError):
    """Base class for duration parsing failures."""


class MalformedDuration(DurationError):
    """A number is not followed by a unit, or a number literal is invalid."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"invalid duration format: {text!r}")


class UnknownUnit(DurationError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"unknown duration unit: {symbol!r}")
