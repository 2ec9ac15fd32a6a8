from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from human_durations.errors import DurationError, MalformedDuration, UnknownUnit
from human_durations.tokenizer import Token, TokenStream, TokenType, clean_input, scan, tokenize
from human_durations.units import UNITS, Unit


logger = logging.getLogger(__name__)


def split_sign(cleaned: str) -> Tuple[int, str]:
    """
    Splits a single leading '+' or '-' off already-cleaned input.
    The sign applies to the whole total, not to the first component.
    """
    if cleaned[:1] == "-":
        return -1, cleaned[1:]
    if cleaned[:1] == "+":
        return 1, cleaned[1:]
    return 1, cleaned


def _tokenize_signed(text: str) -> Tuple[int, TokenStream]:
    sign, body = split_sign(clean_input(text))
    return sign, TokenStream(tokens=tuple(scan(body)))


def _to_number(raw: str, *, text: str) -> float:
    # Strict: one decimal point at most, and at least one digit.
    if raw.count(".") > 1 or raw == ".":
        raise MalformedDuration(text)
    return float(raw)


def _accumulate(
    tokens: Sequence[Token], *, text: str, lenient: bool, units: Mapping[str, Unit]
) -> float:
    total = 0.0
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type is not TokenType.NUMBER:
            index += 1
            continue

        number = _to_number(token.value, text=text)
        if index + 1 >= len(tokens):
            # Trailing bare number is already in milliseconds.
            total += number
            index += 1
            continue

        unit_token = tokens[index + 1]
        if unit_token.type is not TokenType.UNIT:
            raise MalformedDuration(text)

        unit = units.get(unit_token.value)
        if unit is None:
            if not lenient:
                raise UnknownUnit(unit_token.value)
            logger.debug("dropping %s%s from %r (unknown unit)", token.value, unit_token.value, text)
        else:
            total += number * unit.millis
        index += 2
    return total


def parse_millis(text: str, *, lenient: bool = False, units: Mapping[str, Unit] = UNITS) -> float:
    """
    Parses a duration string like "1h30m" or "-2m3.4s" into milliseconds.

    - Units: ns, us/µs, ms, s, m, h, d, w (case and whitespace insensitive).
    - A leading '+'/'-' signs the whole total.
    - A trailing number without a unit counts as milliseconds.
    - Characters that are neither digits, '.', nor letters are skipped only
      when `lenient` is set; unknown unit symbols are skipped likewise.

    Raises MalformedDuration or UnknownUnit.
    """
    sign, stream = _tokenize_signed(text)
    tokens = stream.clean_tokens if lenient else stream.tokens
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens for %r: %s", text, [(t.type.value, t.value) for t in tokens])
    if not tokens:
        return 0.0

    total = _accumulate(tokens, text=text, lenient=lenient, units=units)
    if not math.isfinite(total):
        raise MalformedDuration(text)
    if total == 0:
        return 0.0
    return sign * total


def is_parseable(text: str) -> bool:
    """
    True when the input scans without unrecognized characters.

    This is a scan-level check only. It does not catch structural problems
    the parser reports, such as an unknown unit symbol ("1person") or a
    number with several decimal points ("1.2.3s"). A trailing bare number
    ("5") is valid, matching parse_millis. A leading sign is a character like
    any other here, so "-5s" is not parseable even though parse_millis accepts it.
    """
    return not tokenize(text).has_garbage


@dataclass(frozen=True)
class ParseResult:
    millis: float
    error: Optional[DurationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_parse(text: str, *, lenient: bool = False, units: Mapping[str, Unit] = UNITS) -> ParseResult:
    try:
        return ParseResult(millis=parse_millis(text, lenient=lenient, units=units))
    except DurationError as e:
        return ParseResult(millis=0.0, error=e)


def safe_parse_millis(text: str, default: float = 0.0) -> float:
    """
    Best-effort parse: lenient, and falls back to `default` instead of raising.
    """
    result = try_parse(text, lenient=True)
    if not result.ok:
        logger.debug("safe parse of %r fell back to %r: %s", text, default, result.error)
        return default
    return result.millis
