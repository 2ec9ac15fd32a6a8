from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from human_durations.duration import Duration
from human_durations.errors import DurationError
from human_durations.units import lookup_unit


ENV_LENIENT = "HUMAN_DURATIONS_LENIENT"
ENV_ASCII = "HUMAN_DURATIONS_ASCII"
ENV_OUTPUT_UNIT = "HUMAN_DURATIONS_OUTPUT_UNIT"
ENV_LOG_LEVEL = "HUMAN_DURATIONS_LOG_LEVEL"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ResolvedSettings:
    lenient: bool
    ascii_only: bool
    output_unit: str
    log_level: int


def _env(name: str) -> Optional[str]:
    val = os.getenv(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def _parse_bool(value: Optional[str], *, name: str) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off)")


def _parse_unit(value: Optional[str], *, name: str) -> Optional[str]:
    if value is None:
        return None
    unit = lookup_unit(value)
    if unit is None:
        raise ValueError(f"{name} must be one of: ns, us, ms, s, m, h, d, w")
    return value.strip().lower()


def _parse_log_level(value: Optional[str], *, name: str) -> Optional[int]:
    if value is None:
        return None
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"{name} must be a logging level name like DEBUG or WARNING")
    return level


def duration_from_env(name: str, default: Duration) -> Duration:
    """
    Reads a duration-valued environment variable such as "1h30m".
    Unset or blank means `default`; a bad value raises ValueError naming the variable.
    """
    raw = _env(name)
    if raw is None:
        return default
    try:
        return Duration.parse(raw)
    except DurationError as e:
        raise ValueError(f"{name} invalid: {e}") from e


def resolve_settings(
    *,
    cli_lenient: Optional[bool] = None,
    cli_ascii: Optional[bool] = None,
    cli_output_unit: Optional[str] = None,
    cli_verbose: bool = False,
) -> ResolvedSettings:
    env_lenient = _parse_bool(_env(ENV_LENIENT), name=ENV_LENIENT)
    lenient = cli_lenient if cli_lenient is not None else (env_lenient if env_lenient is not None else False)

    env_ascii = _parse_bool(_env(ENV_ASCII), name=ENV_ASCII)
    ascii_only = cli_ascii if cli_ascii is not None else (env_ascii if env_ascii is not None else False)

    cli_unit = _parse_unit(cli_output_unit, name="--unit")
    env_unit = _parse_unit(_env(ENV_OUTPUT_UNIT), name=ENV_OUTPUT_UNIT)
    output_unit = cli_unit or env_unit or "ms"

    env_level = _parse_log_level(_env(ENV_LOG_LEVEL), name=ENV_LOG_LEVEL)
    if cli_verbose:
        log_level = logging.DEBUG
    else:
        log_level = env_level if env_level is not None else logging.WARNING

    return ResolvedSettings(
        lenient=lenient,
        ascii_only=ascii_only,
        output_unit=output_unit,
        log_level=log_level,
    )
