"""Inflation schedule lookups and free-text schedule parsing."""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence, Tuple

RATE_FLOOR = -0.99

_TOKEN_SEPARATORS = re.compile(r"[,;\s]+")
_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def floor_rate(rate: float) -> float:
    """Clamp a rate so that ``1 + rate`` stays strictly positive."""
    return max(RATE_FLOOR, rate)


def annual_inflation_for_year(
    year_index: int,
    default_rate: float,
    schedule: Optional[Sequence[float]] = None,
) -> float:
    """
    Annual inflation for the 1-based ``year_index``.

    Without a schedule the default rate applies to every year. Past the end of
    the schedule the last known value is held indefinitely.
    """
    if not schedule:
        return default_rate
    if year_index - 1 < len(schedule):
        return schedule[year_index - 1]
    return schedule[-1]


def monthly_inflation_for_month(
    month: int,
    default_rate: float,
    schedule: Optional[Sequence[float]] = None,
) -> float:
    # months 1-12 -> year 1, 13-24 -> year 2, ...
    year_index = math.ceil(month / 12)
    annual = annual_inflation_for_year(year_index, default_rate, schedule)
    return (1.0 + annual) ** (1.0 / 12.0) - 1.0


def average_annual_inflation(
    default_rate: float,
    schedule: Optional[Sequence[float]] = None,
) -> float:
    """Unweighted mean of the schedule, or the default rate without one."""
    if not schedule:
        return default_rate
    return sum(schedule) / len(schedule)


def _to_number(token: str) -> Optional[float]:
    # plain ASCII decimal notation only; float() alone would take "1_0" or other digits
    if not _NUMBER.fullmatch(token):
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_inflation_schedule(text: str) -> Tuple[float, ...]:
    """
    Tokenize a free-text inflation table such as ``"0.045; 0.04\\n0.035%"``.

    Tokens that are not finite numbers are dropped silently.
    """
    values = []
    for raw in _TOKEN_SEPARATORS.split(text or ""):
        token = raw.strip()
        if not token:
            continue
        token = token.replace("%", "").replace(",", ".", 1)
        value = _to_number(token)
        if value is None:
            continue
        values.append(floor_rate(value))
    return tuple(values)
