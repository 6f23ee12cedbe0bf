"""Monthly contribution amounts under the supported growth policies."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from networth_planner.core.inflation import annual_inflation_for_year
from networth_planner.models import (
    AnnualGrowthPolicy,
    AnnualInflationLinkedPolicy,
    AnnualRealLinkedPolicy,
    ConstantPolicy,
    ContributionPolicy,
    MonthlyGrowthPolicy,
)


def _grow(base: float, rate: float, periods: int) -> float:
    try:
        return base * (1.0 + rate) ** periods
    except OverflowError:
        return math.copysign(math.inf, base) if base else 0.0


def adjustment_years(month: int) -> int:
    """Full years elapsed at ``month``; step-ups land on months 12, 24, 36, ..."""
    return month // 12


def contribution_for_month(
    month: int,
    base_amount: float,
    policy: ContributionPolicy,
    default_inflation: float,
    schedule: Optional[Sequence[float]] = None,
) -> float:
    """
    Contribution paid in the 1-based ``month``.

    Months 1-11 always pay the unadjusted base amount, except under
    MonthlyGrowthPolicy, which compounds from month 1.
    """
    years = adjustment_years(month)

    if isinstance(policy, ConstantPolicy):
        return base_amount
    if isinstance(policy, MonthlyGrowthPolicy):
        return _grow(base_amount, policy.rate, month - 1)
    if isinstance(policy, AnnualGrowthPolicy):
        return _grow(base_amount, policy.rate, years)
    if isinstance(policy, AnnualInflationLinkedPolicy):
        factor = 1.0
        for k in range(1, years + 1):
            factor *= 1.0 + annual_inflation_for_year(k, default_inflation, schedule)
        return base_amount * factor
    if isinstance(policy, AnnualRealLinkedPolicy):
        factor = 1.0
        for k in range(1, years + 1):
            # inflation and the extra real growth compound together once a year
            factor *= (1.0 + annual_inflation_for_year(k, default_inflation, schedule)) * (
                1.0 + policy.extra_rate
            )
        return base_amount * factor

    raise TypeError(f"unsupported contribution policy: {policy!r}")
