"""
Inverse solvers for the "plan by horizon" feature.

Both are fixed-iteration bisections, so they always terminate. Neither raises
on adverse inputs: an unreachable contribution comes back as the best bound
found, and an unreachable rate comes back as ``None``.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from networth_planner.core.contributions import contribution_for_month
from networth_planner.core.inflation import (
    average_annual_inflation,
    monthly_inflation_for_month,
)
from networth_planner.core.projection import apply_month, effective_monthly_rate, simulate
from networth_planner.models import SimulationParameters

logger = logging.getLogger(__name__)

CONTRIBUTION_FLOOR_GUESS = 100.0
CONTRIBUTION_MAX_DOUBLINGS = 50
CONTRIBUTION_CEILING = 1e9
CONTRIBUTION_BISECTIONS = 80

RATE_SEARCH_LOW = -0.9
RATE_SEARCH_HIGH = 1.0
RATE_BISECTIONS = 160


def solver_months(horizon_years: float) -> int:
    """Horizon in whole months, rounding half up."""
    return max(1, math.floor(horizon_years * 12 + 0.5))


def required_contribution(params: SimulationParameters, horizon_years: float) -> float:
    """
    Smallest base contribution (approximately) that reaches ``params.target``
    within ``horizon_years``.

    ``params.base_contribution`` and ``params.horizon_years`` are ignored. The
    result is the upper end of the final bisection bracket, so it never
    undershoots the true root when a sufficient bound was found.
    """
    months = solver_months(horizon_years)

    def reaches_target(amount: float) -> bool:
        candidate = params.model_copy(
            update={"base_contribution": amount, "horizon_years": horizon_years}
        )
        result = simulate(candidate)
        if result.target_reached_month is not None and result.target_reached_month <= months:
            return True
        series = result.series
        record = series[months] if months < len(series) else series[-1]
        return record.balance >= params.target

    lo = 0.0
    hi = max(CONTRIBUTION_FLOOR_GUESS, params.target / months)
    doublings = 0
    bounded = reaches_target(hi)
    while not bounded and doublings < CONTRIBUTION_MAX_DOUBLINGS:
        hi *= 2
        doublings += 1
        if hi > CONTRIBUTION_CEILING:
            break
        bounded = reaches_target(hi)

    if not bounded:
        logger.debug(
            "No sufficient contribution bound found after %d doublings (hi=%.2f); "
            "result is approximate",
            doublings,
            hi,
        )

    for _ in range(CONTRIBUTION_BISECTIONS):
        mid = (lo + hi) / 2
        if reaches_target(mid):
            hi = mid
        else:
            lo = mid
    return hi


def final_balance_for_rate(
    params: SimulationParameters, monthly_rate: float, months: int
) -> float:
    """Balance after ``months`` months at a constant nominal ``monthly_rate``."""
    balance = float(params.initial_amount)
    schedule = params.inflation_schedule
    for month in range(1, months + 1):
        inflation = monthly_inflation_for_month(month, params.default_annual_inflation, schedule)
        rate = effective_monthly_rate(monthly_rate, inflation, params.use_real_rate)
        contribution = contribution_for_month(
            month,
            params.base_contribution,
            params.contribution_policy,
            params.default_annual_inflation,
            schedule,
        )
        balance = apply_month(balance, rate, contribution, params.contribute_at_start)
    return balance


def required_rate(params: SimulationParameters, horizon_years: float) -> Optional[float]:
    """
    Annual nominal return needed to reach ``params.target`` within
    ``horizon_years``, or ``None`` when no rate in the search range does.

    ``params.annual_return_rate`` is ignored. With ``use_real_rate`` the found
    rate is real, and is converted back to nominal using the unweighted mean
    of the inflation schedule (or the default inflation).
    """
    months = solver_months(horizon_years)
    lo, hi = RATE_SEARCH_LOW, RATE_SEARCH_HIGH
    found: Optional[float] = None

    for _ in range(RATE_BISECTIONS):
        mid = (lo + hi) / 2
        balance = final_balance_for_rate(params, mid, months)
        if not math.isfinite(balance):
            logger.debug("Rate search stopped on non-finite balance at monthly rate %r", mid)
            break
        if balance >= params.target:
            found = mid
            hi = mid
        else:
            lo = mid

    if found is None:
        return None

    annual = (1.0 + found) ** 12 - 1.0
    if not params.use_real_rate:
        return annual
    inflation = average_annual_inflation(
        params.default_annual_inflation, params.inflation_schedule
    )
    return (1.0 + annual) * (1.0 + inflation) - 1.0
