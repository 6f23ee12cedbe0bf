from __future__ import annotations

import math
from typing import List, Optional

from networth_planner.core.contributions import contribution_for_month
from networth_planner.core.inflation import monthly_inflation_for_month
from networth_planner.models import MonthlyRecord, ProjectionResult, SimulationParameters


def horizon_months(horizon_years: float) -> int:
    return max(1, math.floor(horizon_years * 12))


def nominal_monthly_rate(annual_rate: float) -> float:
    """Monthly rate equivalent to ``annual_rate`` under monthly compounding."""
    return (1.0 + annual_rate) ** (1.0 / 12.0) - 1.0


def effective_monthly_rate(
    nominal_monthly: float, monthly_inflation: float, use_real_rate: bool
) -> float:
    if not use_real_rate:
        return nominal_monthly
    return (1.0 + nominal_monthly) / (1.0 + monthly_inflation) - 1.0


def apply_month(
    balance: float, rate: float, contribution: float, contribute_at_start: bool
) -> float:
    """
    Advance ``balance`` by one month.

    Start-of-month contributions earn that month's growth; end-of-month
    contributions are added after growth and earn nothing until next month.
    """
    if contribute_at_start:
        return (balance + contribution) * (1.0 + rate)
    return balance * (1.0 + rate) + contribution


def simulate(params: SimulationParameters) -> ProjectionResult:
    """
    Build the month-by-month projection for ``params``.

    Order of operations (per month m = 1..N):
      1) Resolve this month's inflation and the effective growth rate
         (real if use_real_rate, otherwise the fixed nominal monthly rate).
      2) Compute the month's contribution from the policy.
      3) Apply contribution and growth in the configured order.
      4) Record the row and check the target.

    Row 0 is the seed state before any contribution.
    """
    months = horizon_months(params.horizon_years)
    nominal = nominal_monthly_rate(params.annual_return_rate)
    schedule = params.inflation_schedule

    balance = float(params.initial_amount)
    contributed = float(params.initial_amount)

    series: List[MonthlyRecord] = [
        MonthlyRecord(
            month_index=0,
            balance=balance,
            cumulative_contributions=contributed,
            cumulative_gains=balance - contributed,
            contribution=0.0,
        )
    ]
    reached: Optional[int] = 0 if balance >= params.target else None
    inflation_total = 0.0

    for month in range(1, months + 1):
        inflation = monthly_inflation_for_month(month, params.default_annual_inflation, schedule)
        inflation_total += inflation
        rate = effective_monthly_rate(nominal, inflation, params.use_real_rate)

        contribution = contribution_for_month(
            month,
            params.base_contribution,
            params.contribution_policy,
            params.default_annual_inflation,
            schedule,
        )

        balance = apply_month(balance, rate, contribution, params.contribute_at_start)
        contributed += contribution

        series.append(
            MonthlyRecord(
                month_index=month,
                balance=balance,
                cumulative_contributions=contributed,
                cumulative_gains=balance - contributed,
                contribution=contribution,
            )
        )

        if reached is None and balance >= params.target:
            reached = month

    return ProjectionResult(
        series=series,
        target_reached_month=reached,
        nominal_monthly_rate=nominal,
        average_monthly_inflation=inflation_total / max(1, months),
    )


__all__ = [
    "apply_month",
    "effective_monthly_rate",
    "horizon_months",
    "nominal_monthly_rate",
    "simulate",
]
