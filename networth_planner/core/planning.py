from __future__ import annotations

from typing import Optional

from networth_planner.core.solvers import required_contribution, required_rate
from networth_planner.models import SimulationParameters, ValueModel


class HorizonPlan(ValueModel):
    desired_horizon_years: float
    required_contribution: float
    # None when no rate in the search range reaches the target
    required_rate: Optional[float] = None


def plan_for_horizon(params: SimulationParameters, desired_horizon_years: float) -> HorizonPlan:
    """Run both inverse solvers for the same desired horizon."""
    return HorizonPlan(
        desired_horizon_years=desired_horizon_years,
        required_contribution=required_contribution(params, desired_horizon_years),
        required_rate=required_rate(params, desired_horizon_years),
    )
