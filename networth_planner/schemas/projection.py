"""Data contracts for the projection, planning and sensitivity endpoints."""

from typing import List, Optional, Tuple

from pydantic import Field

from networth_planner.domain.reporting import ProjectionSummary
from networth_planner.models import (
    MonthlyRecord,
    ProjectionResult,
    SimulationParameters,
    ValueModel,
)


class ProjectionResponse(ValueModel):
    """Full monthly series plus the headline numbers shown above the chart."""

    series: List[MonthlyRecord]
    target_reached_month: Optional[int] = None
    nominal_monthly_rate: float
    average_monthly_inflation: float
    summary: ProjectionSummary

    @classmethod
    def from_result(cls, result: ProjectionResult, summary: ProjectionSummary) -> "ProjectionResponse":
        return cls(**dict(result), summary=summary)


class PlanRequest(SimulationParameters):
    """Simulation inputs plus the horizon the user wants to reach the target in."""

    desired_horizon_years: float = Field(
        15.0, allow_inf_nan=False, description="Horizon for the inverse solvers, in years."
    )

    def parameters(self) -> SimulationParameters:
        return SimulationParameters.model_validate(
            self.model_dump(exclude={"desired_horizon_years"})
        )


class InflationParseRequest(ValueModel):
    text: str = ""


class InflationParseResponse(ValueModel):
    schedule: Tuple[float, ...]
