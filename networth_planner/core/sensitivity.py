"""Time-to-target sensitivity across contribution and return-rate perturbations."""

from __future__ import annotations

from typing import List, Optional, Sequence

from networth_planner.core.inflation import floor_rate
from networth_planner.core.projection import simulate
from networth_planner.models import SimulationParameters, ValueModel

DEFAULT_CONTRIBUTION_DELTAS = (-0.2, -0.1, 0.0, 0.1, 0.2)
DEFAULT_RATE_DELTAS = (-0.02, -0.01, 0.0, 0.01, 0.02)


class SensitivityCell(ValueModel):
    contribution_delta: float
    rate_delta: float
    target_reached_month: Optional[int] = None


class SensitivityRow(ValueModel):
    contribution_delta: float
    base_contribution: float
    cells: List[SensitivityCell]


class SensitivityGrid(ValueModel):
    """
    Rows vary the base contribution (relative change), columns vary the
    annual return rate (absolute change, in percentage points).
    """

    annual_rates: List[float]
    rows: List[SensitivityRow]


def sensitivity_grid(
    params: SimulationParameters,
    contribution_deltas: Sequence[float] = DEFAULT_CONTRIBUTION_DELTAS,
    rate_deltas: Sequence[float] = DEFAULT_RATE_DELTAS,
) -> SensitivityGrid:
    rates = [floor_rate(params.annual_return_rate + delta) for delta in rate_deltas]

    rows: List[SensitivityRow] = []
    for contribution_delta in contribution_deltas:
        contribution = max(0.0, params.base_contribution * (1 + contribution_delta))
        cells = []
        for rate_delta, rate in zip(rate_deltas, rates):
            result = simulate(
                params.model_copy(
                    update={"base_contribution": contribution, "annual_return_rate": rate}
                )
            )
            cells.append(
                SensitivityCell(
                    contribution_delta=contribution_delta,
                    rate_delta=rate_delta,
                    target_reached_month=result.target_reached_month,
                )
            )
        rows.append(
            SensitivityRow(
                contribution_delta=contribution_delta,
                base_contribution=contribution,
                cells=cells,
            )
        )

    return SensitivityGrid(annual_rates=rates, rows=rows)
