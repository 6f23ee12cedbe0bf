from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from networth_planner.core.inflation import floor_rate


class ValueModel(BaseModel):
    """Immutable model that reads and writes camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        ser_json_inf_nan="null",
    )


class ConstantPolicy(ValueModel):
    kind: Literal["constant"] = "constant"


class MonthlyGrowthPolicy(ValueModel):
    """Contribution compounds every month, starting from month 1."""

    kind: Literal["monthly_growth"] = "monthly_growth"
    rate: float = 0.0

    @field_validator("rate")
    @classmethod
    def _floor(cls, value: float) -> float:
        return floor_rate(value)


class AnnualGrowthPolicy(ValueModel):
    """Contribution steps up by ``rate`` every twelve months."""

    kind: Literal["annual_growth"] = "annual_growth"
    rate: float = 0.1

    @field_validator("rate")
    @classmethod
    def _floor(cls, value: float) -> float:
        return floor_rate(value)


class AnnualInflationLinkedPolicy(ValueModel):
    """Contribution follows the inflation of each elapsed year."""

    kind: Literal["annual_inflation"] = "annual_inflation"


class AnnualRealLinkedPolicy(ValueModel):
    """Contribution follows inflation plus ``extra_rate`` of real growth per year."""

    kind: Literal["annual_real"] = "annual_real"
    extra_rate: float = 0.02

    @field_validator("extra_rate")
    @classmethod
    def _floor(cls, value: float) -> float:
        return floor_rate(value)


ContributionPolicy = Annotated[
    Union[
        ConstantPolicy,
        MonthlyGrowthPolicy,
        AnnualGrowthPolicy,
        AnnualInflationLinkedPolicy,
        AnnualRealLinkedPolicy,
    ],
    Field(discriminator="kind"),
]


class SimulationParameters(ValueModel):
    """
    Inputs of a single projection run.

    Rates are decimals (0.12 for 12%) and are floored at -0.99. Amounts and the
    horizon are taken literally; the horizon is coerced to at least one month
    by the simulator.
    """

    initial_amount: float = 10_000.0
    base_contribution: float = 1_000.0
    annual_return_rate: float = 0.12
    target: float = 1_000_000.0
    horizon_years: float = Field(50.0, allow_inf_nan=False)
    contribute_at_start: bool = True
    use_real_rate: bool = False
    default_annual_inflation: float = 0.04
    inflation_schedule: Optional[Tuple[float, ...]] = None
    contribution_policy: ContributionPolicy = Field(default_factory=ConstantPolicy)

    @field_validator("annual_return_rate", "default_annual_inflation")
    @classmethod
    def _floor_rates(cls, value: float) -> float:
        return floor_rate(value)

    @field_validator("inflation_schedule")
    @classmethod
    def _floor_schedule(cls, value: Optional[Tuple[float, ...]]) -> Optional[Tuple[float, ...]]:
        if value is None:
            return None
        return tuple(floor_rate(rate) for rate in value)


class MonthlyRecord(ValueModel):
    month_index: int
    balance: float
    cumulative_contributions: float
    # balance - cumulative_contributions
    cumulative_gains: float
    contribution: float


class ProjectionResult(ValueModel):
    series: List[MonthlyRecord]
    target_reached_month: Optional[int] = None
    nominal_monthly_rate: float
    average_monthly_inflation: float

    @property
    def final(self) -> MonthlyRecord:
        return self.series[-1]
