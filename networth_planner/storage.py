"""Flat key-value snapshot of the planner's form inputs, stored as JSON."""

from __future__ import annotations

import json
import logging
import os
from typing import Literal

from pydantic import Field, ValidationError

from networth_planner.core.inflation import parse_inflation_schedule
from networth_planner.models import (
    AnnualGrowthPolicy,
    AnnualInflationLinkedPolicy,
    AnnualRealLinkedPolicy,
    ConstantPolicy,
    ContributionPolicy,
    MonthlyGrowthPolicy,
    SimulationParameters,
    ValueModel,
)

logger = logging.getLogger(__name__)

PolicyKind = Literal["constant", "monthly_growth", "annual_growth", "annual_inflation", "annual_real"]


class InputSnapshot(ValueModel):
    """Every form input, including those of policies not currently selected."""

    initial_amount: float = 10_000.0
    base_contribution: float = 1_000.0
    annual_return_rate: float = 0.12
    target: float = 1_000_000.0
    horizon_years: float = Field(50.0, allow_inf_nan=False)
    desired_horizon_years: float = Field(15.0, allow_inf_nan=False)
    contribute_at_start: bool = True
    use_real_rate: bool = False
    default_annual_inflation: float = 0.04
    policy_kind: PolicyKind = "constant"
    monthly_growth_rate: float = 0.0
    annual_growth_rate: float = 0.1
    real_extra_rate: float = 0.02
    use_inflation_schedule: bool = False
    inflation_schedule_text: str = ""

    def contribution_policy(self) -> ContributionPolicy:
        if self.policy_kind == "monthly_growth":
            return MonthlyGrowthPolicy(rate=self.monthly_growth_rate)
        if self.policy_kind == "annual_growth":
            return AnnualGrowthPolicy(rate=self.annual_growth_rate)
        if self.policy_kind == "annual_inflation":
            return AnnualInflationLinkedPolicy()
        if self.policy_kind == "annual_real":
            return AnnualRealLinkedPolicy(extra_rate=self.real_extra_rate)
        return ConstantPolicy()

    def to_parameters(self) -> SimulationParameters:
        schedule = None
        if self.use_inflation_schedule:
            schedule = parse_inflation_schedule(self.inflation_schedule_text)
        return SimulationParameters(
            initial_amount=self.initial_amount,
            base_contribution=self.base_contribution,
            annual_return_rate=self.annual_return_rate,
            target=self.target,
            horizon_years=self.horizon_years,
            contribute_at_start=self.contribute_at_start,
            use_real_rate=self.use_real_rate,
            default_annual_inflation=self.default_annual_inflation,
            inflation_schedule=schedule,
            contribution_policy=self.contribution_policy(),
        )


class SnapshotStore:
    """Loads and saves a single :class:`InputSnapshot` at ``path``."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> InputSnapshot:
        if not os.path.exists(self.path):
            return InputSnapshot()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw_text = f.read().strip()
            if not raw_text:
                return InputSnapshot()
            raw = json.loads(raw_text)
            # unknown keys from older snapshots are ignored
            known = {
                key: value
                for key, value in raw.items()
                if key in InputSnapshot.model_fields
                or key in {field.alias for field in InputSnapshot.model_fields.values()}
            }
            return InputSnapshot.model_validate(known)
        except (json.JSONDecodeError, OSError, AttributeError, ValidationError) as exc:
            logger.warning("Failed to load saved snapshot from %s: %s", self.path, exc)
            return InputSnapshot()

    def save(self, snapshot: InputSnapshot) -> None:
        folder = os.path.dirname(self.path)
        if folder and not os.path.exists(folder):
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(snapshot.model_dump(by_alias=True), f, indent=2)
        logger.info("Saved snapshot to %s", self.path)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
            logger.info("Removed snapshot %s", self.path)
