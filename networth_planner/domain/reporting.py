from __future__ import annotations

from typing import Optional

import pandas as pd

from networth_planner.models import ProjectionResult, ValueModel

CSV_COLUMNS = [
    "month",
    "contribution",
    "balance",
    "cumulative_contributions",
    "cumulative_gains",
]


class ProjectionSummary(ValueModel):
    final_balance: float
    total_contributions: float
    total_gains: float
    target_reached: bool
    target_reached_month: Optional[int] = None
    time_to_target: Optional[str] = None


def months_to_text(total_months: int) -> str:
    """Render a month count as e.g. ``"2 years and 1 month"`` or ``"5 months"``."""
    years, months = divmod(total_months, 12)
    parts = []
    if years > 0:
        parts.append(f"{years} {'year' if years == 1 else 'years'}")
    parts.append(f"{months} {'month' if months == 1 else 'months'}")
    return " and ".join(parts)


def summarize(result: ProjectionResult) -> ProjectionSummary:
    final = result.final
    reached = result.target_reached_month
    return ProjectionSummary(
        final_balance=final.balance,
        total_contributions=final.cumulative_contributions,
        total_gains=final.cumulative_gains,
        target_reached=reached is not None,
        target_reached_month=reached,
        time_to_target=months_to_text(reached) if reached is not None else None,
    )


def projection_frame(result: ProjectionResult) -> pd.DataFrame:
    """One row per month, seed row included, in export column order."""
    records = [
        {
            "month": row.month_index,
            "contribution": row.contribution,
            "balance": row.balance,
            "cumulative_contributions": row.cumulative_contributions,
            "cumulative_gains": row.cumulative_gains,
        }
        for row in result.series
    ]
    return pd.DataFrame(records, columns=CSV_COLUMNS)


def projection_csv(result: ProjectionResult) -> str:
    """Comma-separated export; overflowed (non-finite) values are left empty."""
    frame = projection_frame(result).replace([float("inf"), float("-inf")], float("nan"))
    return frame.to_csv(index=False, na_rep="", lineterminator="\n")
