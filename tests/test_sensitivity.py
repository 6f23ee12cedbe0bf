from __future__ import annotations

import pytest

from networth_planner.core.projection import simulate
from networth_planner.core.sensitivity import sensitivity_grid
from networth_planner.models import SimulationParameters


def base_params(**overrides) -> SimulationParameters:
    values = dict(
        initial_amount=10_000.0,
        base_contribution=1_000.0,
        annual_return_rate=0.08,
        target=500_000.0,
        horizon_years=40,
        default_annual_inflation=0.04,
    )
    values.update(overrides)
    return SimulationParameters(**values)


def test_grid_shape_and_axes():
    grid = sensitivity_grid(base_params())
    assert len(grid.rows) == 5
    assert all(len(row.cells) == 5 for row in grid.rows)
    assert grid.annual_rates == pytest.approx([0.06, 0.07, 0.08, 0.09, 0.10])
    assert [row.base_contribution for row in grid.rows] == pytest.approx([800.0, 900.0, 1000.0, 1100.0, 1200.0])


def test_centre_cell_matches_plain_projection():
    params = base_params()
    grid = sensitivity_grid(params)
    assert grid.rows[2].cells[2].target_reached_month == simulate(params).target_reached_month


def test_more_money_or_return_never_takes_longer():
    grid = sensitivity_grid(base_params())
    months = [[cell.target_reached_month for cell in row.cells] for row in grid.rows]
    for row in months:
        assert row == sorted(row, reverse=True)
    for column in zip(*months):
        assert list(column) == sorted(column, reverse=True)


def test_perturbed_inputs_are_floored():
    grid = sensitivity_grid(
        base_params(base_contribution=100.0, annual_return_rate=-0.985),
        contribution_deltas=(-2.0, 0.0),
        rate_deltas=(-0.02, 0.0),
    )
    assert grid.annual_rates == pytest.approx([-0.99, -0.985])
    assert grid.rows[0].base_contribution == 0.0


def test_unreachable_cells_are_none():
    grid = sensitivity_grid(base_params(target=1e12, horizon_years=5))
    assert all(cell.target_reached_month is None for row in grid.rows for cell in row.cells)
