from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from networth_planner.core.projection import apply_month, horizon_months, simulate
from networth_planner.models import AnnualGrowthPolicy, SimulationParameters


def make_params(**overrides) -> SimulationParameters:
    base = dict(
        initial_amount=0.0,
        base_contribution=100.0,
        annual_return_rate=0.0,
        target=1e12,
        horizon_years=2,
        contribute_at_start=True,
        use_real_rate=False,
        default_annual_inflation=0.0,
    )
    base.update(overrides)
    return SimulationParameters(**base)


def test_horizon_is_coerced_to_at_least_one_month():
    assert horizon_months(0) == 1
    assert horizon_months(-3) == 1
    assert horizon_months(1.99) == 23
    assert horizon_months(10) == 120


@pytest.mark.parametrize("months", [1, 12, 24, 60])
@pytest.mark.parametrize("at_start", [True, False])
def test_zero_rate_accumulates_contributions_only(months, at_start):
    result = simulate(make_params(horizon_years=months / 12, contribute_at_start=at_start))
    assert len(result.series) == months + 1
    assert isclose(result.final.balance, months * 100.0, abs_tol=1e-9)
    assert isclose(result.final.cumulative_gains, 0.0, abs_tol=1e-9)


def test_seed_record_before_any_contribution():
    result = simulate(make_params(initial_amount=2500.0))
    seed = result.series[0]
    assert seed.month_index == 0
    assert seed.balance == 2500.0
    assert seed.cumulative_contributions == 2500.0
    assert seed.cumulative_gains == 0.0
    assert seed.contribution == 0.0
    assert [row.month_index for row in result.series] == list(range(25))


def test_start_of_month_closed_form():
    annual = 0.12
    r = (1 + annual) ** (1 / 12) - 1
    n, contribution, principal = 240, 1000.0, 10000.0
    result = simulate(
        make_params(
            initial_amount=principal,
            base_contribution=contribution,
            annual_return_rate=annual,
            horizon_years=n / 12,
        )
    )
    expected = principal * (1 + r) ** n + contribution * ((1 + r) ** n - 1) / r * (1 + r)
    assert result.series[n].balance == pytest.approx(expected, rel=1e-9)


def test_end_of_month_contribution_earns_nothing_that_month():
    params = make_params(
        initial_amount=1000.0,
        base_contribution=100.0,
        annual_return_rate=0.5,
        horizon_years=1 / 12,
        contribute_at_start=False,
    )
    result = simulate(params)
    r = result.nominal_monthly_rate
    assert isclose(result.series[1].balance, 1000.0 * (1 + r) + 100.0)

    at_start = simulate(params.model_copy(update={"contribute_at_start": True}))
    assert isclose(at_start.series[1].balance, 1100.0 * (1 + r))


def test_apply_month_ordering():
    assert apply_month(100.0, 0.1, 10.0, True) == pytest.approx(121.0)
    assert apply_month(100.0, 0.1, 10.0, False) == pytest.approx(120.0)


def test_real_rate_is_neutral_when_return_equals_inflation():
    result = simulate(
        make_params(
            initial_amount=5000.0,
            base_contribution=0.0,
            annual_return_rate=0.05,
            horizon_years=1,
            use_real_rate=True,
            default_annual_inflation=0.05,
            inflation_schedule=(0.05,),
        )
    )
    assert result.series[12].balance == pytest.approx(5000.0, abs=1e-6)


def test_nominal_rate_ignores_inflation():
    high = simulate(make_params(initial_amount=1000.0, base_contribution=0.0, annual_return_rate=0.08,
                                default_annual_inflation=0.3))
    low = simulate(make_params(initial_amount=1000.0, base_contribution=0.0, annual_return_rate=0.08,
                               default_annual_inflation=0.0))
    assert high.final.balance == low.final.balance
    assert high.average_monthly_inflation > low.average_monthly_inflation == 0.0


def test_average_monthly_inflation_over_horizon():
    result = simulate(make_params(horizon_years=2, inflation_schedule=(0.0, 0.1)))
    monthly_second_year = 1.1 ** (1 / 12) - 1
    assert result.average_monthly_inflation == pytest.approx(monthly_second_year / 2)


def test_target_month_is_first_crossing_and_never_overwritten():
    result = simulate(make_params(target=1200.0, horizon_years=2))
    assert result.target_reached_month == 12
    result_end = simulate(make_params(target=1200.0, horizon_years=2, contribute_at_start=False))
    assert result_end.target_reached_month == 12


def test_target_met_by_seed_is_month_zero():
    result = simulate(make_params(initial_amount=5000.0, target=5000.0))
    assert result.target_reached_month == 0


def test_target_not_reached_is_none():
    result = simulate(
        make_params(base_contribution=10.0, annual_return_rate=0.02, horizon_years=1, target=1_000_000.0)
    )
    assert result.target_reached_month is None


def test_recorded_contribution_follows_policy():
    result = simulate(make_params(contribution_policy=AnnualGrowthPolicy(rate=0.1)))
    assert result.series[11].contribution == 100.0
    assert result.series[12].contribution == pytest.approx(110.0)
    assert result.series[12].cumulative_contributions == pytest.approx(11 * 100.0 + 110.0)


def test_negative_amounts_are_simulated_literally():
    result = simulate(make_params(initial_amount=-500.0, base_contribution=100.0, horizon_years=1))
    assert result.final.balance == pytest.approx(700.0)


def test_rates_are_floored():
    params = make_params(annual_return_rate=-3.0, default_annual_inflation=-2.0, inflation_schedule=(-7.0, 0.1))
    assert params.annual_return_rate == -0.99
    assert params.default_annual_inflation == -0.99
    assert params.inflation_schedule == (-0.99, 0.1)


def test_simulation_is_idempotent():
    params = make_params(
        initial_amount=1234.5,
        annual_return_rate=0.093,
        use_real_rate=True,
        inflation_schedule=(0.03, 0.045),
        contribution_policy=AnnualGrowthPolicy(rate=0.07),
        horizon_years=7.5,
    )
    first = simulate(params)
    second = simulate(params)
    assert first.model_dump() == second.model_dump()


@pytest.mark.parametrize("horizon", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_horizon_is_rejected(horizon):
    with pytest.raises(ValidationError):
        make_params(horizon_years=horizon)
