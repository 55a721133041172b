import math

import pytest

from fire_planner.core.schemas import SimulationInput
from fire_planner.utils.projection_engine import horizon_months, ieee_div, monthly_rate, project, summarize


def _scenario(**overrides) -> SimulationInput:
    base = dict(
        current_funds=100000,
        target_goal=1000000,
        years=10,
        monthly_contribution=1500,
        contribution_increase_pct=0.05,
        annual_return_pct=0.06,
        annual_inflation_pct=0.02,
    )
    base.update(overrides)
    return SimulationInput(**base)


def test_reference_scenario_regression():
    out = project(_scenario())
    assert len(out.points) == 120
    assert out.final_nominal == pytest.approx(479990.21296366601, rel=1e-12)
    assert out.final_real == pytest.approx(419223.64798660064, rel=1e-12)
    assert 0 < out.final_real < out.final_nominal
    # 1M isn't reached in 10 years with these assumptions
    assert out.hit_month is None


def test_first_month_adds_contribution_before_growth():
    out = project(_scenario())
    first = out.points[0]
    assert first.month == 1
    assert first.nominal == pytest.approx(101500 * 1.06 ** (1 / 12), rel=1e-12)
    assert first.nominal == pytest.approx(101994.05638238232, rel=1e-12)
    assert first.real == pytest.approx(101825.88265853196, rel=1e-12)


def test_zero_rates_accumulate_linearly():
    out = project(SimulationInput(current_funds=1000, target_goal=0, years=3, monthly_contribution=250))
    assert out.final_nominal == 1000 + 250 * 36
    assert out.final_real == out.final_nominal


@pytest.mark.parametrize(
    "years,expected",
    [(0.01, 1), (1 / 24, 1), (0.375, 5), (1, 12), (2.5, 30), (10, 120), (0, 1), (-3, 1)],
)
def test_point_count_matches_rounded_horizon(years, expected):
    assert horizon_months(years) == expected
    assert len(project(SimulationInput(years=years)).points) == expected


def test_tiny_horizon_still_simulates_one_month():
    out = project(_scenario(years=0.01))
    assert len(out.points) == 1
    assert out.final_nominal == pytest.approx(101994.05638238232, rel=1e-12)
    assert out.hit_month is None


def test_year_labels_only_on_year_boundaries():
    out = project(_scenario(years=2))
    labels = {p.month: p.label for p in out.points}
    assert labels[12] == "Y1"
    assert labels[24] == "Y2"
    assert all(lbl == "" for m, lbl in labels.items() if m % 12)


def test_step_up_applies_from_month_after_anniversary():
    out = project(SimulationInput(years=2, monthly_contribution=100, contribution_increase_pct=1.0))
    assert out.points[11].nominal == 1200
    assert out.points[12].nominal == 1400
    assert out.final_nominal == 1200 + 12 * 200


def test_step_up_compounds_year_over_year():
    out = project(SimulationInput(years=3, monthly_contribution=100, contribution_increase_pct=0.5))
    assert out.final_nominal == pytest.approx(12 * 100 + 12 * 150 + 12 * 225)


def test_nominal_non_decreasing_for_non_negative_growth():
    out = project(_scenario(years=25))
    vals = [p.nominal for p in out.points]
    assert all(b >= a for a, b in zip(vals, vals[1:]))


def test_deterministic():
    assert project(_scenario()) == project(_scenario())


def test_hit_month_is_first_crossing():
    target = 400000
    out = project(_scenario(target_goal=target))
    assert out.hit_month == 102
    k = out.hit_month
    assert out.points[k - 1].nominal >= target
    assert all(p.nominal < target for p in out.points[: k - 1])


def test_hit_month_kept_after_balance_dips():
    # contributions stop after year one and the pot shrinks at -50%/yr
    sim = SimulationInput(
        target_goal=500,
        years=3,
        monthly_contribution=100,
        contribution_increase_pct=-1.0,
        annual_return_pct=-0.5,
    )
    out = project(sim)
    assert out.hit_month is not None
    assert out.points[-1].nominal < sim.target_goal
    first = next(p.month for p in out.points if p.nominal >= sim.target_goal)
    assert out.hit_month == first


@pytest.mark.parametrize("target", [0, 50000])
def test_target_at_or_below_funds_hits_month_one(target):
    assert project(_scenario(target_goal=target)).hit_month == 1


def test_unreachable_target_never_hits():
    out = project(_scenario(target_goal=float("inf")))
    assert out.hit_month is None


def test_negative_return_is_valid_input():
    out = project(_scenario(annual_return_pct=-0.2, monthly_contribution=0, contribution_increase_pct=0))
    assert len(out.points) == 120
    assert out.final_nominal < 100000


def test_real_track_has_its_own_recurrence():
    sim = _scenario()
    out = project(sim)
    deflated_once = out.final_nominal / (1 + sim.annual_inflation_pct) ** sim.years
    assert deflated_once == pytest.approx(393759.15516145708, rel=1e-9)
    # monthly deflation only discounts each contribution from when it was made
    assert out.final_real > deflated_once


def test_real_track_matches_deflated_nominal_without_contributions():
    sim = SimulationInput(current_funds=50000, years=20, annual_return_pct=0.07, annual_inflation_pct=0.03)
    out = project(sim)
    assert out.final_real == pytest.approx(out.final_nominal / 1.03 ** 20, rel=1e-9)


def test_monthly_rate_is_compound_equivalent():
    assert (1 + monthly_rate(0.06)) ** 12 == pytest.approx(1.06, rel=1e-12)
    assert monthly_rate(0.0) == 0.0
    assert monthly_rate(-1.0) == -1.0
    assert math.isnan(monthly_rate(-1.5))


def test_summarize():
    sim = _scenario(target_goal=400000)
    s = summarize(sim, project(sim))
    assert s.horizon_years == 10
    assert s.hit_month == 102
    assert s.years_to_target == pytest.approx(8.5)
    assert s.target_in_todays_money == pytest.approx(400000 / 1.02 ** 10)
    assert s.monthly_return_rate == pytest.approx(0.0048675505653430484, rel=1e-12)
    assert s.monthly_inflation_rate == pytest.approx(0.0016515813019202241, rel=1e-12)


def test_ieee_div_never_raises():
    assert ieee_div(6.0, 3.0) == 2.0
    assert ieee_div(1.0, 0.0) == math.inf
    assert ieee_div(-1.0, 0.0) == -math.inf
    assert ieee_div(1.0, -0.0) == -math.inf
    assert math.isnan(ieee_div(0.0, 0.0))


def test_inflation_of_minus_hundred_percent_does_not_raise():
    res = project(SimulationInput(current_funds=1000, years=1, annual_inflation_pct=-1.0))
    assert len(res.points) == 12
    assert res.final_nominal == 1000
    assert res.final_real == math.inf


def test_summarize_survives_deflator_overflow():
    sim = SimulationInput(current_funds=1000, target_goal=1e6, years=400, annual_inflation_pct=10.0)
    res = project(sim)
    assert len(res.points) == 4800
    assert summarize(sim, res).target_in_todays_money == 0.0


def test_summarize_survives_deflator_underflow():
    sim = SimulationInput(current_funds=1000, target_goal=1e6, years=400, annual_inflation_pct=-0.999)
    assert summarize(sim, project(sim)).target_in_todays_money == math.inf
