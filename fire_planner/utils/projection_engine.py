from __future__ import annotations

import math
from typing import List, Optional

from fire_planner.core.schemas import ProjectionPoint, ProjectionResult, ProjectionSummary, SimulationInput


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def horizon_months(years: float) -> int:
    """Whole months in the horizon, never fewer than one."""
    return max(1, round_half_up(years * 12))


def monthly_rate(r_annual: float) -> float:
    """Equivalent monthly compounding rate for an annual rate."""
    base = 1.0 + r_annual
    if base < 0:
        # no real 12th root; behave like IEEE pow and let NaN flow through
        return math.nan
    return math.pow(base, 1.0 / 12.0) - 1.0


def year_label(month: int) -> str:
    return f"Y{month // 12}" if month % 12 == 0 else ""


def ieee_div(a: float, b: float) -> float:
    """Division that returns +-inf or NaN on a zero divisor instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def project(sim: SimulationInput) -> ProjectionResult:
    """Simulate the portfolio month by month.

    Each month the contribution is added first and then grows with that month's
    return. The real balance follows its own recurrence, deflated every month,
    rather than deflating the nominal balance once at the end; the two differ
    slightly and callers rely on the monthly version. The step-up is applied after
    every 12th month and takes effect from the following month.

    Pure: no validation, no logging, no I/O.
    """
    n_months = horizon_months(sim.years)
    mr = monthly_rate(sim.annual_return_pct)
    mi = monthly_rate(sim.annual_inflation_pct)

    bal_nominal = sim.current_funds
    bal_real = sim.current_funds
    contrib = sim.monthly_contribution

    points: List[ProjectionPoint] = []
    hit_month: Optional[int] = None

    for m in range(1, n_months + 1):
        bal_nominal += contrib
        bal_real += contrib

        bal_nominal *= 1 + mr
        bal_real = ieee_div(bal_real * (1 + mr), 1 + mi)

        if m % 12 == 0:
            contrib *= 1 + sim.contribution_increase_pct

        points.append(ProjectionPoint(month=m, label=year_label(m), nominal=bal_nominal, real=bal_real))

        if hit_month is None and bal_nominal >= sim.target_goal:
            hit_month = m

    return ProjectionResult(
        points=points,
        final_nominal=points[-1].nominal if points else sim.current_funds,
        final_real=points[-1].real if points else sim.current_funds,
        hit_month=hit_month,
    )


def summarize(sim: SimulationInput, result: ProjectionResult) -> ProjectionSummary:
    # Target deflated over the requested years, not the rounded horizon.
    if sim.annual_inflation_pct > -1:
        try:
            deflator = math.pow(1 + sim.annual_inflation_pct, sim.years)
        except OverflowError:
            deflator = math.inf
        target_today = ieee_div(sim.target_goal, deflator)
    else:
        target_today = math.nan
    return ProjectionSummary(
        horizon_years=len(result.points) / 12,
        hit_month=result.hit_month,
        years_to_target=(result.hit_month / 12) if result.hit_month else None,
        target_in_todays_money=target_today,
        monthly_return_rate=monthly_rate(sim.annual_return_pct),
        monthly_inflation_rate=monthly_rate(sim.annual_inflation_pct),
        final_nominal=result.final_nominal,
        final_real=result.final_real,
    )
