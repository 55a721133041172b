from __future__ import annotations

from fire_planner.core.schemas import ContributionSolution, ReachablePot, SimulationInput
from fire_planner.utils.logging import get_logger
from fire_planner.utils.projection_engine import project

logger = get_logger("solvers")

DEFAULT_UPPER_BOUND = 100000.0
DEFAULT_ITERATIONS = 40
DEFAULT_MAX_WIDENINGS = 40


def solve_required_contribution(
    current_funds: float,
    target_goal: float,
    years: float,
    contribution_increase_pct: float = 0.0,
    annual_return_pct: float = 0.0,
    *,
    upper_bound: float = DEFAULT_UPPER_BOUND,
    iterations: int = DEFAULT_ITERATIONS,
    widen: bool = True,
    max_widenings: int = DEFAULT_MAX_WIDENINGS,
) -> ContributionSolution:
    """
    Smallest monthly contribution whose final nominal pot reaches target_goal.

    Works in nominal terms (inflation fixed at 0). Bisects [lo, hi] for a fixed
    number of iterations and returns hi, so the answer always reaches the target
    when status is "solved". If hi is too small it is doubled up to max_widenings
    times; when that still isn't enough the result is tagged "bracket_exceeded"
    and carries the last bound tried.
    """

    def reached(monthly: float) -> float:
        return project(
            SimulationInput(
                current_funds=current_funds,
                target_goal=target_goal,
                years=years,
                monthly_contribution=monthly,
                contribution_increase_pct=contribution_increase_pct,
                annual_return_pct=annual_return_pct,
                annual_inflation_pct=0.0,
            )
        ).final_nominal

    fv0 = reached(0.0)
    if fv0 >= target_goal:
        return ContributionSolution(
            monthly_contribution=0.0,
            status="already_reached",
            upper_bound=upper_bound,
            iterations=0,
            final_nominal=fv0,
        )

    lo = 0.0
    hi = float(upper_bound)
    fv_hi = reached(hi)

    widenings = 0
    while widen and fv_hi < target_goal and widenings < max_widenings:
        # hi is known to fall short, so it becomes the new floor
        lo = hi
        hi *= 2
        fv_hi = reached(hi)
        widenings += 1

    if widenings:
        logger.debug("contribution bracket widened %d time(s) to %.2f", widenings, hi)

    if not fv_hi >= target_goal:
        logger.warning(
            "required contribution exceeds search bracket: target=%s upper_bound=%.2f widenings=%d",
            target_goal, hi, widenings,
        )
        return ContributionSolution(
            monthly_contribution=hi,
            status="bracket_exceeded",
            lower_bound=lo,
            upper_bound=hi,
            iterations=0,
            widenings=widenings,
            final_nominal=fv_hi,
        )

    bracket_lo = lo
    for _ in range(iterations):
        mid = (lo + hi) / 2
        fv_mid = reached(mid)
        if fv_mid >= target_goal:
            hi = mid
            fv_hi = fv_mid
        else:
            lo = mid

    return ContributionSolution(
        monthly_contribution=hi,
        status="solved",
        lower_bound=bracket_lo,
        upper_bound=float(upper_bound) * (2 ** widenings),
        iterations=iterations,
        widenings=widenings,
        final_nominal=fv_hi,
    )


def solve_reachable_pot(
    current_funds: float,
    years: float,
    monthly_contribution: float,
    contribution_increase_pct: float = 0.0,
    annual_return_pct: float = 0.0,
) -> ReachablePot:
    """Final nominal pot for fixed inputs (inflation fixed at 0)."""
    res = project(
        SimulationInput(
            current_funds=current_funds,
            target_goal=float("inf"),
            years=years,
            monthly_contribution=monthly_contribution,
            contribution_increase_pct=contribution_increase_pct,
            annual_return_pct=annual_return_pct,
            annual_inflation_pct=0.0,
        )
    )
    return ReachablePot(final_nominal=res.final_nominal, months=len(res.points))
