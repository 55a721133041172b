from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from fire_planner.core.config import SETTINGS
from fire_planner.utils.logging import get_logger
from fire_planner.utils.passive_income import passive_income_table
from fire_planner.utils.projection_engine import project, summarize
from fire_planner.utils.solvers import solve_reachable_pot, solve_required_contribution
from fire_planner.utils.validators import coerce_number, sanitize_simulation_payload

logger = get_logger("planner_tools")


def tool_project(
    payload: Dict[str, Any],
    *,
    percent: bool = False,
    strict: bool = False,
    rates: Optional[Sequence[float]] = None,
    show_real: Optional[bool] = None,
) -> Dict[str, Any]:
    sim, report = sanitize_simulation_payload(payload or {}, percent=percent, strict=strict)
    res = project(sim)
    summary = summarize(sim, res)

    use_real = SETTINGS.show_real if show_real is None else show_real
    pot = res.final_real if use_real else res.final_nominal
    table = passive_income_table(pot, SETTINGS.passive_rates if rates is None else rates)

    logger.debug("projection: months=%d hit_month=%s", len(res.points), res.hit_month)
    return {
        "input": sim.model_dump(),
        "result": res.model_dump(),
        "summary": summary.model_dump(),
        "passive_income": [r.model_dump() for r in table],
        "basis": "real" if use_real else "nominal",
        "warnings": [w.message for w in report.warnings],
    }


def tool_solve_contribution(payload: Dict[str, Any], *, percent: bool = False, strict: bool = False) -> Dict[str, Any]:
    sim, report = sanitize_simulation_payload(payload or {}, percent=percent, strict=strict)
    sol = solve_required_contribution(
        current_funds=sim.current_funds,
        target_goal=sim.target_goal,
        years=sim.years,
        contribution_increase_pct=sim.contribution_increase_pct,
        annual_return_pct=sim.annual_return_pct,
        upper_bound=SETTINGS.solver_upper_bound,
        iterations=SETTINGS.solver_iterations,
        widen=SETTINGS.solver_widen,
        max_widenings=SETTINGS.solver_max_widenings,
    )
    out = sol.model_dump()
    out["warnings"] = [w.message for w in report.warnings]
    return out


def tool_reachable_pot(payload: Dict[str, Any], *, percent: bool = False, strict: bool = False) -> Dict[str, Any]:
    sim, report = sanitize_simulation_payload(payload or {}, percent=percent, strict=strict)
    pot = solve_reachable_pot(
        current_funds=sim.current_funds,
        years=sim.years,
        monthly_contribution=sim.monthly_contribution,
        contribution_increase_pct=sim.contribution_increase_pct,
        annual_return_pct=sim.annual_return_pct,
    )
    out = pot.model_dump()
    out["warnings"] = [w.message for w in report.warnings]
    return out


def tool_passive_income(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = dict(payload or {})
    pot = coerce_number(p.get("final_pot", p.get("finalPot")))
    rates = [coerce_number(r) for r in (p.get("rates") or SETTINGS.passive_rates)]
    return {
        "final_pot": pot,
        "rows": [r.model_dump() for r in passive_income_table(pot, rates)],
    }
