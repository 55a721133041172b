from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Tuple

from fire_planner.core.schemas import SimulationInput, ValidationReport
from fire_planner.utils.logging import get_logger

logger = get_logger("validators")


class PlannerError(Exception):
    pass


class InvalidInputError(PlannerError):
    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        msgs = "; ".join(e.message for e in report.errors) or "invalid input"
        super().__init__(msgs)


# canonical field -> accepted keys, first match wins
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "current_funds": ("current_funds", "currentFunds", "current_savings"),
    "target_goal": ("target_goal", "targetGoal", "target_amount"),
    "years": ("years", "time_horizon_years"),
    "monthly_contribution": ("monthly_contribution", "monthlyContribution", "monthly_investment"),
    "contribution_increase_pct": ("contribution_increase_pct", "contributionIncreasePct", "stepup_annual_pct"),
    "annual_return_pct": ("annual_return_pct", "annualReturnPct", "expected_return_annual"),
    "annual_inflation_pct": ("annual_inflation_pct", "annualInflationPct", "inflation_annual"),
}

NON_NEGATIVE_FIELDS = ("current_funds", "target_goal", "monthly_contribution", "contribution_increase_pct")
RATE_FIELDS = ("contribution_increase_pct", "annual_return_pct", "annual_inflation_pct")

MIN_YEARS = 1 / 12
MAX_RATE_PCT = 100.0


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        out = float(value)
    else:
        s = str(value).strip().replace(",", ".")
        if not s:
            return None
        try:
            out = float(s)
        except ValueError:
            return None
    return out if math.isfinite(out) else None


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Numeric value or `default` for anything non-numeric or non-finite."""
    out = _to_float(value)
    return default if out is None else out


def parse_rate_pct(raw: Any) -> float:
    """User percent entry ("4", "3,5") -> fraction, clamped to [0%, 100%]."""
    v = _to_float(raw)
    if v is None:
        return 0.0
    return max(0.0, min(MAX_RATE_PCT, v)) / 100


def sanitize_simulation_payload(
    payload: Mapping[str, Any],
    *,
    percent: bool = False,
    strict: bool = False,
) -> Tuple[SimulationInput, ValidationReport]:
    """
    Turn a loosely-typed payload into a SimulationInput the engine can trust.

    - percent=True means rate fields are given in percent (6 -> 0.06), as the
      planner form collects them.
    - Bad values are replaced (non-finite/non-numeric -> 0, negatives clamped,
      rates floored at -100%, inflation at or below -100% -> 0, years floored
      at one month) and reported as warnings. With strict=True every such
      issue is an error instead and InvalidInputError is raised.
    """
    report = ValidationReport()
    flag = report.add_error if strict else report.add_warning

    values: Dict[str, float] = {}
    for field, keys in FIELD_ALIASES.items():
        key = next((k for k in keys if k in payload), None)
        if key is None:
            continue

        raw = payload[key]
        v = _to_float(raw)
        if v is None:
            flag(f"{field}: not a finite number ({raw!r}); using 0", field=field)
            v = 0.0

        if percent and field in RATE_FIELDS:
            v = v / 100

        if field in NON_NEGATIVE_FIELDS and v < 0:
            flag(f"{field}: negative value {v}; using 0", field=field)
            v = 0.0

        if field == "annual_inflation_pct" and v <= -1:
            # the real track deflates by (1 + inflation), which must stay positive
            flag(f"{field}: inflation at or below -100% ({v}); using 0", field=field)
            v = 0.0

        if field in RATE_FIELDS and v < -1:
            flag(f"{field}: rate below -100% ({v}); using -100%", field=field)
            v = -1.0

        values[field] = v

    if "years" in values and values["years"] <= 0:
        flag(f"years: horizon must be positive ({values['years']}); using one month", field="years")
        values["years"] = MIN_YEARS

    report.finalize()
    if not report.ok:
        raise InvalidInputError(report)

    if report.warnings:
        logger.debug("sanitized simulation payload with %d warning(s)", len(report.warnings))

    return SimulationInput(**values), report
