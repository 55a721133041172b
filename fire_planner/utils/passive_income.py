from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from fire_planner.core.config import DEFAULT_PASSIVE_RATES
from fire_planner.core.schemas import PassiveIncomeRow
from fire_planner.utils.projection_engine import round_half_up

RATE_STEP = 0.005


def passive_income_table(final_pot: float, rates: Iterable[float]) -> List[PassiveIncomeRow]:
    """One row per rate, order preserved. Rates are not validated or de-duplicated."""
    rows: List[PassiveIncomeRow] = []
    for r in rates:
        yearly = final_pot * r
        rows.append(PassiveIncomeRow(rate=r, yearly=yearly, monthly=yearly / 12))
    return rows


def monthly_passive(final_pot: float, rate: float) -> float:
    return final_pot * rate / 12


def reset_rates() -> List[float]:
    return list(DEFAULT_PASSIVE_RATES)


def add_rate(rates: Sequence[float], step: float = RATE_STEP) -> List[float]:
    """Append the next tile (last + step, rounded to 0.1%) and drop duplicates."""
    last: Optional[float] = rates[-1] if rates else 0.04
    nxt = round_half_up((last + step) * 1000) / 1000

    out: List[float] = []
    for r in [*rates, nxt]:
        if r not in out:
            out.append(r)
    return out
