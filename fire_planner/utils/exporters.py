from __future__ import annotations

import math
from typing import Tuple

import pandas as pd

from fire_planner.core.schemas import ProjectionResult
from fire_planner.utils.formatting import normalize_currency
from fire_planner.utils.projection_engine import round_half_up

DEFAULT_EXPORT_FILENAME = "fire_projection.csv"


def projection_frame(result: ProjectionResult) -> pd.DataFrame:
    """Month-by-month trajectory as a DataFrame (month, label, nominal, real)."""
    return pd.DataFrame(
        [p.model_dump() for p in result.points],
        columns=["month", "label", "nominal", "real"],
    )


def _whole(v: float):
    return round_half_up(v) if math.isfinite(v) else 0


def export_projection_csv(
    result: ProjectionResult,
    currency: str = "EUR",
    filename: str = DEFAULT_EXPORT_FILENAME,
) -> Tuple[str, bytes]:
    cur = normalize_currency(currency)
    df = projection_frame(result)
    out = pd.DataFrame({
        "Month": df["month"],
        "Label": df["label"],
        f"Nominal_{cur}": [_whole(v) for v in df["nominal"]],
        f"Real_{cur}": [_whole(v) for v in df["real"]],
    })
    return filename, out.to_csv(index=False, lineterminator="\n").encode()

