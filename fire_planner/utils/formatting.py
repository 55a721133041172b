from __future__ import annotations

import math
from typing import Optional

from fire_planner.core.config import SUPPORTED_CURRENCIES
from fire_planner.utils.projection_engine import round_half_up

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def normalize_currency(code: Optional[str], default: str = "EUR") -> str:
    c = (code or "").strip().upper()
    return c if c in SUPPORTED_CURRENCIES else default


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get(normalize_currency(currency), "€")


def fmt_currency(value: float, currency: str = "EUR") -> str:
    """Whole units with thousands separators, e.g. "€1,234" / "-$50". Non-finite -> 0."""
    v = value if isinstance(value, (int, float)) and math.isfinite(value) else 0
    n = round_half_up(abs(v))
    sign = "-" if v < 0 and n else ""
    return f"{sign}{currency_symbol(currency)}{n:,}"


def fmt_pct(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"

