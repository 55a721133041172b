from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import yaml
from dotenv import load_dotenv

SUPPORTED_CURRENCIES = ("EUR", "USD", "GBP")
DEFAULT_PASSIVE_RATES: Tuple[float, ...] = (0.03, 0.035, 0.04, 0.05)

# Planner form defaults; rates in percent, as entered on the form
FORM_DEFAULTS: Dict[str, float] = {
    "current_funds": 100_000,
    "target_goal": 1_000_000,
    "years": 10,
    "monthly_contribution": 1_500,
    "contribution_increase_pct": 5.0,
    "annual_return_pct": 6.0,
    "annual_inflation_pct": 2.0,
}


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    default_currency: str
    show_real: bool

    preferences_path: str
    export_filename: str

    solver_upper_bound: float
    solver_iterations: int
    solver_widen: bool
    solver_max_widenings: int

    passive_rates: Tuple[float, ...]


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _as_bool(v: Any) -> bool:
    return str(v).strip().lower() in ("1", "true", "yes", "on")


def _as_rates(v: Any) -> Tuple[float, ...]:
    if isinstance(v, str):
        parts: List[Any] = [p for p in v.split(",") if p.strip()]
    elif isinstance(v, (list, tuple)):
        parts = list(v)
    else:
        return DEFAULT_PASSIVE_RATES
    try:
        rates = tuple(float(p) for p in parts)
    except (TypeError, ValueError):
        # SETTINGS is built at import time
        return DEFAULT_PASSIVE_RATES
    return rates or DEFAULT_PASSIVE_RATES


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so a blank FIRE_CURRENCY= in .env
    # doesn't wipe out config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    default_currency = str(_env_or_cfg("FIRE_CURRENCY", "display.currency", "EUR")).strip().upper()
    if default_currency not in SUPPORTED_CURRENCIES:
        default_currency = "EUR"
    show_real = _as_bool(_env_or_cfg("FIRE_SHOW_REAL", "display.show_real", True))

    preferences_path = _env_or_cfg("FIRE_PREFERENCES_PATH", "paths.preferences", ".fire_planner/preferences.json")
    export_filename = _env_or_cfg("FIRE_EXPORT_FILENAME", "paths.export_filename", "fire_projection.csv")

    solver_upper_bound = float(_env_or_cfg("FIRE_SOLVER_UPPER_BOUND", "solver.upper_bound", 100000))
    solver_iterations = int(_env_or_cfg("FIRE_SOLVER_ITERATIONS", "solver.iterations", 40))
    solver_widen = _as_bool(_env_or_cfg("FIRE_SOLVER_WIDEN", "solver.widen", True))
    solver_max_widenings = int(_env_or_cfg("FIRE_SOLVER_MAX_WIDENINGS", "solver.max_widenings", 40))

    passive_rates = _as_rates(_env_or_cfg("FIRE_PASSIVE_RATES", "passive.rates", list(DEFAULT_PASSIVE_RATES)))

    return Settings(
        env=env,
        log_level=log_level,
        default_currency=default_currency,
        show_real=show_real,
        preferences_path=preferences_path,
        export_filename=export_filename,
        solver_upper_bound=solver_upper_bound,
        solver_iterations=solver_iterations,
        solver_widen=solver_widen,
        solver_max_widenings=solver_max_widenings,
        passive_rates=passive_rates,
    )


# Optional convenience singleton
SETTINGS = load_settings()
