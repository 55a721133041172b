from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from fire_planner.core.config import SETTINGS
from fire_planner.core.schemas import DisplayPreferences
from fire_planner.utils.logging import get_logger

logger = get_logger("preferences")


def _path(path: Optional[str]) -> Path:
    return Path(path or SETTINGS.preferences_path)


def default_preferences() -> DisplayPreferences:
    return DisplayPreferences(currency=SETTINGS.default_currency)


def load_preferences(path: Optional[str] = None) -> DisplayPreferences:
    """
    Display currency is the only state the planner keeps between sessions.
    A missing or unreadable file falls back to defaults.
    """
    p = _path(path)
    if not p.exists():
        return default_preferences()
    try:
        return DisplayPreferences.model_validate_json(p.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.warning("ignoring unreadable preferences at %s: %s", p, e)
        return default_preferences()


def save_preferences(prefs: DisplayPreferences, path: Optional[str] = None) -> Path:
    p = _path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(prefs.model_dump_json(indent=2), encoding="utf-8")
    logger.debug("saved preferences to %s", p)
    return p
