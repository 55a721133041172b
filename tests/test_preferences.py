from pathlib import Path

from fire_planner.core.config import SETTINGS
from fire_planner.core.schemas import DisplayPreferences
from fire_planner.utils.preferences import load_preferences, save_preferences


def test_missing_file_gives_defaults(tmp_path: Path):
    prefs = load_preferences(str(tmp_path / "nope.json"))
    assert prefs.currency == SETTINGS.default_currency


def test_round_trip(tmp_path: Path):
    path = tmp_path / "nested" / "prefs.json"
    written = save_preferences(DisplayPreferences(currency="GBP"), str(path))
    assert written == path
    assert path.exists()
    assert load_preferences(str(path)).currency == "GBP"


def test_corrupt_file_gives_defaults(tmp_path: Path):
    path = tmp_path / "prefs.json"
    path.write_text('{"currency": "JPY"}', encoding="utf-8")
    assert load_preferences(str(path)).currency == SETTINGS.default_currency

    path.write_text("not json", encoding="utf-8")
    assert load_preferences(str(path)).currency == SETTINGS.default_currency
