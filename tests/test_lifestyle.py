import pytest

from fire_planner.core.schemas import LifestyleBand
from fire_planner.utils.lifestyle import COUNTRY_GUIDES, TRAVEL_BANDS, choose_band, country_tiers, travel_tier


def test_choose_band_picks_largest_threshold_not_above_income():
    bands = [
        LifestyleBand(min=5000, label="c", blurb=""),
        LifestyleBand(min=0, label="a", blurb=""),
        LifestyleBand(min=3000, label="b", blurb=""),
    ]
    assert choose_band(bands, 2999.99).label == "a"
    assert choose_band(bands, 3000).label == "b"
    assert choose_band(bands, 4999).label == "b"
    assert choose_band(bands, 1e9).label == "c"


def test_choose_band_below_all_thresholds_falls_back_to_lowest():
    bands = [LifestyleBand(min=100, label="low", blurb=""), LifestyleBand(min=200, label="high", blurb="")]
    assert choose_band(bands, -50).label == "low"


def test_choose_band_empty():
    with pytest.raises(ValueError):
        choose_band([], 100)


def test_country_tiers_cover_every_guide_in_order():
    tiers = country_tiers(4000)
    assert [t.country for t in tiers] == [g.name for g in COUNTRY_GUIDES]
    by_country = {t.country: t.band.label for t in tiers}
    assert by_country["Portugal"] == "comfortable"
    assert by_country["India"] == "affluent"
    assert by_country["UK"] == "basic"


def test_travel_tiers():
    assert travel_tier(0).label == "lean nomad"
    assert travel_tier(6000).label == "premium nomad"
    assert travel_tier(25000).label == "luxury nomad"
    assert len(TRAVEL_BANDS) == 4
