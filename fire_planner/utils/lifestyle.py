from __future__ import annotations

from typing import List, Sequence

from fire_planner.core.schemas import CountryGuide, CountryTier, LifestyleBand


def _bands(*rows) -> List[LifestyleBand]:
    return [LifestyleBand(min=m, label=label, blurb=blurb) for m, label, blurb in rows]


# Monthly income thresholds; labels are directional, not promises.
COUNTRY_GUIDES: List[CountryGuide] = [
    CountryGuide(name="Mexico", bands=_bands(
        (0, "basic urban", "Careful budgeting in secondary cities."),
        (3000, "comfortable", "Nice apartment, dining out often in major cities."),
        (6000, "affluent", "High-end neighborhoods in CDMX/Monterrey; frequent travel."),
        (8000, "luxury coastal/Polanco", "Premium areas on the coast or Polanco-level lifestyle."),
    )),
    CountryGuide(name="Portugal", bands=_bands(
        (0, "basic", "Modest life in smaller towns."),
        (3000, "comfortable", "Good life in Lisbon/Porto; regular eating out & hobbies."),
        (5000, "affluent", "Prime areas, private healthcare, frequent European trips."),
        (8000, "luxury", "Top coastal spots (Cascais/Algarve), premium everything."),
    )),
    CountryGuide(name="Turkey", bands=_bands(
        (0, "basic", "Prudent spending in provincial cities."),
        (2500, "comfortable", "Strong lifestyle in Izmir/Antalya; frequent dining out."),
        (4500, "affluent", "Desirable Istanbul neighborhoods; private services."),
        (7000, "luxury Bosphorus", "Premium coastal/central Istanbul living, travel often."),
    )),
    CountryGuide(name="Czechia", bands=_bands(
        (0, "basic", "Modest life; careful budgeting."),
        (3000, "comfortable", "Karlín/Vinohrady vibe; fitness, cafes, short trips."),
        (5000, "affluent", "Prime central living; premium groceries & hobbies."),
        (8000, "luxury", "Top-tier apartment, frequent EU getaways, concierge vibe."),
    )),
    CountryGuide(name="Italy", bands=_bands(
        (0, "basic", "Smaller towns with prudent spending."),
        (3500, "comfortable", "Good standard in Milan/Rome; regular aperitivi & travel."),
        (6000, "affluent", "Prime zones, premium dining, domestic help."),
        (9000, "luxury", "Top neighborhoods; frequent EU trips, high-end services."),
    )),
    CountryGuide(name="Spain", bands=_bands(
        (0, "basic", "Modest lifestyle in smaller cities."),
        (3200, "comfortable", "Madrid/Barcelona good life; dining out & sports."),
        (5500, "affluent", "Prime barrio; private healthcare, frequent travel."),
        (8500, "luxury", "Top coastal/central addresses; premium everything."),
    )),
    CountryGuide(name="Thailand", bands=_bands(
        (0, "basic", "Simple life upcountry."),
        (2500, "comfortable", "Very good life in Chiang Mai/Phuket."),
        (4500, "affluent", "Premium Bangkok/Phuket lifestyle; frequent travel."),
        (7000, "luxury", "High-end condo + concierge services, top dining."),
    )),
    CountryGuide(name="UK", bands=_bands(
        (0, "basic", "Tight budget in many areas."),
        (5000, "comfortable", "Good standard outside Zone 1; regular trips."),
        (8000, "affluent", "Prime London suburbs or strong central flat."),
        (12000, "luxury", "Central London high-end lifestyle; frequent int'l travel."),
    )),
    CountryGuide(name="India", bands=_bands(
        (0, "basic", "Lean lifestyle in Tier-2 cities."),
        (2000, "comfortable", "Comfortable in Bangalore/Pune; frequent dining out."),
        (4000, "affluent", "Premium neighborhoods in Mumbai/Delhi; domestic help."),
        (7000, "luxury", "Top enclaves; business-class travel across India."),
    )),
    CountryGuide(name="Greece", bands=_bands(
        (0, "basic", "Modest life in mainland towns."),
        (2800, "comfortable", "Athens/Thessaloniki with regular island trips."),
        (5000, "affluent", "Prime Athens/Crete; private services."),
        (8000, "luxury islands", "Santorini/Mykonos-level lifestyle in season."),
    )),
    CountryGuide(name="Brazil", bands=_bands(
        (0, "basic", "Careful budgeting in smaller cities."),
        (2500, "comfortable", "Good life in Curitiba/Florianópolis; dining & sports."),
        (4500, "affluent", "Premium areas in São Paulo/Rio; private healthcare."),
        (8000, "luxury beachfront", "Ipanema/Leblon vibe; frequent domestic flights."),
    )),
    CountryGuide(name="Indonesia", bands=_bands(
        (0, "basic", "Simple life in secondary islands."),
        (2000, "comfortable", "Very good life in Bali/Yogyakarta."),
        (4000, "affluent", "Premium Bali/Central Jakarta lifestyle."),
        (6500, "luxury", "Villa-level Bali; frequent regional travel."),
    )),
]

TRAVEL_BANDS: List[LifestyleBand] = _bands(
    (0, "lean nomad",
     "Slow travel in low-cost regions, hostels/guesthouses, economy flights a few times a year."),
    (3000, "comfortable nomad",
     "1–2 months per location, decent apartments, weekly coworking, regional flights every 6–8 weeks."),
    (6000, "premium nomad",
     "4★ hotels or upscale apartments, monthly intercontinental trips, occasional business-class upgrades."),
    (10000, "luxury nomad",
     "5★ hotels/villas, frequent business class, guided experiences, concierge-style logistics."),
)


def choose_band(bands: Sequence[LifestyleBand], income: float) -> LifestyleBand:
    """Band with the largest threshold <= income; the lowest band if none qualifies."""
    if not bands:
        raise ValueError("bands is empty")
    ordered = sorted(bands, key=lambda b: b.min)
    chosen = ordered[0]
    for b in ordered:
        if income >= b.min:
            chosen = b
    return chosen


def country_tiers(monthly_income: float, guides: Sequence[CountryGuide] = COUNTRY_GUIDES) -> List[CountryTier]:
    return [
        CountryTier(country=g.name, band=choose_band(g.bands, monthly_income), monthly_income=monthly_income)
        for g in guides
    ]


def travel_tier(monthly_income: float) -> LifestyleBand:
    return choose_band(TRAVEL_BANDS, monthly_income)
