import streamlit as st

from fire_planner.core.config import SETTINGS
from fire_planner.utils.formatting import fmt_currency
from fire_planner.utils.lifestyle import country_tiers, travel_tier
from fire_planner.utils.passive_income import monthly_passive
from fire_planner.utils.validators import parse_rate_pct


def _default_rate() -> float:
    rates = list(SETTINGS.passive_rates)
    return rates[2] if len(rates) > 2 else (rates[-1] if rates else 0.04)


def render():
    st.subheader("What-if: lifestyle")
    currency = st.session_state["currency"]
    display_final = float(st.session_state.get("display_final", 0.0))

    raw = st.text_input("Passive rate (%)", value=f"{_default_rate() * 100:.1f}")
    rate = parse_rate_pct(raw)
    income = monthly_passive(display_final, rate)

    c1, c2 = st.columns(2)
    c1.metric("Monthly passive (approx)", fmt_currency(income, currency))
    c2.caption("Based on your projected pot × rate. Labels are directional, not promises: "
               "1 = basic • 2 = comfortable • 3 = affluent • 4 = luxury")

    tab_countries, tab_itinerant = st.tabs(["Countries", "Itinerant lifestyle"])

    with tab_countries:
        tiers = country_tiers(income)
        cols = st.columns(3)
        for i, t in enumerate(tiers):
            with cols[i % 3]:
                st.markdown(f"**{t.country}** · `{t.band.label}`")
                st.caption(t.band.blurb)

    with tab_itinerant:
        band = travel_tier(income)
        st.metric("Travel tier", band.label)
        st.markdown("**What this buys, roughly**")
        st.write(band.blurb)
        st.caption("Directional only; trip style, seasonality, and fx rates move the needle a lot.")
