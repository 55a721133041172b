import math

import streamlit as st
import plotly.express as px
from typing import Any, Dict

from fire_planner.core.config import FORM_DEFAULTS, SETTINGS
from fire_planner.core.schemas import ProjectionResult, SimulationInput
from fire_planner.tools.planner_tools import tool_reachable_pot, tool_solve_contribution
from fire_planner.utils.exporters import export_projection_csv, projection_frame
from fire_planner.utils.formatting import fmt_currency, fmt_pct
from fire_planner.utils.passive_income import add_rate, passive_income_table, reset_rates
from fire_planner.utils.projection_engine import project, summarize
from fire_planner.utils.validators import sanitize_simulation_payload
from fire_planner.web_app.ui_helpers import _badge, _solver_badge


@st.cache_data(show_spinner=False)
def _cached_projection(sim_json: str) -> str:
    # the engine itself never caches; memoize per input set on the host side
    return project(SimulationInput.model_validate_json(sim_json)).model_dump_json()


def _inputs() -> Dict[str, Any]:
    d = FORM_DEFAULTS
    c1, c2 = st.columns(2)
    with c1:
        current = st.number_input("Current funds", min_value=0.0, value=float(d["current_funds"]), step=1000.0,
                                  help="How much you already have invested/liquid towards FIRE.")
        years = st.number_input("Years to project", min_value=1.0, value=float(d["years"]), step=1.0,
                                help="How many years you want to project forward.")
        step_up = st.number_input("Annual increase in contribution (%)", min_value=0.0,
                                  value=float(d["contribution_increase_pct"]), step=0.5,
                                  help="Automatic raise to your monthly contribution once per year.")
        inflation = st.number_input("Assumed annual inflation (%)", value=float(d["annual_inflation_pct"]), step=0.1,
                                    help="Real view discounts inflation continuously; nominal view shows raw values.")
    with c2:
        target = st.number_input(f"Target goal ({st.session_state['currency']})", min_value=0.0,
                                 value=float(d["target_goal"]), step=10000.0,
                                 help="Your target portfolio size to become financially independent.")
        monthly = st.number_input("Monthly contribution", min_value=0.0, value=float(d["monthly_contribution"]),
                                  step=100.0, help="How much you invest each month (before any annual step-ups).")
        ret = st.number_input("Expected annual return (%)", value=float(d["annual_return_pct"]), step=0.1,
                              help="Expected average annual return during accumulation (before fees/taxes).")
    return {
        "current_funds": current,
        "target_goal": target,
        "years": years,
        "monthly_contribution": monthly,
        "contribution_increase_pct": step_up,
        "annual_return_pct": ret,
        "annual_inflation_pct": inflation,
    }


def _chart(res: ProjectionResult, reference: float, show_real: bool):
    df = projection_frame(res)
    df["value"] = df["real"] if show_real else df["nominal"]
    df["year"] = df["month"] / 12.0
    fig = px.area(df, x="year", y="value", title="Portfolio value (" + ("real" if show_real else "nominal") + ")")
    if math.isfinite(reference):
        fig.add_hline(y=reference, line_dash="dash", annotation_text="Target")
    fig.update_yaxes(tickformat="~s", title=None)
    return fig


def _solvers(sim: SimulationInput, currency: str) -> None:
    base = sim.model_dump()
    key = sim.model_dump_json()
    col_a, col_b = st.columns(2)

    with col_a:
        st.markdown("**What contribution do I need?**")
        if st.button("Solve", key="solve_contribution"):
            st.session_state["_solved_contribution"] = (key, tool_solve_contribution(base))
        cached_key, sol = st.session_state.get("_solved_contribution", (None, None))
        # results go stale as soon as an input changes
        if sol and cached_key == key:
            text, kind = _solver_badge(sol["status"])
            _badge(text, kind)
            prefix = "more than " if sol["status"] == "bracket_exceeded" else ""
            st.metric("Monthly contribution", prefix + fmt_currency(sol["monthly_contribution"], currency))

    with col_b:
        st.markdown("**What pot can I reach?**")
        if st.button("Solve", key="solve_pot"):
            st.session_state["_reachable_pot"] = (key, tool_reachable_pot(base))
        cached_key, pot = st.session_state.get("_reachable_pot", (None, None))
        if pot and cached_key == key:
            st.metric("Reachable pot (nominal)", fmt_currency(pot["final_nominal"], currency))


def render():
    st.subheader("Inputs")
    currency = st.session_state["currency"]
    show_real = st.session_state["show_real"]
    st.session_state.setdefault("passive_rates", list(SETTINGS.passive_rates))

    sim, report = sanitize_simulation_payload(_inputs(), percent=True)
    for w in report.warnings:
        st.warning(w.message)

    res = ProjectionResult.model_validate_json(_cached_projection(sim.model_dump_json()))
    summary = summarize(sim, res)
    display_final = res.final_real if show_real else res.final_nominal
    st.session_state["display_final"] = display_final

    st.divider()
    st.subheader("Summary")
    m1, m2, m3 = st.columns(3)
    m1.metric("Projected pot", fmt_currency(display_final, currency))
    if summary.years_to_target is not None:
        m2.metric("Target hit", f"{summary.years_to_target:.1f} years")
    else:
        m2.metric("Target hit", "not reached")
    m3.metric("Duration", f"{summary.horizon_years:.1f} years")

    reference = summary.target_in_todays_money if show_real else sim.target_goal
    st.plotly_chart(_chart(res, reference, show_real), width="stretch")

    tab_passive, tab_details = st.tabs(["Passive income", "Details"])
    with tab_passive:
        b1, b2 = st.columns(2)
        if b1.button("Add rate", help="Add another withdrawal/yield rate tile"):
            st.session_state["passive_rates"] = add_rate(st.session_state["passive_rates"])
        if b2.button("Reset", help="Restore default rates"):
            st.session_state["passive_rates"] = reset_rates()

        rows = passive_income_table(display_final, st.session_state["passive_rates"])
        cols = st.columns(min(4, len(rows)) or 1)
        for i, row in enumerate(rows):
            with cols[i % len(cols)]:
                st.metric(f"{fmt_pct(row.rate)} rate", f"{fmt_currency(row.monthly, currency)}/mo",
                          f"{fmt_currency(row.yearly, currency)}/yr", delta_color="off")
        st.caption("Interpret rates either as a yield (e.g., bond/dividend) or a withdrawal rate (e.g., 3.5% SWR). "
                   "This tool does not model taxes or fees.")

    with tab_details:
        d1, d2 = st.columns(2)
        d1.metric("Final (nominal)", fmt_currency(summary.final_nominal, currency))
        d2.metric("Final (real)", fmt_currency(summary.final_real, currency))
        d1.metric("Monthly return", fmt_pct(summary.monthly_return_rate))
        d2.metric("Monthly inflation", fmt_pct(summary.monthly_inflation_rate))

    filename, blob = export_projection_csv(res, currency=currency, filename=SETTINGS.export_filename)
    st.download_button("Export CSV", data=blob, file_name=filename, mime="text/csv",
                       help="Download the month-by-month projection to CSV.")

    st.divider()
    st.subheader("What-if")
    _solvers(sim, currency)
