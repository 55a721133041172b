import streamlit as st
import uuid
from fire_planner.core.config import SETTINGS, SUPPORTED_CURRENCIES
from fire_planner.core.schemas import DisplayPreferences
from fire_planner.utils.formatting import currency_symbol
from fire_planner.utils.logging import set_log_context, setup_logging
from fire_planner.utils.preferences import load_preferences, save_preferences
from fire_planner.pages import lifestyle, planner

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="Easy FIRE Planner", layout="wide")

# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    st.session_state.setdefault("currency", load_preferences().currency)
    st.session_state.setdefault("show_real", SETTINGS.show_real)

_init_session()
set_log_context(session_id=st.session_state["session_id"])

# Sidebar for display preferences
with st.sidebar:
    st.subheader("Display")

    currency = st.selectbox(
        "Currency",
        list(SUPPORTED_CURRENCIES),
        index=list(SUPPORTED_CURRENCIES).index(st.session_state["currency"]),
        format_func=lambda c: f"{currency_symbol(c)} {c}",
    )
    if currency != st.session_state["currency"]:
        st.session_state["currency"] = currency
        save_preferences(DisplayPreferences(currency=currency))

    view = st.radio("View", ["Real", "Nominal"], index=0 if st.session_state["show_real"] else 1, horizontal=True)
    st.session_state["show_real"] = view == "Real"
    st.caption("Real = inflation-adjusted; Nominal = not adjusted.")

    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")

# Main UI
st.title("Easy FIRE Planner")
st.caption("Financial Independence, Retire Early made easy.")

tab_planner, tab_lifestyle = st.tabs(["Planner", "Lifestyle"])

with tab_planner:
    planner.render()

with tab_lifestyle:
    lifestyle.render()

st.caption("Built for thoughtful planning. Assumptions are for illustration only and not financial advice.")
