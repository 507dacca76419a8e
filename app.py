import logging
import re

import streamlit as st

from homecalc.analysis import run_calculation
from homecalc.presets import DISCLAIMER
from ui.dashboard import render_dashboard_view
from ui.forms import render_housing_inputs, render_income_inputs, render_location_inputs
from ui.sidebar import render_assumptions_sidebar

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

MODES = {"What can I afford?": "max_price", "Analyze a home": "analyze"}


def pretty_label(label: str) -> str:
    """Convert field keys to more readable labels."""

    label = re.sub(r"(_|-)+", " ", label)
    return label.strip().capitalize()


def render_calculator(assumptions=None):
    mode = MODES[st.radio("Mode", list(MODES), horizontal=True, key="mode_choice")]
    left, right = st.columns(2)
    with left:
        render_income_inputs()
        render_location_inputs()
    with right:
        form = render_housing_inputs(mode)

    if st.button("Calculate", type="primary"):
        outcome = run_calculation(dict(form), mode, assumptions=assumptions)
        st.session_state["form_errors"] = outcome.errors
        st.session_state["outcome"] = outcome

    outcome = st.session_state.get("outcome")
    if outcome is None:
        return None
    if outcome.errors:
        st.error("Please fix: " + ", ".join(pretty_label(k) for k in outcome.errors))
    elif outcome.general_error:
        st.error(outcome.general_error)
    elif outcome.result is not None:
        render_dashboard_view(outcome.result, assumptions)
    return outcome


st.set_page_config(page_title="Home Affordability Calculator", layout="wide")
st.title("Home Affordability Calculator")
assumptions = render_assumptions_sidebar()
render_calculator(assumptions)
st.caption(DISCLAIMER)
