import streamlit as st

from homecalc.presets import DEFAULT_ASSUMPTIONS, UnderwritingAssumptions


def render_assumptions_sidebar():
    """Sidebar with editable underwriting ratios and closing-cost assumptions."""
    st.session_state.setdefault("assumptions", DEFAULT_ASSUMPTIONS.model_dump())
    a = st.session_state["assumptions"]

    st.sidebar.header("Assumptions")
    a["front_end_pct"] = st.sidebar.number_input("Front-End Ratio %", value=float(a["front_end_pct"]), min_value=1.0, max_value=100.0)
    a["back_end_pct"] = st.sidebar.number_input("Back-End Ratio %", value=float(a["back_end_pct"]), min_value=1.0, max_value=100.0)
    closing_pct = st.sidebar.number_input(
        "Closing Costs % of Price",
        value=float(a["closing_cost_rate"]) * 100,
        min_value=0.0,
        max_value=20.0,
    )
    a["closing_cost_rate"] = closing_pct / 100
    st.session_state["assumptions"] = a
    return UnderwritingAssumptions(**a)
