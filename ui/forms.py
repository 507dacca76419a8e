import streamlit as st

from homecalc.jurisdictions import locality_label
from homecalc.models import PayFrequency
from homecalc.presets import DEFAULT_INTEREST_RATES, TERM_OPTIONS
from homecalc.property_tax import counties_for_state
from homecalc.tables import load_tax_tables

FORM_DEFAULTS = {
    "income": "",
    "pay_type": "annual",
    "use_custom_take_home": False,
    "monthly_take_home": "",
    "state": "",
    "locality": "",
    "monthly_debts": "",
    "home_price": "",
    "down_payment_type": "percent",
    "down_payment_percent": "20",
    "down_payment_amount": "",
    "interest_rate": str(DEFAULT_INTEREST_RATES[30]),
    "loan_term_years": 30,
    "include_insurance": True,
    "insurance_annual": "1200",
    "is_fha": False,
}


def _form():
    st.session_state.setdefault("form", dict(FORM_DEFAULTS))
    return st.session_state["form"]


def _field_error(field):
    msg = st.session_state.get("form_errors", {}).get(field)
    if msg:
        st.caption(f":red[{msg}]")


def render_income_inputs():
    """Income entry: gross pay with a frequency, or a monthly take-home override."""
    f = _form()
    st.subheader("Income")
    f["use_custom_take_home"] = st.checkbox(
        "I know my monthly take-home pay",
        value=f["use_custom_take_home"],
        help="Gross income is then estimated assuming a 30% total tax rate.",
    )
    if f["use_custom_take_home"]:
        f["monthly_take_home"] = st.text_input("Monthly Take-Home", value=f["monthly_take_home"])
        _field_error("monthly_take_home")
    else:
        freqs = [p.value for p in PayFrequency]
        cols = st.columns(2)
        with cols[0]:
            f["income"] = st.text_input("Income", value=f["income"])
            _field_error("income")
        with cols[1]:
            f["pay_type"] = st.selectbox("Pay Type", freqs, index=freqs.index(f["pay_type"]))
    f["monthly_debts"] = st.text_input(
        "Monthly Debts",
        value=f["monthly_debts"],
        help="Car loans, student loans, minimum card payments.",
    )
    _field_error("monthly_debts")
    return f


def render_location_inputs():
    """State and county/city pickers; the locality list follows the state."""
    f = _form()
    st.subheader("Location")
    states = [""] + sorted(load_tax_tables().states)
    state_idx = states.index(f["state"]) if f["state"] in states else 0
    f["state"] = st.selectbox("State", states, index=state_idx)
    _field_error("state")
    if f["state"]:
        options = [""] + counties_for_state(f["state"])
        loc_idx = options.index(f["locality"]) if f["locality"] in options else 0
        label = locality_label(f["state"])
        f["locality"] = st.selectbox(
            "County / City",
            options,
            index=loc_idx,
            help=f"Sets the property tax rate and any local income tax ({label}).",
        )
        _field_error("locality")
    else:
        f["locality"] = ""
    return f


def render_housing_inputs(mode: str):
    f = _form()
    st.subheader("Home & Loan")
    if mode == "analyze":
        f["home_price"] = st.text_input("Home Price", value=f["home_price"])
        _field_error("home_price")

    f["is_fha"] = st.checkbox("FHA Loan", value=f["is_fha"], help="3.5% down, upfront and annual MIP.")
    if f["is_fha"]:
        st.caption("FHA loans use a 3.5% down payment.")
    else:
        kinds = ["percent", "amount"]
        f["down_payment_type"] = st.radio(
            "Down Payment Type",
            kinds,
            index=kinds.index(f["down_payment_type"]),
            horizontal=True,
        )
        if f["down_payment_type"] == "percent":
            f["down_payment_percent"] = st.text_input("Down Payment %", value=f["down_payment_percent"])
            _field_error("down_payment_percent")
        else:
            f["down_payment_amount"] = st.text_input("Down Payment $", value=f["down_payment_amount"])
            _field_error("down_payment_amount")

    cols = st.columns(2)
    with cols[0]:
        f["interest_rate"] = st.text_input("Interest Rate %", value=f["interest_rate"])
        _field_error("interest_rate")
    with cols[1]:
        terms = list(TERM_OPTIONS)
        term_idx = terms.index(f["loan_term_years"]) if f["loan_term_years"] in terms else len(terms) - 1
        f["loan_term_years"] = st.selectbox("Term (years)", terms, index=term_idx)

    f["include_insurance"] = st.checkbox("Include Home Insurance", value=f["include_insurance"])
    if f["include_insurance"]:
        f["insurance_annual"] = st.text_input("Insurance Annual", value=f["insurance_annual"])
        _field_error("insurance_annual")
    return f
