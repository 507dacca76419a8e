import streamlit as st

from homecalc.analysis import term_comparison_frame
from homecalc.models import AffordabilityResult
from homecalc.presets import DEFAULT_ASSUMPTIONS
from homecalc.rules import has_blocking

TIER_LABELS = {"green": "Comfortable", "yellow": "Stretch", "red": "Risky"}


def render_advisories(advisories):
    for r in advisories:
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")


def render_dashboard_view(result: AffordabilityResult, assumptions=None):
    """Headline figures, payment and tax breakdowns, term comparison and advisories."""
    a = assumptions or DEFAULT_ASSUMPTIONS
    st.header("Results")
    if has_blocking(result.advisories):
        st.error("Critical warnings present; the figures below are not meaningful.")
    cols = st.columns(4)
    price_label = "Max Home Price" if result.mode == "max_price" else "Home Price"
    cols[0].metric(price_label, f"${result.home_price:,.0f}")
    cols[1].metric("Monthly Payment", f"${result.total_monthly_payment:,.2f}")
    cols[2].metric("% of Gross", f"{result.percent_of_gross_income:.1f}%")
    if result.percent_of_take_home_income is None:
        cols[3].metric("% of Take-Home", "n/a")
    else:
        cols[3].metric("% of Take-Home", f"{result.percent_of_take_home_income:.1f}%")

    tier = result.tier.value
    st.markdown(f"**Affordability:** {TIER_LABELS[tier]} ({tier})")
    guidelines = f"{a.front_end_pct:g}/{a.back_end_pct:g} guidelines"
    if result.mode == "analyze":
        if result.is_affordable:
            st.success(f"This home fits within the {guidelines}.")
        else:
            st.warning(f"This home exceeds the {guidelines}.")

    left, right = st.columns(2)
    with left:
        st.subheader("Monthly Payment")
        st.caption(f"Principal & Interest: ${result.monthly_principal_interest:,.2f}")
        st.caption(
            f"Property Tax: ${result.monthly_property_tax:,.2f} "
            f"({result.property_tax_rate*100:.2f}%, {result.property_tax_source})"
        )
        st.caption(f"Insurance: ${result.monthly_insurance:,.2f}")
        if result.is_fha:
            st.caption(f"FHA MIP: ${result.monthly_mip:,.2f}")
        st.caption(f"Loan Amount: ${result.loan_amount:,.0f}")
        st.caption(
            f"Down Payment: ${result.down_payment_amount:,.0f} ({result.down_payment_percent:.1f}%)"
        )
    with right:
        st.subheader("Cash to Close")
        st.caption(f"Closing Costs: ${result.closing_costs:,.2f}")
        if result.is_fha:
            st.caption(f"Upfront MIP: ${result.upfront_mip:,.2f}")
        st.caption(f"Total Closing Costs: ${result.total_closing_costs:,.2f}")
        st.caption(f"Total Cash Needed: ${result.total_cash_needed:,.2f}")

    with st.expander("Income & Taxes"):
        t = result.taxes
        st.caption(f"Annual Income: ${result.annual_income:,.2f}")
        st.caption(f"Monthly Gross: ${result.monthly_gross_income:,.2f}")
        st.caption(f"Monthly Take-Home: ${result.monthly_take_home:,.2f}")
        st.caption(f"Federal: ${t.federal:,.2f}")
        st.caption(f"FICA: ${t.fica:,.2f}")
        st.caption(f"State: ${t.state:,.2f}")
        st.caption(f"Local: ${t.local:,.2f}")
        st.caption(f"Total Tax: ${t.total:,.2f}")

    st.subheader("Compare Loan Terms")
    st.dataframe(term_comparison_frame(result), hide_index=True)

    render_advisories(result.advisories)
