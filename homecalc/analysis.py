"""Both calculator modes end to end.

``calculate_affordability`` answers "what can I afford" by running the price
solver; ``analyze_mortgage`` prices a given home.  Both share the income,
property-tax and payment assembly below and return the same frozen
:class:`AffordabilityResult`.  ``run_calculation`` is the form-facing entry
point: it validates, builds a typed request and turns an unaffordable scenario
into a general message instead of an exception.
"""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import pandas as pd

from .calculators import (
    closing_costs,
    housing_ratios,
    loan_amount,
    monthly_mip,
    monthly_payment,
    nz,
    principal_from_payment,
    total_interest,
    upfront_mip,
)
from .exceptions import AffordabilityError, InvalidInputError, NotAffordableError, ZeroIncomeError
from .jurisdictions import local_tax_modeled
from .models import (
    AffordabilityRequest,
    AffordabilityResult,
    AffordabilityTier,
    CalculationOutcome,
    DownPayment,
    HousingScenario,
    IncomeInput,
    SolverResult,
    TaxBreakdown,
    TermPayment,
)
from .presets import (
    DEFAULT_ASSUMPTIONS,
    DEFAULT_INTEREST_RATES,
    RATIO_TOLERANCE_PCT,
    TERM_OPTIONS,
    UnderwritingAssumptions,
)
from .property_tax import lookup_property_tax_rate
from .rules import evaluate_rules
from .solver import solve_max_home_price, solve_max_home_price_fixed_down
from .tables import TaxTables, load_tax_tables
from .taxes import compute_tax_burden, convert_to_annual_income
from .validation import validate_inputs

logger = logging.getLogger(__name__)


def income_profile(
    income: IncomeInput,
    state: Optional[str],
    locality: Optional[str],
    tables: Optional[TaxTables] = None,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> Dict:
    """Annual and monthly income figures plus the tax breakdown.

    With a take-home override, gross is estimated from take-home pay at the
    assumed 30% total tax rate and no tax breakdown is computed.
    """
    a = assumptions or DEFAULT_ASSUMPTIONS
    if income.uses_take_home:
        take_home = nz(income.monthly_take_home)
        gross = take_home / a.take_home_to_gross
        annual = gross * 12
        return {
            "annual_income": annual,
            "monthly_gross_income": gross,
            "monthly_take_home": take_home,
            "taxes": TaxBreakdown(annual_income=annual),
            "gross_estimated": True,
        }
    annual = convert_to_annual_income(income.amount, income.pay_frequency.value)
    taxes = compute_tax_burden(annual, state, locality, tables)
    return {
        "annual_income": annual,
        "monthly_gross_income": annual / 12,
        "monthly_take_home": (annual - taxes.total) / 12,
        "taxes": taxes,
        "gross_estimated": False,
    }


def resolve_property_tax(
    state: Optional[str],
    county: Optional[str],
    tables: Optional[TaxTables] = None,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> Dict:
    """Rate, label and provenance (``county``/``state_average``/``default``)."""
    a = assumptions or DEFAULT_ASSUMPTIONS
    found = lookup_property_tax_rate(state, county, tables)
    if found is None:
        logger.warning("no property tax data for %r; using %.4f", state, a.default_property_tax_rate)
        return {"rate": a.default_property_tax_rate, "source": "national default", "kind": "default"}
    kind = "state_average" if found.is_state_average else "county"
    return {"rate": found.rate, "source": found.source, "kind": kind}


def affordability_tier(
    percent_of_gross: float,
    has_debts: bool,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> AffordabilityTier:
    """Green up to the ratio target, yellow up to the stretch band above it."""
    a = assumptions or DEFAULT_ASSUMPTIONS
    if has_debts:
        green, yellow = a.back_end_pct, a.back_end_pct + a.back_end_stretch_pct
    else:
        green, yellow = a.front_end_pct, a.front_end_pct + a.front_end_stretch_pct
    if percent_of_gross <= green + RATIO_TOLERANCE_PCT:
        return AffordabilityTier.GREEN
    if percent_of_gross <= yellow + RATIO_TOLERANCE_PCT:
        return AffordabilityTier.YELLOW
    return AffordabilityTier.RED


def _percent_of_gross(amount: float, gross: float) -> float:
    if gross <= 0:
        raise ZeroIncomeError("percent of gross income is undefined for zero income")
    return amount / gross * 100


def _percent_of_take_home(amount: float, take_home: float) -> Optional[float]:
    if take_home <= 0:
        return None
    return amount / take_home * 100


def term_payments(
    loan: float,
    monthly_escrow: float,
    monthly_gross: float,
    monthly_take_home: float,
    has_debts: bool,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> Dict[int, TermPayment]:
    """Compare the standard terms, each at its own default market rate."""
    out: Dict[int, TermPayment] = {}
    for term in TERM_OPTIONS:
        rate = DEFAULT_INTEREST_RATES.get(term, DEFAULT_INTEREST_RATES[30])
        payment = monthly_payment(loan, rate, term)
        total = payment + monthly_escrow
        pct = _percent_of_gross(total, monthly_gross)
        out[term] = TermPayment(
            term_years=term,
            interest_rate=rate,
            payment=payment,
            total_payment=total,
            total_interest=total_interest(payment, loan, term),
            percent_of_gross_income=pct,
            percent_of_take_home_income=_percent_of_take_home(total, monthly_take_home),
            tier=affordability_tier(pct, has_debts, assumptions),
        )
    return out


def _assemble(
    mode: str,
    request: AffordabilityRequest,
    profile: Dict,
    home_price: float,
    property_tax: Dict,
    a: UnderwritingAssumptions,
    tables: TaxTables,
    solver: Optional[SolverResult] = None,
) -> AffordabilityResult:
    scenario = request.scenario
    debts = nz(request.monthly_debts)
    has_debts = debts > 0
    gross = profile["monthly_gross_income"]
    take_home = profile["monthly_take_home"]

    dp_amount, dp_percent = scenario.down_payment.resolve(home_price)
    if solver is not None:
        # The price includes the cash brought to closing; only the P&I budget is financed.
        loan = principal_from_payment(
            max(0.0, solver.max_pi_payment), scenario.interest_rate, scenario.loan_term_years
        )
    else:
        loan = loan_amount(home_price, dp_amount)
    pi = monthly_payment(loan, scenario.interest_rate, scenario.loan_term_years)

    tax_monthly = home_price * property_tax["rate"] / 12
    insurance_monthly = nz(scenario.insurance_annual) / 12 if scenario.include_insurance else 0.0
    mip_monthly = monthly_mip(home_price, a.fha_annual_mip_pct) if scenario.is_fha else 0.0
    escrow = tax_monthly + insurance_monthly + mip_monthly
    total = pi + escrow

    closing = closing_costs(home_price, a.closing_cost_rate)
    ufmip = upfront_mip(loan_amount(home_price, dp_amount), a.fha_upfront_mip_pct) if scenario.is_fha else 0.0

    pct_gross = _percent_of_gross(total, gross)
    front_end, back_end = housing_ratios(total, debts, gross)
    if has_debts:
        is_affordable = back_end <= a.back_end_pct + RATIO_TOLERANCE_PCT
    else:
        is_affordable = front_end <= a.front_end_pct + RATIO_TOLERANCE_PCT

    advisories = evaluate_rules(
        {
            "monthly_gross_income": gross,
            "total_monthly_payment": total,
            "monthly_debts": debts,
            "target_FE": a.front_end_pct,
            "target_BE": a.back_end_pct,
            "take_home_negative": take_home <= 0,
            "gross_estimated_from_take_home": profile["gross_estimated"],
            "take_home_to_gross": a.take_home_to_gross,
            "property_tax_source_kind": property_tax["kind"],
            "property_tax_rate": property_tax["rate"],
            "local_tax_unmodeled": not profile["gross_estimated"] and not local_tax_modeled(request.state, tables),
            "solver_converged": solver.converged if solver is not None else None,
            "solver_rounds": solver.rounds if solver is not None else None,
            "solver_tolerance": a.tolerance,
        }
    )

    return AffordabilityResult(
        mode=mode,
        home_price=home_price,
        loan_amount=loan,
        down_payment_amount=dp_amount,
        down_payment_percent=dp_percent,
        monthly_principal_interest=pi,
        monthly_property_tax=tax_monthly,
        monthly_insurance=insurance_monthly,
        monthly_mip=mip_monthly,
        total_monthly_payment=total,
        percent_of_gross_income=pct_gross,
        percent_of_take_home_income=_percent_of_take_home(total, take_home),
        tier=affordability_tier(pct_gross, has_debts, a),
        is_affordable=is_affordable,
        closing_costs=closing,
        upfront_mip=ufmip,
        total_closing_costs=closing + ufmip,
        total_cash_needed=dp_amount + closing + ufmip,
        property_tax_rate=property_tax["rate"],
        property_tax_source=property_tax["source"],
        is_fha=scenario.is_fha,
        monthly_debts=debts,
        annual_income=profile["annual_income"],
        monthly_gross_income=gross,
        monthly_take_home=take_home,
        taxes=profile["taxes"],
        payments_by_term=term_payments(loan, escrow, gross, take_home, has_debts, a),
        solver=solver,
        advisories=advisories,
    )


def calculate_affordability(
    request: AffordabilityRequest,
    tables: Optional[TaxTables] = None,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> AffordabilityResult:
    """Maximum affordable price and its payment breakdown.

    Raises :class:`NotAffordableError` when debts and escrow items leave no
    room for principal and interest.
    """
    tables = tables or load_tax_tables()
    a = assumptions or DEFAULT_ASSUMPTIONS
    scenario = request.scenario
    profile = income_profile(request.income, request.state, request.locality, tables, a)
    property_tax = resolve_property_tax(request.state, request.locality, tables, a)
    insurance = nz(scenario.insurance_annual) if scenario.include_insurance else 0.0

    args = (
        profile["monthly_gross_income"],
        request.monthly_debts,
        scenario.interest_rate,
        scenario.loan_term_years,
    )
    if scenario.down_payment.kind == "amount":
        solver = solve_max_home_price_fixed_down(
            *args, scenario.down_payment.value, property_tax["rate"], insurance, scenario.is_fha, a
        )
    else:
        solver = solve_max_home_price(
            *args, scenario.down_payment.value, property_tax["rate"], insurance, scenario.is_fha, a
        )
    logger.info(
        "max price %.2f for %s after %d rounds (converged=%s)",
        solver.max_home_price, request.state, solver.rounds, solver.converged,
    )
    return _assemble("max_price", request, profile, solver.max_home_price, property_tax, a, tables, solver)


def analyze_mortgage(
    request: AffordabilityRequest,
    tables: Optional[TaxTables] = None,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> AffordabilityResult:
    """Payment breakdown and verdict for ``request.scenario.home_price``."""
    tables = tables or load_tax_tables()
    a = assumptions or DEFAULT_ASSUMPTIONS
    price = request.scenario.home_price
    if price is None or price <= 0:
        raise InvalidInputError({"home_price": "Home price is required"})
    profile = income_profile(request.income, request.state, request.locality, tables, a)
    property_tax = resolve_property_tax(request.state, request.locality, tables, a)
    return _assemble("analyze", request, profile, float(price), property_tax, a, tables)


def request_from_form(form: Mapping, mode: str = "max_price", tables: Optional[TaxTables] = None) -> AffordabilityRequest:
    """Validate raw form values and convert them into a typed request."""
    errors = validate_inputs(form, mode, tables)
    if errors:
        raise InvalidInputError(errors)

    if form.get("use_custom_take_home"):
        income = IncomeInput(monthly_take_home=nz(form.get("monthly_take_home")))
    else:
        income = IncomeInput(amount=nz(form.get("income")), pay_frequency=form.get("pay_type") or "annual")

    if form.get("down_payment_type", "percent") == "amount":
        down = DownPayment(kind="amount", value=nz(form.get("down_payment_amount")))
    else:
        down = DownPayment(kind="percent", value=nz(form.get("down_payment_percent"), 20.0))

    scenario = HousingScenario(
        home_price=nz(form.get("home_price")) if mode == "analyze" else None,
        down_payment=down,
        loan_term_years=int(nz(form.get("loan_term_years"), 30)),
        interest_rate=nz(form.get("interest_rate"), DEFAULT_INTEREST_RATES[30]),
        include_insurance=bool(form.get("include_insurance", True)),
        insurance_annual=nz(form.get("insurance_annual"), DEFAULT_ASSUMPTIONS.default_insurance_annual),
        is_fha=bool(form.get("is_fha", False)),
    )
    return AffordabilityRequest(
        income=income,
        scenario=scenario,
        monthly_debts=nz(form.get("monthly_debts")),
        state=form.get("state"),
        locality=form.get("locality") or None,
    )


def run_calculation(
    form: Mapping,
    mode: str = "max_price",
    tables: Optional[TaxTables] = None,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> CalculationOutcome:
    """Validate ``form`` and run ``mode``; never raises for bad or unaffordable input."""
    tables = tables or load_tax_tables()
    try:
        request = request_from_form(form, mode, tables)
    except InvalidInputError as exc:
        return CalculationOutcome(errors=exc.errors)
    try:
        if mode == "analyze":
            result = analyze_mortgage(request, tables, assumptions)
        else:
            result = calculate_affordability(request, tables, assumptions)
    except NotAffordableError as exc:
        logger.info("scenario not affordable (max P&I %s)", exc.max_pi_payment)
        return CalculationOutcome(general_error=str(exc))
    except AffordabilityError as exc:
        logger.warning("calculation failed: %s", exc)
        return CalculationOutcome(general_error=str(exc))
    return CalculationOutcome(result=result)


def term_comparison_frame(result: AffordabilityResult) -> pd.DataFrame:
    """Per-term comparison as a table, one row per loan term."""
    rows = [
        {
            "Term": t.term_years,
            "Rate": t.interest_rate,
            "Payment": t.payment,
            "TotalPayment": t.total_payment,
            "TotalInterest": t.total_interest,
            "PctGross": t.percent_of_gross_income,
            "PctTakeHome": t.percent_of_take_home_income,
            "Tier": t.tier.value,
        }
        for t in result.payments_by_term.values()
    ]
    return pd.DataFrame(
        rows,
        columns=["Term", "Rate", "Payment", "TotalPayment", "TotalInterest", "PctGross", "PctTakeHome", "Tier"],
    )
