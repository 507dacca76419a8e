"""Field checks for the calculator form.

Each ``validate_*`` function returns ``None`` when the value is acceptable or a
message suitable for showing next to the field.  :func:`validate_inputs` runs
every check that applies to the selected mode and collects all failures.
"""
from __future__ import annotations

import math
from typing import Dict, Mapping, Optional

from .jurisdictions import locality_label, locality_required
from .models import PAY_PERIODS_PER_YEAR, PayFrequency
from .presets import MAX_ANNUAL_INCOME
from .property_tax import counties_for_state
from .tables import TaxTables, load_tax_tables

MODES = ("max_price", "analyze")
_PAY_TYPES = {f.value for f in PayFrequency}


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _number(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_income(income, pay_type="annual") -> Optional[str]:
    if _blank(income):
        return "Income is required"
    number = _number(income)
    if number is None or number <= 0:
        return "Please enter a valid income amount"
    periods = PAY_PERIODS_PER_YEAR[PayFrequency(pay_type)] if pay_type in _PAY_TYPES else 1
    if number * periods > MAX_ANNUAL_INCOME:
        return f"Annual income must be at most ${MAX_ANNUAL_INCOME:,.0f}"
    return None


def validate_take_home(take_home) -> Optional[str]:
    if _blank(take_home):
        return "Monthly take-home pay is required"
    number = _number(take_home)
    if number is None or number <= 0:
        return "Please enter a valid monthly take-home amount"
    if number * 12 > MAX_ANNUAL_INCOME:
        return f"Monthly take-home must be at most ${MAX_ANNUAL_INCOME / 12:,.0f}"
    return None


def validate_pay_type(pay_type) -> Optional[str]:
    if _blank(pay_type):
        return "Pay type is required"
    if pay_type not in _PAY_TYPES:
        return "Please select a valid pay type"
    return None


def validate_state(state, tables: Optional[TaxTables] = None) -> Optional[str]:
    tables = tables or load_tax_tables()
    if _blank(state):
        return "State selection is required"
    if tables.state(state) is None:
        return "Please select a valid state"
    return None


def validate_local_jurisdiction(state, locality, tables: Optional[TaxTables] = None) -> Optional[str]:
    """Locality must be picked where local tax depends on it, and must be known.

    States whose local tax has a statewide rule or a default rate accept any
    locality; so do states without local income tax, where the locality only
    selects a property-tax county.
    """
    tables = tables or load_tax_tables()
    profile = tables.state(state)
    if profile is None or not profile.has_local_tax:
        return None
    label = locality_label(state, tables)
    if _blank(locality):
        if locality_required(state, tables):
            return f"Please select a {label}"
        return None
    if locality_required(state, tables) and locality not in counties_for_state(state, tables):
        return f"Please select a valid {label}"
    return None


def validate_monthly_debts(debts) -> Optional[str]:
    if _blank(debts):
        return None
    number = _number(debts)
    if number is None or number < 0:
        return "Monthly debts must be a positive number or zero"
    return None


def validate_home_price(price) -> Optional[str]:
    if _blank(price):
        return "Home price is required"
    number = _number(price)
    if number is None or number <= 0:
        return "Please enter a valid home price"
    return None


def validate_down_payment_percent(percent) -> Optional[str]:
    if _blank(percent):
        return "Down payment percentage is required"
    number = _number(percent)
    if number is None or number < 0 or number > 100:
        return "Down payment must be between 0% and 100%"
    return None


def validate_down_payment_amount(amount) -> Optional[str]:
    number = _number(amount)
    if _blank(amount) or number is None or number < 0:
        return "Please enter a valid down payment amount"
    return None


def validate_interest_rate(rate) -> Optional[str]:
    if _blank(rate):
        return "Interest rate is required"
    number = _number(rate)
    if number is None or number < 0 or number > 30:
        return "Interest rate must be between 0% and 30%"
    return None


def validate_loan_term(term) -> Optional[str]:
    if _blank(term):
        return "Loan term is required"
    number = _number(term)
    if number is None or number != int(number) or number < 1 or number > 50:
        return "Loan term must be between 1 and 50 years"
    return None


def validate_insurance(insurance) -> Optional[str]:
    if _blank(insurance):
        return None
    number = _number(insurance)
    if number is None or number < 0:
        return "Please enter a valid annual insurance amount"
    return None


def validate_inputs(form: Mapping, mode: str = "max_price", tables: Optional[TaxTables] = None) -> Dict[str, str]:
    """Check every applicable field of ``form`` and return ``{field: message}``.

    An empty dictionary means the form can be calculated.  ``mode`` is
    ``"max_price"`` or ``"analyze"``; only the latter needs a home price.
    """
    if mode not in MODES:
        raise ValueError(f"unknown calculation mode: {mode!r}")
    tables = tables or load_tax_tables()
    errors: Dict[str, str] = {}

    def check(field, message):
        if message:
            errors[field] = message

    if form.get("use_custom_take_home"):
        check("monthly_take_home", validate_take_home(form.get("monthly_take_home")))
    else:
        check("income", validate_income(form.get("income"), form.get("pay_type", "annual")))
        check("pay_type", validate_pay_type(form.get("pay_type", "annual")))

    check("state", validate_state(form.get("state"), tables))
    if "state" not in errors:
        check("locality", validate_local_jurisdiction(form.get("state"), form.get("locality"), tables))
    check("monthly_debts", validate_monthly_debts(form.get("monthly_debts")))

    if mode == "analyze":
        check("home_price", validate_home_price(form.get("home_price")))

    if not form.get("is_fha"):
        if form.get("down_payment_type", "percent") == "amount":
            check("down_payment_amount", validate_down_payment_amount(form.get("down_payment_amount")))
        else:
            check("down_payment_percent", validate_down_payment_percent(form.get("down_payment_percent")))

    check("interest_rate", validate_interest_rate(form.get("interest_rate")))
    check("loan_term_years", validate_loan_term(form.get("loan_term_years")))
    if form.get("include_insurance", True):
        check("insurance_annual", validate_insurance(form.get("insurance_annual")))
    return errors
