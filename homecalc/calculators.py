from __future__ import annotations

import math


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Form fields arrive as strings, blanks or ``None``.  This helper mirrors the
    spreadsheet ``NZ()`` function so the tax and payment math never has to deal
    with a missing or garbled value.
    """

    try:
        if x is None or (isinstance(x, str) and not x.strip()):
            return default
        value = float(x)
    except (TypeError, ValueError):
        return default
    if math.isnan(value):
        return default
    return value


def monthly_payment(principal, annual_rate_pct, term_years):
    """Calculate the fully amortizing monthly payment for a loan.

    ``principal`` is the starting loan amount, ``annual_rate_pct`` is the
    nominal yearly interest rate (e.g. ``6.5`` for 6.5%), and ``term_years`` is
    the amortization period in years.  Uses ``P*r*(1+r)^n / ((1+r)^n - 1)`` and
    falls back to straight-line division when the rate is zero.
    """

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_years) * 12)
    if n <= 0:
        return 0.0
    if abs(r) < 1e-9:
        return L / n
    growth = (1 + r) ** n
    return L * r * growth / (growth - 1)


def principal_from_payment(payment, annual_rate_pct, term_years):
    """Reverse amortization to find the loan amount for a given payment.

    This is the annuity present value: given a payment target, rate and term,
    determine the maximum principal that fits the scenario.
    """

    P = nz(payment)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_years) * 12)
    if n <= 0:
        return 0.0
    if abs(r) < 1e-9:
        return P * n
    return P * (1 - (1 + r) ** (-n)) / r


def total_interest(payment, principal, term_years):
    """Interest paid over the life of the loan."""

    return nz(payment) * nz(term_years) * 12 - nz(principal)


def down_payment_amount(home_price, percent):
    return nz(home_price) * nz(percent) / 100


def down_payment_percent(home_price, amount):
    """Down payment as a percent of price; ``0`` when the price is unknown."""

    price = nz(home_price)
    if price <= 0:
        return 0.0
    return nz(amount) / price * 100


def loan_amount(home_price, down_payment):
    return max(0.0, nz(home_price) - nz(down_payment))


def closing_costs(home_price, rate):
    return nz(home_price) * nz(rate)


def upfront_mip(loan, upfront_pct):
    """FHA upfront mortgage insurance premium charged on the loan amount."""

    return nz(loan) * nz(upfront_pct) / 100


def monthly_mip(home_price, annual_pct):
    """FHA annual MIP, quoted as a percent of price, spread over 12 months."""

    return nz(home_price) * nz(annual_pct) / 100 / 12


def monthly_ownership_costs(home_price, property_tax_rate, insurance_annual, is_fha, annual_mip_pct):
    """Monthly escrow items that scale with the house: tax, insurance and MIP."""

    costs = nz(home_price) * nz(property_tax_rate) / 12 + nz(insurance_annual) / 12
    if is_fha:
        costs += monthly_mip(home_price, annual_mip_pct)
    return costs


def housing_ratios(total_housing, monthly_debts, gross_monthly_income):
    """Return front-end and back-end ratios in percent."""

    inc = nz(gross_monthly_income)
    if inc <= 0:
        return 0.0, 0.0
    fe = nz(total_housing) / inc * 100
    be = (nz(total_housing) + nz(monthly_debts)) / inc * 100
    return fe, be
