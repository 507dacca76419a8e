"""Maximum home price under the 28%/36% payment rules.

Property tax, insurance and FHA MIP scale with the price being solved for, and
the cash needed at closing (down payment, 5% closing costs, FHA upfront MIP)
is folded back in as the effective down payment.  The price is found by a
bounded fixed-point iteration:

1. seed with the closed form at zero cash, escrow items priced at the seed;
2. each round, derive cash from the current estimate and re-solve;
3. stop once successive estimates differ by less than the tolerance ($100),
   after ``max_rounds`` (10) rounds, or as soon as the step starts growing.

The last estimate is returned even without convergence; ``converged`` on the
result records which case applied.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from .calculators import (
    closing_costs,
    down_payment_amount,
    monthly_ownership_costs,
    nz,
    principal_from_payment,
    upfront_mip,
)
from .exceptions import AffordabilityError, NotAffordableError
from .models import SolverResult
from .presets import DEFAULT_ASSUMPTIONS, UnderwritingAssumptions

logger = logging.getLogger(__name__)


def housing_payment_limit(monthly_gross_income, monthly_debts, assumptions: Optional[UnderwritingAssumptions] = None) -> float:
    """Largest total housing payment the ratio rules allow.

    With no debts the front-end (28%) rule governs; any positive debt switches
    to the back-end rule (36% of gross minus debts).
    """
    a = assumptions or DEFAULT_ASSUMPTIONS
    gross = nz(monthly_gross_income)
    debts = nz(monthly_debts)
    if debts > 0:
        return gross * a.back_end_pct / 100 - debts
    return gross * a.front_end_pct / 100


def max_home_price(payment_limit, ownership_costs, interest_rate, term_years, cash) -> float:
    """Closed form: price = PV(limit - escrow items) + cash.

    Raises :class:`NotAffordableError` when escrow items use up the whole
    payment limit.
    """
    max_pi = nz(payment_limit) - nz(ownership_costs)
    if max_pi <= 0:
        raise NotAffordableError(max_pi_payment=max_pi)
    return principal_from_payment(max_pi, interest_rate, term_years) + nz(cash)


def _iterate(
    cash_for: Callable[[float], float],
    limit: float,
    costs_for: Callable[[float], float],
    interest_rate,
    term_years,
    a: UnderwritingAssumptions,
) -> SolverResult:
    estimate = max_home_price(limit, costs_for(a.seed_price), interest_rate, term_years, 0.0)
    logger.debug("solver seed %.2f (limit %.2f)", estimate, limit)
    converged = False
    rounds = 0
    last_step = None
    for rounds in range(1, a.max_rounds + 1):
        adjusted = max_home_price(limit, costs_for(estimate), interest_rate, term_years, cash_for(estimate))
        if not math.isfinite(adjusted):
            raise AffordabilityError(f"solver produced a non-finite price in round {rounds}")
        step = abs(adjusted - estimate)
        logger.debug("solver round %d: %.2f -> %.2f", rounds, estimate, adjusted)
        estimate = adjusted
        if step < a.tolerance:
            converged = True
            break
        if last_step is not None and step > last_step:
            logger.warning("solver diverging after %d rounds (step %.2f > %.2f)", rounds, step, last_step)
            break
        last_step = step
    if not converged:
        logger.warning("solver stopped without converging; using %.2f", estimate)
    return SolverResult(
        max_home_price=estimate,
        payment_limit=limit,
        max_pi_payment=limit - costs_for(estimate),
        rounds=rounds,
        converged=converged,
    )


def solve_max_home_price(
    monthly_gross_income,
    monthly_debts,
    interest_rate,
    term_years,
    down_payment_percent,
    property_tax_rate,
    insurance_annual,
    is_fha,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> SolverResult:
    """Maximum price when the down payment is a percentage of price."""
    a = assumptions or DEFAULT_ASSUMPTIONS
    limit = housing_payment_limit(monthly_gross_income, monthly_debts, a)
    pct = nz(down_payment_percent)

    def costs_for(price):
        return monthly_ownership_costs(price, property_tax_rate, insurance_annual, is_fha, a.fha_annual_mip_pct)

    def cash_for(price):
        down = down_payment_amount(price, pct)
        cash = down + closing_costs(price, a.closing_cost_rate)
        if is_fha:
            cash += upfront_mip(price - down, a.fha_upfront_mip_pct)
        return cash

    return _iterate(cash_for, limit, costs_for, interest_rate, term_years, a)


def solve_max_home_price_fixed_down(
    monthly_gross_income,
    monthly_debts,
    interest_rate,
    term_years,
    down_payment,
    property_tax_rate,
    insurance_annual,
    is_fha,
    assumptions: Optional[UnderwritingAssumptions] = None,
) -> SolverResult:
    """Maximum price for a fixed cash down payment; closing costs are paid separately."""
    a = assumptions or DEFAULT_ASSUMPTIONS
    limit = housing_payment_limit(monthly_gross_income, monthly_debts, a)
    cash = nz(down_payment)

    def costs_for(price):
        return monthly_ownership_costs(price, property_tax_rate, insurance_annual, is_fha, a.fha_annual_mip_pct)

    return _iterate(lambda price: cash, limit, costs_for, interest_rate, term_years, a)
