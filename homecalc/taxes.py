from __future__ import annotations

import logging
from typing import Dict, Optional

from .calculators import nz
from .jurisdictions import calculate_local_tax, progressive_tax, progressive_tax_with_base
from .models import PAY_PERIODS_PER_YEAR, PayFrequency, TaxBreakdown
from .tables import TaxTables, load_tax_tables

logger = logging.getLogger(__name__)


def convert_to_annual_income(amount, pay_frequency="annual") -> float:
    """Annualize a pay amount.

    Hourly pay assumes a 40 hour week, 52 weeks a year (2080 hours).  A
    non-numeric amount yields ``0``; an unrecognized frequency raises
    ``ValueError``.
    """
    freq = PayFrequency(pay_frequency)
    return nz(amount) * PAY_PERIODS_PER_YEAR[freq]


def calculate_federal_tax(income, tables: Optional[TaxTables] = None) -> float:
    tables = tables or load_tax_tables()
    inc = nz(income)
    if inc <= 0:
        return 0.0
    return progressive_tax(inc, tables.federal_brackets)


def calculate_fica_tax(income, tables: Optional[TaxTables] = None) -> Dict[str, float]:
    """Employee-side Social Security and Medicare.

    Social Security stops at the wage cap; Medicare applies to all wages with
    the additional 0.9% on wages above the threshold.
    """
    tables = tables or load_tax_tables()
    f = tables.fica
    inc = max(0.0, nz(income))
    social_security = min(inc, f["social_security_wage_cap"]) * f["social_security"]
    medicare = inc * f["medicare"]
    excess = inc - f["additional_medicare_threshold"]
    if excess > 0:
        medicare += excess * f["additional_medicare"]
    return {
        "social_security": social_security,
        "medicare": medicare,
        "total": social_security + medicare,
    }


def calculate_state_tax(income, state: Optional[str], tables: Optional[TaxTables] = None) -> float:
    """State income tax: flat rate, or the state's own bracket schedule when it has one."""
    tables = tables or load_tax_tables()
    inc = nz(income)
    profile = tables.state(state)
    if profile is None or inc <= 0:
        return 0.0
    if profile.brackets is not None:
        return progressive_tax_with_base(inc, profile.brackets)
    return inc * profile.rate


def compute_tax_burden(
    annual_income,
    state: Optional[str],
    locality: Optional[str] = None,
    tables: Optional[TaxTables] = None,
) -> TaxBreakdown:
    """Layered federal, FICA, state and local tax for one year of income."""
    tables = tables or load_tax_tables()
    inc = max(0.0, nz(annual_income))
    federal = calculate_federal_tax(inc, tables)
    fica = calculate_fica_tax(inc, tables)
    state_tax = calculate_state_tax(inc, state, tables)
    local = calculate_local_tax(inc, state, locality, tables)
    total = federal + fica["total"] + state_tax + local
    logger.debug(
        "tax burden income=%.2f federal=%.2f fica=%.2f state=%.2f local=%.2f",
        inc, federal, fica["total"], state_tax, local,
    )
    return TaxBreakdown(
        annual_income=inc,
        federal=federal,
        fica=fica["total"],
        fica_social_security=fica["social_security"],
        fica_medicare=fica["medicare"],
        state=state_tax,
        local=local,
        total=total,
    )
