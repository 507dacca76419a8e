"""Jurisdiction rate helpers and local income-tax dispatch.

Every rule variant has a pure evaluator ``(income, rule) -> tax`` registered
in :data:`RULE_EVALUATORS`, and every local-tax scheme has an evaluator
``(income, table, locality) -> tax`` registered in :data:`SCHEME_EVALUATORS`.
Unknown states or jurisdictions always resolve to ``0.0``.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .calculators import nz
from .models import LocalTaxScheme, LocalTaxTable, TaxBracket
from .tables import TaxTables, load_tax_tables

logger = logging.getLogger(__name__)


def progressive_tax(income, brackets: Sequence[TaxBracket]) -> float:
    """Marginal tax: each bracket taxes only the slice of income inside it."""
    inc = nz(income)
    tax = 0.0
    for b in brackets:
        if inc <= b.lower:
            break
        top = inc if b.upper is None else min(inc, b.upper)
        tax += (top - b.lower) * b.rate
    return tax


def progressive_tax_with_base(income, brackets: Sequence[TaxBracket]) -> float:
    """Cumulative-base schedule: ``base + rate * (income - lower)``."""
    inc = nz(income)
    for b in brackets:
        if b.contains(inc):
            return b.base_amount + (inc - b.lower) * b.rate
    return 0.0


def _flat_percentage(income, rule) -> float:
    return nz(income) * rule.rate


def _flat_amount_per_period(income, rule) -> float:
    return rule.amount * rule.periods_per_year


def _bounded_range(income, rule) -> float:
    return nz(income) * rule.midpoint


def _progressive_with_base(income, rule) -> float:
    return progressive_tax_with_base(income, rule.brackets)


RULE_EVALUATORS: Dict[str, Callable] = {
    "flat_percentage": _flat_percentage,
    "flat_amount_per_period": _flat_amount_per_period,
    "bounded_range": _bounded_range,
    "progressive_with_base": _progressive_with_base,
}


def evaluate_rule(rule, income) -> float:
    if rule is None:
        return 0.0
    return RULE_EVALUATORS[rule.kind](income, rule)


def _city_tax(income, table: LocalTaxTable, locality: Optional[str]) -> float:
    if table.statewide_rule is not None:
        return evaluate_rule(table.statewide_rule, income)
    # No locality, or one outside the city table, pays the state default.
    rule = table.cities.get(locality, table.default_rule) if locality else table.default_rule
    return evaluate_rule(rule, income)


def _county_tax(income, table: LocalTaxTable, locality: Optional[str]) -> float:
    if not locality:
        return 0.0
    return evaluate_rule(table.counties.get(locality), income)


def _city_and_county_tax(income, table: LocalTaxTable, locality: Optional[str]) -> float:
    return _city_tax(income, table, locality) + _county_tax(income, table, locality)


def _statewide_tax(income, table: LocalTaxTable, locality: Optional[str]) -> float:
    return evaluate_rule(table.statewide_rule, income)


def _school_district_tax(income, table: LocalTaxTable, locality: Optional[str]) -> float:
    # No district rate data is carried; the scheme is recognized but untaxed.
    return 0.0


SCHEME_EVALUATORS: Dict[LocalTaxScheme, Callable] = {
    LocalTaxScheme.CITY: _city_tax,
    LocalTaxScheme.COUNTY: _county_tax,
    LocalTaxScheme.BOTH: _city_and_county_tax,
    LocalTaxScheme.TABLE_BASED: _statewide_tax,
    LocalTaxScheme.SCHOOL_DISTRICT: _school_district_tax,
}


def calculate_local_tax(income, state: Optional[str], locality: Optional[str], tables: Optional[TaxTables] = None) -> float:
    """Local income tax for ``locality`` in ``state``; ``0.0`` when none applies."""
    tables = tables or load_tax_tables()
    inc = nz(income)
    if inc <= 0:
        return 0.0
    profile = tables.state(state)
    if profile is None or not profile.has_local_tax:
        return 0.0
    table = tables.local.get(profile.name)
    evaluator = SCHEME_EVALUATORS.get(profile.local_tax_scheme)
    if table is None or evaluator is None:
        logger.debug("no local tax table for %s (%s)", state, profile.local_tax_scheme.value)
        return 0.0
    tax = evaluator(inc, table, locality)
    logger.debug("local tax %s/%s via %s: %.2f", state, locality, profile.local_tax_scheme.value, tax)
    return tax


def local_tax_modeled(state: Optional[str], tables: Optional[TaxTables] = None) -> bool:
    """False when ``state`` levies local tax that the tables cannot compute."""
    tables = tables or load_tax_tables()
    profile = tables.state(state)
    if profile is None or not profile.has_local_tax:
        return True
    if profile.local_tax_scheme == LocalTaxScheme.SCHOOL_DISTRICT:
        return False
    return profile.name in tables.local


def local_jurisdictions(state: Optional[str], tables: Optional[TaxTables] = None) -> List[str]:
    tables = tables or load_tax_tables()
    table = tables.local.get(state or "")
    return table.jurisdictions if table is not None else []


def locality_required(state: Optional[str], tables: Optional[TaxTables] = None) -> bool:
    """A named city or county must be chosen to compute local tax."""
    tables = tables or load_tax_tables()
    profile = tables.state(state)
    if profile is None or not profile.has_local_tax:
        return False
    table = tables.local.get(profile.name)
    if table is None or table.default_rule is not None or table.statewide_rule is not None:
        return False
    return bool(table.jurisdictions)


LOCALITY_LABELS = {
    LocalTaxScheme.CITY: "city",
    LocalTaxScheme.COUNTY: "county",
    LocalTaxScheme.SCHOOL_DISTRICT: "school district",
    LocalTaxScheme.BOTH: "city/county",
}


def locality_label(state: Optional[str], tables: Optional[TaxTables] = None) -> str:
    tables = tables or load_tax_tables()
    profile = tables.state(state)
    if profile is None or not profile.has_local_tax:
        return "location"
    return LOCALITY_LABELS.get(profile.local_tax_scheme, "location")
