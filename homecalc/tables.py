"""Read-only tax tables assembled once per process.

The raw dictionaries in :mod:`homecalc.data` are converted into typed rules
and wrapped in :class:`types.MappingProxyType` so nothing downstream can
mutate shared reference data.  Engines accept an explicit :class:`TaxTables`
and fall back to :func:`load_tax_tables` when none is given.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from . import data
from .models import (
    BoundedRange,
    FlatAmountPerPeriod,
    FlatPercentage,
    LocalTaxScheme,
    LocalTaxTable,
    StateTaxProfile,
    TaxBracket,
)


@dataclass(frozen=True, eq=False)
class TaxTables:
    federal_brackets: Tuple[TaxBracket, ...]
    fica: Mapping[str, float]
    states: Mapping[str, StateTaxProfile]
    local: Mapping[str, LocalTaxTable]
    property_tax: Mapping[str, Mapping[str, float]]

    def __post_init__(self):
        check_brackets(self.federal_brackets, "federal")
        for profile in self.states.values():
            if profile.brackets is not None:
                check_brackets(profile.brackets, profile.name)

    def state(self, name: Optional[str]) -> Optional[StateTaxProfile]:
        if not name:
            return None
        return self.states.get(name)


def check_brackets(brackets: Sequence[TaxBracket], label: str) -> None:
    """Ensure ``brackets`` partition ``[0, inf)`` without gaps or overlaps."""
    if not brackets:
        raise ValueError(f"{label}: empty bracket schedule")
    if brackets[0].lower != 0:
        raise ValueError(f"{label}: first bracket must start at 0")
    for prev, cur in zip(brackets, brackets[1:]):
        if prev.upper is None or prev.upper != cur.lower:
            raise ValueError(f"{label}: brackets must be contiguous at {prev.upper}")
    if brackets[-1].upper is not None:
        raise ValueError(f"{label}: last bracket must be unbounded")


def brackets_from_rows(rows: Iterable[dict]) -> Tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(lower=r["min"], upper=r["max"], rate=r["rate"], base_amount=r.get("base", 0.0))
        for r in rows
    )


def rule_from_entry(entry: dict):
    """Convert a raw local-tax entry into its typed rule."""
    t = entry.get("type")
    if t in ("percentage", "flat", "fixed"):
        return FlatPercentage(rate=entry["value"])
    if t == "range":
        return BoundedRange(minimum=entry["min"], maximum=entry["max"])
    if t == "per_period":
        return FlatAmountPerPeriod(amount=entry["amount"], periods_per_year=entry.get("periods", 26))
    raise ValueError(f"unknown local tax entry type: {t!r}")


def _rules(entries: Optional[Mapping[str, dict]]) -> Dict[str, object]:
    return {name: rule_from_entry(e) for name, e in (entries or {}).items()}


def build_tax_tables(
    federal_rows=None,
    fica=None,
    state_rows=None,
    local_rows=None,
    property_rows=None,
) -> TaxTables:
    """Assemble a :class:`TaxTables` bundle from raw rows (defaults: :mod:`data`)."""
    federal_rows = data.FEDERAL_TAX_BRACKETS if federal_rows is None else federal_rows
    fica = data.FICA_RATES if fica is None else fica
    state_rows = data.STATE_TAX_DATA if state_rows is None else state_rows
    local_rows = data.LOCAL_TAX_DATA if local_rows is None else local_rows
    property_rows = data.PROPERTY_TAX_RATES if property_rows is None else property_rows

    ny_brackets = brackets_from_rows(data.NEW_YORK_BRACKETS)
    states = {}
    for name, row in state_rows.items():
        scheme = LocalTaxScheme(row.get("scheme", "none")) if row.get("has_local_tax") else LocalTaxScheme.NONE
        states[name] = StateTaxProfile(
            name=name,
            rate=row.get("rate", 0.0),
            has_local_tax=bool(row.get("has_local_tax", False)),
            local_tax_scheme=scheme,
            brackets=ny_brackets if row.get("progressive") else None,
        )

    local = {}
    for name, row in local_rows.items():
        local[name] = LocalTaxTable(
            cities=_rules(row.get("cities")),
            counties=_rules(row.get("counties")),
            default_rule=rule_from_entry(row["default"]) if "default" in row else None,
            statewide_rule=rule_from_entry(row["statewide"]) if "statewide" in row else None,
        )

    return TaxTables(
        federal_brackets=brackets_from_rows(federal_rows),
        fica=MappingProxyType(dict(fica)),
        states=MappingProxyType(states),
        local=MappingProxyType(local),
        property_tax=MappingProxyType(
            {state: MappingProxyType(dict(counties)) for state, counties in property_rows.items()}
        ),
    )


@lru_cache()
def load_tax_tables() -> TaxTables:
    """Process-wide tables built from the embedded 2024 data."""
    return build_tax_tables()
