from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional

import pandas as pd

from .jurisdictions import local_jurisdictions
from .models import PropertyTaxLookup
from .tables import TaxTables, load_tax_tables

logger = logging.getLogger(__name__)


def property_tax_frame(tables: Optional[TaxTables] = None) -> pd.DataFrame:
    """County property-tax rates as a ``State``/``County``/``Rate`` table."""
    return _frame_for(tables or load_tax_tables()).copy()


@lru_cache()
def _frame_for(tables: TaxTables) -> pd.DataFrame:
    rows = [
        {"State": state, "County": county, "Rate": rate}
        for state, counties in tables.property_tax.items()
        for county, rate in counties.items()
    ]
    return pd.DataFrame(rows, columns=["State", "County", "Rate"])


def state_average_rates(tables: Optional[TaxTables] = None) -> pd.Series:
    """Unweighted mean county rate per state."""
    frame = property_tax_frame(tables)
    return frame.groupby("State")["Rate"].mean()


def lookup_property_tax_rate(
    state: Optional[str], county: Optional[str], tables: Optional[TaxTables] = None
) -> Optional[PropertyTaxLookup]:
    """Rate for ``county`` in ``state``.

    Falls back to the state's average county rate when the county is missing
    or unknown, and returns ``None`` when the state has no data at all.
    """
    tables = tables or load_tax_tables()
    counties = tables.property_tax.get(state or "")
    if not counties:
        return None
    if county and county in counties:
        return PropertyTaxLookup(rate=counties[county], source=f"{county}, {state}")
    average = float(state_average_rates(tables)[state])
    if county:
        logger.warning("county %r not found in %s; using state average %.4f", county, state, average)
    else:
        logger.info("no county given for %s; using state average %.4f", state, average)
    return PropertyTaxLookup(
        rate=average,
        source=f"{state} average (county not found)",
        is_state_average=True,
    )


def counties_for_state(state: Optional[str], tables: Optional[TaxTables] = None) -> List[str]:
    """Property-tax counties merged with local income-tax jurisdictions, sorted."""
    tables = tables or load_tax_tables()
    names = set(tables.property_tax.get(state or "", {}))
    profile = tables.state(state)
    if profile is not None and profile.has_local_tax:
        names.update(local_jurisdictions(state, tables))
    return sorted(names)
