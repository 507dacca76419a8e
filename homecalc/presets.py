from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DISCLAIMER = (
    "Estimates only. Figures use 2024 federal brackets, simplified state and local rates, "
    "and county property-tax averages. Lender underwriting, actual tax liability, insurance "
    "quotes and closing costs will differ; confirm with a loan officer and a tax professional."
)

TAX_YEAR = 2024

DEFAULT_INTEREST_RATES = {10: 5.84, 15: 5.96, 30: 6.5}
TERM_OPTIONS = (10, 15, 30)

RATIO_TARGETS = {"front_end": 28.0, "back_end": 36.0}

# Upper edge of the green and yellow bands, in percent of gross income.
AFFORDABILITY_BANDS = {"no_debts": (28.0, 32.0), "with_debts": (36.0, 42.0)}

# Width of the yellow band above each ratio target.
TIER_STRETCH = {key: high - low for key, (low, high) in AFFORDABILITY_BANDS.items()}

# Slack for comparing a ratio against its target, in percentage points.
RATIO_TOLERANCE_PCT = 1e-6

MAX_ANNUAL_INCOME = 100_000_000.0

FHA_TABLES = {"ufmip_pct": 1.75, "annual_mip_pct": 0.55, "min_down_pct": 3.5}

CLOSING_COST_RATE = 0.05
DEFAULT_PROPERTY_TAX_RATE = 0.011
DEFAULT_INSURANCE_ANNUAL = 1200.0
TAKE_HOME_TO_GROSS = 0.70

SOLVER_DEFAULTS = {"seed_price": 300000.0, "max_rounds": 10, "tolerance": 100.0}


class UnderwritingAssumptions(BaseModel):
    """Knobs shared by the solver and the payment analysis.

    Defaults come from the module presets; pass a customised copy to explore
    other lending programs without touching the tables.
    """

    model_config = ConfigDict(frozen=True)

    front_end_pct: float = RATIO_TARGETS["front_end"]
    back_end_pct: float = RATIO_TARGETS["back_end"]
    front_end_stretch_pct: float = TIER_STRETCH["no_debts"]
    back_end_stretch_pct: float = TIER_STRETCH["with_debts"]
    closing_cost_rate: float = CLOSING_COST_RATE
    fha_upfront_mip_pct: float = FHA_TABLES["ufmip_pct"]
    fha_annual_mip_pct: float = FHA_TABLES["annual_mip_pct"]
    fha_min_down_pct: float = FHA_TABLES["min_down_pct"]
    default_property_tax_rate: float = DEFAULT_PROPERTY_TAX_RATE
    default_insurance_annual: float = DEFAULT_INSURANCE_ANNUAL
    take_home_to_gross: float = TAKE_HOME_TO_GROSS
    seed_price: float = SOLVER_DEFAULTS["seed_price"]
    max_rounds: int = SOLVER_DEFAULTS["max_rounds"]
    tolerance: float = SOLVER_DEFAULTS["tolerance"]


DEFAULT_ASSUMPTIONS = UnderwritingAssumptions()
