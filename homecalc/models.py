from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .calculators import down_payment_amount, down_payment_percent
from .exceptions import ZeroIncomeError
from .rules import RuleResult


class TaxBracket(BaseModel):
    """One slice of a progressive schedule, half-open ``[lower, upper)``."""

    model_config = ConfigDict(frozen=True)

    lower: float = 0.0
    upper: Optional[float] = None
    rate: float
    base_amount: float = 0.0

    def contains(self, income: float) -> bool:
        return income >= self.lower and (self.upper is None or income < self.upper)


class FlatPercentage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["flat_percentage"] = "flat_percentage"
    rate: float


class FlatAmountPerPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["flat_amount_per_period"] = "flat_amount_per_period"
    amount: float
    periods_per_year: int = 26


class BoundedRange(BaseModel):
    """A published min/max rate; evaluated at its midpoint."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bounded_range"] = "bounded_range"
    minimum: float
    maximum: float

    @property
    def midpoint(self) -> float:
        return (self.minimum + self.maximum) / 2


class ProgressiveWithBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["progressive_with_base"] = "progressive_with_base"
    brackets: Tuple[TaxBracket, ...]


JurisdictionTaxRule = Annotated[
    Union[FlatPercentage, FlatAmountPerPeriod, BoundedRange, ProgressiveWithBase],
    Field(discriminator="kind"),
]


class LocalTaxScheme(str, Enum):
    CITY = "city"
    COUNTY = "county"
    SCHOOL_DISTRICT = "school_district"
    BOTH = "both"
    TABLE_BASED = "table_based"
    NONE = "none"


class StateTaxProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    rate: float = 0.0
    has_local_tax: bool = False
    local_tax_scheme: LocalTaxScheme = LocalTaxScheme.NONE
    brackets: Optional[Tuple[TaxBracket, ...]] = None


class LocalTaxTable(BaseModel):
    """Local income-tax rules for one state keyed by jurisdiction name."""

    model_config = ConfigDict(frozen=True)

    cities: Mapping[str, JurisdictionTaxRule] = Field(default_factory=dict)
    counties: Mapping[str, JurisdictionTaxRule] = Field(default_factory=dict)
    default_rule: Optional[JurisdictionTaxRule] = None
    statewide_rule: Optional[JurisdictionTaxRule] = None

    @property
    def jurisdictions(self) -> List[str]:
        return sorted(set(self.cities) | set(self.counties))


class PropertyTaxLookup(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float
    source: str
    is_state_average: bool = False


class PayFrequency(str, Enum):
    HOURLY = "hourly"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


PAY_PERIODS_PER_YEAR = {
    PayFrequency.HOURLY: 2080,
    PayFrequency.WEEKLY: 52,
    PayFrequency.BIWEEKLY: 26,
    PayFrequency.MONTHLY: 12,
    PayFrequency.ANNUAL: 1,
}


class IncomeInput(BaseModel):
    amount: float = 0.0
    pay_frequency: PayFrequency = PayFrequency.ANNUAL
    monthly_take_home: Optional[float] = None

    @property
    def uses_take_home(self) -> bool:
        return self.monthly_take_home is not None


class DownPayment(BaseModel):
    kind: Literal["percent", "amount"] = "percent"
    value: float = 20.0

    def resolve(self, home_price: float) -> Tuple[float, float]:
        """Return ``(amount, percent)`` for ``home_price``."""
        if self.kind == "percent":
            return down_payment_amount(home_price, self.value), self.value
        return self.value, down_payment_percent(home_price, self.value)


class HousingScenario(BaseModel):
    home_price: Optional[float] = None
    down_payment: DownPayment = Field(default_factory=DownPayment)
    loan_term_years: int = 30
    interest_rate: float = 6.5
    include_insurance: bool = True
    insurance_annual: float = 1200.0
    is_fha: bool = False

    @model_validator(mode="after")
    def _fha_down_payment(self):
        # FHA scenarios always use the program minimum down payment.
        if self.is_fha and self.down_payment != DownPayment(kind="percent", value=3.5):
            self.down_payment = DownPayment(kind="percent", value=3.5)
        return self


class AffordabilityRequest(BaseModel):
    income: IncomeInput
    scenario: HousingScenario = Field(default_factory=HousingScenario)
    monthly_debts: float = 0.0
    state: str
    locality: Optional[str] = None


class TaxBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    annual_income: float = 0.0
    federal: float = 0.0
    fica: float = 0.0
    fica_social_security: float = 0.0
    fica_medicare: float = 0.0
    state: float = 0.0
    local: float = 0.0
    total: float = 0.0

    @property
    def effective_rate(self) -> float:
        if self.annual_income <= 0:
            raise ZeroIncomeError("effective tax rate is undefined for zero income")
        return self.total / self.annual_income


class AffordabilityTier(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class TermPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    term_years: int
    interest_rate: float
    payment: float
    total_payment: float
    total_interest: float
    percent_of_gross_income: float
    percent_of_take_home_income: Optional[float] = None
    tier: AffordabilityTier


class SolverResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_home_price: float
    payment_limit: float
    max_pi_payment: float
    rounds: int
    converged: bool


class AffordabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal["max_price", "analyze"]
    home_price: float
    loan_amount: float
    down_payment_amount: float
    down_payment_percent: float
    monthly_principal_interest: float
    monthly_property_tax: float
    monthly_insurance: float
    monthly_mip: float
    total_monthly_payment: float
    percent_of_gross_income: float
    percent_of_take_home_income: Optional[float] = None
    tier: AffordabilityTier
    is_affordable: bool
    closing_costs: float
    upfront_mip: float
    total_closing_costs: float
    total_cash_needed: float
    property_tax_rate: float
    property_tax_source: str
    is_fha: bool = False
    monthly_debts: float = 0.0
    annual_income: float
    monthly_gross_income: float
    monthly_take_home: float
    taxes: TaxBreakdown
    payments_by_term: Dict[int, TermPayment] = Field(default_factory=dict)
    solver: Optional[SolverResult] = None
    advisories: List[RuleResult] = Field(default_factory=list)


class CalculationOutcome(BaseModel):
    result: Optional[AffordabilityResult] = None
    errors: Dict[str, str] = Field(default_factory=dict)
    general_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None
