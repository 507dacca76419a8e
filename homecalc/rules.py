from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from .calculators import housing_ratios
from .presets import (
    DEFAULT_PROPERTY_TAX_RATE,
    RATIO_TARGETS,
    RATIO_TOLERANCE_PCT,
    SOLVER_DEFAULTS,
    TAKE_HOME_TO_GROSS,
)


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(state: dict) -> List[RuleResult]:
    """Advisories for a finished calculation.

    ``state`` is a flat dictionary of figures assembled by the analysis layer;
    missing keys are treated as "not applicable".  Limits, the assumed tax
    rate and the fallback property-tax rate quoted in messages come from the
    same keys the checks use.
    """
    res: List[RuleResult] = []

    gross = float(state.get("monthly_gross_income", 0.0))
    payment = float(state.get("total_monthly_payment", 0.0))
    debts = float(state.get("monthly_debts", 0.0))
    target_FE = float(state.get("target_FE", RATIO_TARGETS["front_end"]))
    target_BE = float(state.get("target_BE", RATIO_TARGETS["back_end"]))

    if gross <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="No income entered; housing ratios are not meaningful.",
            )
        )
    else:
        FE, BE = housing_ratios(payment, debts, gross)
        if debts <= 0 and FE > target_FE + RATIO_TOLERANCE_PCT:
            res.append(
                RuleResult(
                    code="HOUSING_RATIO_OVER_LIMIT",
                    severity="warn",
                    message=f"Housing payment exceeds the {target_FE:g}% front-end guideline.",
                    context={"actual": FE, "limit": target_FE},
                )
            )
        if debts > 0 and BE > target_BE + RATIO_TOLERANCE_PCT:
            res.append(
                RuleResult(
                    code="TOTAL_DTI_OVER_LIMIT",
                    severity="warn",
                    message=f"Housing payment plus debts exceeds the {target_BE:g}% back-end guideline.",
                    context={"actual": BE, "limit": target_BE},
                )
            )

    if state.get("take_home_negative", False):
        res.append(
            RuleResult(
                code="NO_TAKE_HOME",
                severity="warn",
                message="Estimated taxes consume all income; take-home ratios are not shown.",
            )
        )

    if state.get("gross_estimated_from_take_home", False):
        tax_share = (1 - float(state.get("take_home_to_gross", TAKE_HOME_TO_GROSS))) * 100
        res.append(
            RuleResult(
                code="GROSS_ESTIMATED",
                severity="info",
                message=f"Gross income estimated from take-home pay assuming a {tax_share:g}% total tax rate.",
            )
        )

    source = state.get("property_tax_source_kind")
    rate = state.get("property_tax_rate")
    if source == "state_average":
        res.append(
            RuleResult(
                code="PROPERTY_TAX_STATE_AVERAGE",
                severity="info",
                message="County not found; property tax uses the state average rate.",
                context={"rate": rate},
            )
        )
    elif source == "default":
        shown = (DEFAULT_PROPERTY_TAX_RATE if rate is None else float(rate)) * 100
        res.append(
            RuleResult(
                code="PROPERTY_TAX_DEFAULT",
                severity="info",
                message=f"No property tax data for this state; a {shown:g}% national default is used.",
                context={"rate": rate},
            )
        )

    if state.get("local_tax_unmodeled", False):
        res.append(
            RuleResult(
                code="LOCAL_TAX_NOT_MODELED",
                severity="info",
                message="This state levies local income tax that is not modeled; local tax is shown as $0.",
            )
        )

    if state.get("solver_converged") is False:
        tolerance = float(state.get("solver_tolerance", SOLVER_DEFAULTS["tolerance"]))
        res.append(
            RuleResult(
                code="SOLVER_NOT_CONVERGED",
                severity="warn",
                message=f"Maximum price search did not settle within ${tolerance:,.0f}; treat the figure as approximate.",
                context={"rounds": state.get("solver_rounds")},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
