import pytest

from homecalc.rules import evaluate_rules, has_blocking


def _codes(state):
    return {r.code for r in evaluate_rules(state)}


def test_no_income_is_blocking():
    res = evaluate_rules({"monthly_gross_income": 0})
    assert "NO_INCOME" in {r.code for r in res}
    assert has_blocking(res)


def test_front_end_limit_without_debts():
    state = {"monthly_gross_income": 10000, "total_monthly_payment": 3000}
    assert "HOUSING_RATIO_OVER_LIMIT" in _codes(state)
    assert "TOTAL_DTI_OVER_LIMIT" not in _codes(state)


def test_back_end_limit_with_debts():
    state = {"monthly_gross_income": 10000, "total_monthly_payment": 3000, "monthly_debts": 700}
    codes = _codes(state)
    assert "TOTAL_DTI_OVER_LIMIT" in codes
    assert "HOUSING_RATIO_OVER_LIMIT" not in codes


def test_within_limits_is_quiet():
    res = evaluate_rules({"monthly_gross_income": 10000, "total_monthly_payment": 2500})
    assert res == []
    assert not has_blocking(res)


def test_custom_targets():
    state = {"monthly_gross_income": 10000, "total_monthly_payment": 2500, "target_FE": 20}
    assert "HOUSING_RATIO_OVER_LIMIT" in _codes(state)


def test_informational_flags():
    state = {
        "monthly_gross_income": 10000,
        "take_home_negative": True,
        "gross_estimated_from_take_home": True,
        "property_tax_source_kind": "state_average",
        "local_tax_unmodeled": True,
        "solver_converged": False,
        "solver_rounds": 10,
    }
    codes = _codes(state)
    assert {
        "NO_TAKE_HOME",
        "GROSS_ESTIMATED",
        "PROPERTY_TAX_STATE_AVERAGE",
        "LOCAL_TAX_NOT_MODELED",
        "SOLVER_NOT_CONVERGED",
    } <= codes


def test_default_property_tax_flag():
    assert "PROPERTY_TAX_DEFAULT" in _codes({"monthly_gross_income": 1, "property_tax_source_kind": "default"})


def test_solver_flag_only_when_not_converged():
    assert "SOLVER_NOT_CONVERGED" not in _codes({"monthly_gross_income": 1, "solver_converged": None})
    assert "SOLVER_NOT_CONVERGED" not in _codes({"monthly_gross_income": 1, "solver_converged": True})


def test_limit_messages_follow_targets():
    res = evaluate_rules({"monthly_gross_income": 10000, "total_monthly_payment": 2500, "target_FE": 20})
    assert res[0].message == "Housing payment exceeds the 20% front-end guideline."

    state = {"monthly_gross_income": 10000, "total_monthly_payment": 3000, "monthly_debts": 700, "target_BE": 33.5}
    res = evaluate_rules(state)
    assert res[0].message == "Housing payment plus debts exceeds the 33.5% back-end guideline."
    assert res[0].context["actual"] == pytest.approx(37)
    assert res[0].context["limit"] == 33.5


def test_ratio_at_target_is_not_flagged():
    state = {"monthly_gross_income": 10000, "total_monthly_payment": 2800.00000001}
    assert "HOUSING_RATIO_OVER_LIMIT" not in _codes(state)
    state = {"monthly_gross_income": 10000, "total_monthly_payment": 2500, "monthly_debts": 1100}
    assert "TOTAL_DTI_OVER_LIMIT" not in _codes(state)


def test_informational_messages_follow_state():
    res = evaluate_rules(
        {
            "monthly_gross_income": 1,
            "property_tax_source_kind": "default",
            "property_tax_rate": 0.02,
            "gross_estimated_from_take_home": True,
            "take_home_to_gross": 0.75,
            "solver_converged": False,
            "solver_tolerance": 250,
        }
    )
    messages = {r.code: r.message for r in res}
    assert "2% national default" in messages["PROPERTY_TAX_DEFAULT"]
    assert "25% total tax rate" in messages["GROSS_ESTIMATED"]
    assert "within $250" in messages["SOLVER_NOT_CONVERGED"]


def test_default_messages_match_presets():
    res = evaluate_rules({"monthly_gross_income": 1, "property_tax_source_kind": "default"})
    assert "1.1% national default" in res[0].message
