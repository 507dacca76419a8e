import pytest

from homecalc.validation import (
    validate_down_payment_amount,
    validate_down_payment_percent,
    validate_home_price,
    validate_income,
    validate_inputs,
    validate_insurance,
    validate_interest_rate,
    validate_loan_term,
    validate_local_jurisdiction,
    validate_monthly_debts,
    validate_pay_type,
    validate_state,
    validate_take_home,
)

VALID_FORM = {
    "income": "95000",
    "pay_type": "annual",
    "state": "Texas",
    "locality": "Harris",
    "monthly_debts": "",
    "down_payment_type": "percent",
    "down_payment_percent": "20",
    "interest_rate": "6.5",
    "loan_term_years": 30,
    "include_insurance": True,
    "insurance_annual": "1200",
}


def test_income_messages():
    assert validate_income("") == "Income is required"
    assert validate_income(None) == "Income is required"
    assert validate_income("abc") == "Please enter a valid income amount"
    assert validate_income("-5") == "Please enter a valid income amount"
    assert validate_income("52000") is None


def test_take_home_messages():
    assert validate_take_home("") == "Monthly take-home pay is required"
    assert validate_take_home("0") == "Please enter a valid monthly take-home amount"
    assert validate_take_home("4200") is None


def test_pay_type():
    assert validate_pay_type(None) == "Pay type is required"
    assert validate_pay_type("daily") == "Please select a valid pay type"
    assert validate_pay_type("biweekly") is None


def test_state():
    assert validate_state("") == "State selection is required"
    assert validate_state("Atlantis") == "Please select a valid state"
    assert validate_state("Ohio") is None


def test_local_jurisdiction():
    assert validate_local_jurisdiction("Indiana", "") == "Please select a county"
    assert validate_local_jurisdiction("Indiana", "Nowhere") == "Please select a valid county"
    assert validate_local_jurisdiction("Indiana", "Marion") is None
    assert validate_local_jurisdiction("Pennsylvania", "") == "Please select a city/county"
    # Default and statewide rates make any locality acceptable.
    assert validate_local_jurisdiction("Michigan", "") is None
    assert validate_local_jurisdiction("Michigan", "Lansing") is None
    assert validate_local_jurisdiction("Oregon", None) is None
    assert validate_local_jurisdiction("Texas", "Anywhere") is None


@pytest.mark.parametrize("value", ["", None, "0", "250.50"])
def test_monthly_debts_optional(value):
    assert validate_monthly_debts(value) is None


def test_monthly_debts_invalid():
    assert validate_monthly_debts("-1") == "Monthly debts must be a positive number or zero"
    assert validate_monthly_debts("lots") == "Monthly debts must be a positive number or zero"


def test_home_price():
    assert validate_home_price("") == "Home price is required"
    assert validate_home_price("0") == "Please enter a valid home price"
    assert validate_home_price("425000") is None


@pytest.mark.parametrize("value,ok", [("0", True), ("100", True), ("-0.1", False), ("100.1", False), ("x", False)])
def test_down_payment_percent_range(value, ok):
    msg = validate_down_payment_percent(value)
    assert (msg is None) is ok
    if not ok:
        assert msg == "Down payment must be between 0% and 100%"


def test_down_payment_amount():
    assert validate_down_payment_amount("") == "Please enter a valid down payment amount"
    assert validate_down_payment_amount("-1") == "Please enter a valid down payment amount"
    assert validate_down_payment_amount("0") is None


@pytest.mark.parametrize("value,ok", [("0", True), ("30", True), ("30.01", False), ("-1", False)])
def test_interest_rate_range(value, ok):
    assert (validate_interest_rate(value) is None) is ok


@pytest.mark.parametrize("value,ok", [(1, True), (50, True), (0, False), (51, False), ("15", True), ("15.5", False)])
def test_loan_term_range(value, ok):
    assert (validate_loan_term(value) is None) is ok


def test_insurance():
    assert validate_insurance("") is None
    assert validate_insurance("-100") == "Please enter a valid annual insurance amount"


def test_valid_form_has_no_errors():
    assert validate_inputs(VALID_FORM) == {}


def test_all_errors_are_collected():
    errors = validate_inputs({"down_payment_percent": "150", "interest_rate": "45"})
    assert errors["income"] == "Income is required"
    assert errors["state"] == "State selection is required"
    assert errors["down_payment_percent"] == "Down payment must be between 0% and 100%"
    assert errors["interest_rate"] == "Interest rate must be between 0% and 30%"
    assert errors["loan_term_years"] == "Loan term is required"
    assert "locality" not in errors


def test_analyze_mode_requires_home_price():
    assert "home_price" not in validate_inputs(VALID_FORM, "max_price")
    assert validate_inputs(VALID_FORM, "analyze") == {"home_price": "Home price is required"}


def test_take_home_form_skips_income():
    form = dict(VALID_FORM, income="", use_custom_take_home=True, monthly_take_home="5000")
    assert validate_inputs(form) == {}


def test_fha_ignores_down_payment_fields():
    form = dict(VALID_FORM, is_fha=True, down_payment_percent="500")
    assert validate_inputs(form) == {}


def test_unknown_mode():
    with pytest.raises(ValueError):
        validate_inputs(VALID_FORM, "refinance")


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", "Infinity"])
def test_non_finite_numbers_are_rejected(value):
    assert validate_income(value) == "Please enter a valid income amount"
    assert validate_take_home(value) == "Please enter a valid monthly take-home amount"
    assert validate_home_price(value) == "Please enter a valid home price"
    assert validate_monthly_debts(value) is not None
    assert validate_interest_rate(value) == "Interest rate must be between 0% and 30%"


def test_income_upper_bound_applies_after_annualizing():
    assert validate_income("100000000") is None
    assert validate_income("100000001") == "Annual income must be at most $100,000,000"
    assert validate_income("1e306", "hourly") == "Annual income must be at most $100,000,000"
    assert validate_income("50000", "hourly") is None
    assert validate_income("50000", "daily") is None
    assert validate_take_home("9000000").startswith("Monthly take-home must be at most")


def test_huge_hourly_income_is_a_field_error():
    errors = validate_inputs(dict(VALID_FORM, income="1e306", pay_type="hourly"))
    assert set(errors) == {"income"}
