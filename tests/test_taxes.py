import pytest

from homecalc.exceptions import ZeroIncomeError
from homecalc.taxes import (
    calculate_federal_tax,
    calculate_fica_tax,
    calculate_state_tax,
    compute_tax_burden,
    convert_to_annual_income,
)

BOUNDARIES = [11600, 47150, 100525, 191950, 243725, 609350]


def test_federal_tax_marginal_slices():
    # 10% of 11,600 + 12% of 35,550 + 22% of 2,850
    assert calculate_federal_tax(50000) == pytest.approx(6053)


@pytest.mark.parametrize("boundary", BOUNDARIES)
def test_federal_tax_continuous_at_boundaries(boundary):
    below = calculate_federal_tax(boundary - 0.01)
    at = calculate_federal_tax(boundary)
    above = calculate_federal_tax(boundary + 0.01)
    assert below <= at <= above
    assert above - below < 0.01


def test_federal_tax_monotonic():
    incomes = range(0, 800001, 5000)
    taxes = [calculate_federal_tax(i) for i in incomes]
    assert all(a <= b for a, b in zip(taxes, taxes[1:]))


def test_fica_below_caps():
    fica = calculate_fica_tax(100000)
    assert fica["social_security"] == pytest.approx(6200)
    assert fica["medicare"] == pytest.approx(1450)
    assert fica["total"] == pytest.approx(7650)


def test_fica_above_wage_cap_and_surtax():
    fica = calculate_fica_tax(250000)
    assert fica["social_security"] == pytest.approx(168600 * 0.062)
    assert fica["medicare"] == pytest.approx(250000 * 0.0145 + 50000 * 0.009)
    assert fica["total"] == pytest.approx(14528.2)


def test_state_flat_and_no_tax_states():
    assert calculate_state_tax(100000, "Illinois") == pytest.approx(4900)
    assert calculate_state_tax(100000, "Texas") == 0.0
    assert calculate_state_tax(100000, "Atlantis") == 0.0


def test_new_york_progressive_with_base():
    assert calculate_state_tax(100000, "New York") == pytest.approx(4271 + 19350 * 0.06)


def test_non_positive_income_is_untaxed():
    burden = compute_tax_burden("not a number", "New York", "New York City")
    assert burden.total == 0.0
    assert compute_tax_burden(-5000, "Ohio", "Columbus").total == 0.0


def test_tax_burden_layers_sum():
    b = compute_tax_burden(120000, "Michigan", "Detroit")
    assert b.local == pytest.approx(2880)
    assert b.total == pytest.approx(b.federal + b.fica + b.state + b.local)
    assert b.fica == pytest.approx(b.fica_social_security + b.fica_medicare)
    assert 0 < b.effective_rate < 1


def test_effective_rate_rejects_zero_income():
    with pytest.raises(ZeroIncomeError):
        compute_tax_burden(0, "Texas").effective_rate


@pytest.mark.parametrize(
    "amount,freq,expected",
    [
        (25, "hourly", 52000),
        (1000, "weekly", 52000),
        (2000, "biweekly", 52000),
        (5000, "monthly", 60000),
        (75000, "annual", 75000),
        ("abc", "annual", 0),
    ],
)
def test_convert_to_annual_income(amount, freq, expected):
    assert convert_to_annual_income(amount, freq) == pytest.approx(expected)


def test_convert_unknown_frequency():
    with pytest.raises(ValueError):
        convert_to_annual_income(1000, "fortnightly")
