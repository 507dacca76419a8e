import logging

import pytest

from homecalc.property_tax import (
    counties_for_state,
    lookup_property_tax_rate,
    property_tax_frame,
    state_average_rates,
)

TEXAS_MEAN = (0.0209 + 0.0183 + 0.0193 + 0.0203 + 0.0198 + 0.0166) / 6


def test_exact_county():
    found = lookup_property_tax_rate("Texas", "Harris")
    assert found.rate == pytest.approx(0.0203)
    assert found.source == "Harris, Texas"
    assert not found.is_state_average


def test_unknown_county_uses_state_average():
    found = lookup_property_tax_rate("Texas", "Loving")
    assert found.rate == pytest.approx(TEXAS_MEAN)
    assert found.source == "Texas average (county not found)"
    assert found.is_state_average


def test_missing_county_uses_state_average():
    assert lookup_property_tax_rate("Texas", None).rate == pytest.approx(TEXAS_MEAN)


def test_unknown_state_is_absent():
    assert lookup_property_tax_rate("Alaska", "Anchorage") is None
    assert lookup_property_tax_rate(None, None) is None


def test_frame_is_a_copy():
    frame = property_tax_frame()
    frame.loc[:, "Rate"] = 1.0
    assert lookup_property_tax_rate("Texas", "Harris").rate == pytest.approx(0.0203)
    assert list(frame.columns) == ["State", "County", "Rate"]


def test_state_average_rates():
    means = state_average_rates()
    assert means["Texas"] == pytest.approx(TEXAS_MEAN)


def test_counties_for_state_merges_local_jurisdictions():
    names = counties_for_state("Pennsylvania")
    assert "Philadelphia" in names
    assert "Pittsburgh" in names
    assert "Erie" in names
    assert names == sorted(names)
    assert counties_for_state("Texas") == ["Bexar", "Collin", "Dallas", "Harris", "Tarrant", "Travis"]
    assert counties_for_state("Atlantis") == []


def test_blank_county_logs_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="homecalc.property_tax"):
        lookup_property_tax_rate("Texas", "")
        lookup_property_tax_rate("Texas", None)
    assert caplog.records
    assert all(r.levelno == logging.INFO for r in caplog.records)


def test_unknown_county_logs_a_warning(caplog):
    with caplog.at_level(logging.INFO, logger="homecalc.property_tax"):
        lookup_property_tax_rate("Texas", "Loving")
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert "'Loving'" in caplog.text
