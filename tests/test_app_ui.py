from streamlit.testing.v1 import AppTest

from homecalc.exceptions import NOT_AFFORDABLE_MESSAGE


def _app():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    return at


def _fill(at, **values):
    for label, value in values.items():
        next(w for w in at.text_input if w.label == label).input(value)
    at.run()


def _select_state(at, state):
    next(w for w in at.selectbox if w.label == "State").select(state)
    at.run()


def _calculate(at):
    next(b for b in at.button if b.label == "Calculate").click()
    at.run()


def test_max_price_flow_renders_results():
    at = _app()
    _fill(at, Income="120000")
    _select_state(at, "Texas")
    _calculate(at)
    assert not at.exception
    labels = [m.label for m in at.metric]
    assert "Max Home Price" in labels
    assert len(at.dataframe) == 1


def test_missing_fields_are_reported():
    at = _app()
    _calculate(at)
    assert not at.exception
    assert any("Please fix" in e.value for e in at.error)


def test_unaffordable_message():
    at = _app()
    _fill(at, Income="20000", **{"Monthly Debts": "2000"})
    _select_state(at, "Texas")
    _calculate(at)
    assert any(e.value == NOT_AFFORDABLE_MESSAGE for e in at.error)


def test_analyze_mode_needs_home_price():
    at = _app()
    at.radio(key="mode_choice").set_value("Analyze a home")
    at.run()
    _fill(at, Income="120000", **{"Home Price": "350000"})
    _select_state(at, "Texas")
    _calculate(at)
    assert not at.exception
    assert "Home Price" in [m.label for m in at.metric]


def test_locality_picker_follows_state():
    at = _app()
    _select_state(at, "Indiana")
    picker = next(w for w in at.selectbox if w.label == "County / City")
    assert "Marion" in picker.options
    assert "Hamilton" in picker.options


def flagged_dashboard_app():
    from homecalc.analysis import run_calculation
    from homecalc.rules import RuleResult
    from ui.dashboard import render_dashboard_view

    form = {
        "income": "120000",
        "state": "Texas",
        "locality": "Harris",
        "down_payment_percent": "20",
        "interest_rate": "6.5",
        "loan_term_years": 30,
    }
    result = run_calculation(form).result
    critical = RuleResult(code="NO_INCOME", severity="critical", message="No income entered.")
    render_dashboard_view(result.model_copy(update={"advisories": [critical]}))


def analyze_dashboard_app():
    from homecalc.analysis import run_calculation
    from homecalc.presets import UnderwritingAssumptions
    from ui.dashboard import render_dashboard_view

    a = UnderwritingAssumptions(front_end_pct=25, back_end_pct=33)
    form = {
        "income": "120000",
        "state": "Texas",
        "locality": "Harris",
        "home_price": "500000",
        "down_payment_percent": "20",
        "interest_rate": "6.5",
        "loan_term_years": 30,
    }
    render_dashboard_view(run_calculation(form, "analyze", assumptions=a).result, a)


def test_critical_advisory_shows_blocking_banner():
    at = AppTest.from_function(flagged_dashboard_app, default_timeout=30)
    at.run()
    assert not at.exception
    assert any("Critical warnings present" in e.value for e in at.error)


def test_normal_result_has_no_blocking_banner():
    at = _app()
    _fill(at, Income="120000")
    _select_state(at, "Texas")
    _calculate(at)
    assert not any("Critical warnings present" in e.value for e in at.error)


def test_verdict_quotes_configured_guidelines():
    at = AppTest.from_function(analyze_dashboard_app, default_timeout=30)
    at.run()
    assert not at.exception
    assert any(w.value == "This home exceeds the 25/33 guidelines." for w in at.warning)
