import pytest
from loguru import logger

from deal_analyzer.core.amortization import aggregate_yearly, amort_schedule, schedule_frame
from deal_analyzer.core.assumptions import buy_hold_inputs
from deal_analyzer.core.buy_hold import calculate_buy_hold
from deal_analyzer.core.timeline import MonthStep, Phase, rent_for_month, run_phases, summarize_years
from deal_analyzer.core.utils import monthly_rate_from_annual, safe_div


def test_rent_for_month_steps():
    assert rent_for_month(1000, 0.1, 1) == 1000
    assert rent_for_month(1000, 0.1, 12) == 1000
    assert rent_for_month(1000, 0.1, 13) == pytest.approx(1100)
    assert rent_for_month(1000, 0.1, 25) == pytest.approx(1210)


def test_run_phases_numbers_months_across_phases():
    seen = []

    def step(month, local):
        seen.append((month, local))
        return MonthStep(gross_income=100, operating_expenses=30, debt_service=50, property_value=1000, loan_balance=400)

    timeline = run_phases([Phase("rehab", 2, step), Phase("stabilized", 3, step)], initial_cash_invested=200)
    assert seen == [(1, 1), (2, 2), (3, 1), (4, 2), (5, 3)]
    assert [m.phase for m in timeline.monthly] == ["rehab", "rehab", "stabilized", "stabilized", "stabilized"]
    first = timeline.monthly[0]
    assert first.noi == 70
    assert first.cash_flow == 20
    assert first.equity == 600
    assert timeline.monthly[-1].cumulative_cash_flow == -200 + 5 * 20


def test_empty_phases():
    timeline = run_phases([Phase("rehab", 0, lambda month, local: MonthStep())], initial_cash_invested=0)
    assert timeline.monthly == ()
    assert summarize_years(timeline.monthly, 0.0, 0.0) == ()


def test_summarize_years_without_debt():
    step = lambda month, local: MonthStep(rent=10, gross_income=10, operating_expenses=4, property_value=100)
    timeline = run_phases([Phase("current", 14, step)], initial_cash_invested=0)
    years = summarize_years(timeline.monthly, cash_invested=0.0, equity_start=100.0)
    assert len(years) == 2
    assert years[0].rent == 120
    assert years[1].rent == 20
    assert years[0].dscr is None
    assert years[0].interest_paid == 0
    assert years[0].annual_return_on_invested_cash == 0
    assert years[0].equity_growth == 0


def test_annual_interest_agrees_with_loan_yearly_view():
    inputs = buy_hold_inputs(200_000, 1800)
    res = calculate_buy_hold(inputs)
    rate = monthly_rate_from_annual(inputs.loan.interest_rate_annual)
    yearly = aggregate_yearly(schedule_frame(amort_schedule(0.75 * 200_000, rate, 360)))
    for summary, (_, row) in zip(res.annual, yearly.iterrows()):
        assert summary.interest_paid == pytest.approx(row["interest"])
        assert summary.debt == pytest.approx(row["end_balance"])


def test_safe_div():
    assert safe_div(1, 0) is None
    assert safe_div(1, 0, 0.0) == 0.0
    assert safe_div(3, 2) == 1.5


def test_logging_is_opt_in():
    messages = []
    sink = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    try:
        calculate_buy_hold(buy_hold_inputs(250_000, 2000))
        assert messages == []
        logger.enable("deal_analyzer")
        calculate_buy_hold(buy_hold_inputs(250_000, 2000))
        assert "Projected buy-and-hold deal" in messages
    finally:
        logger.disable("deal_analyzer")
        logger.remove(sink)
