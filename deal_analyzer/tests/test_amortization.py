import math

import pandas as pd
import pytest

from deal_analyzer.core.amortization import (
    aggregate_yearly,
    amort_schedule,
    interest_portion,
    payment,
    principal_portion,
    rollup_by_year,
    schedule_frame,
    summarize,
)
from deal_analyzer.core.utils import monthly_rate_from_annual, periodic_rate_from_annual


def test_fixed_payment_known_case():
    rate = monthly_rate_from_annual(0.06)
    # 200k over 30y at an effective 6% annual ~ 1178.74
    assert math.isclose(payment(rate, 360, 200_000), 1178.74, abs_tol=5e-3)


def test_zero_rate_payment_is_straight_line():
    assert payment(0, 12, 12_000) == 1000
    assert payment(0, 7, 1_000) == 1_000 / 7
    assert payment(0, 10, 1_000, future_value=500) == 150


def test_non_positive_term_has_no_payment_or_schedule():
    assert payment(0.01, 0, 100_000) == 0
    assert payment(0.01, -5, 100_000) == 0
    assert amort_schedule(100_000, 0.01, 0) == []
    assert schedule_frame([]).empty


def test_monthly_rate_uses_compounding():
    assert monthly_rate_from_annual(0) == 0
    assert math.isclose(monthly_rate_from_annual(0.07), 0.005654, abs_tol=1e-6)
    # Below simple division by 12
    assert monthly_rate_from_annual(0.06) < 0.06 / 12
    assert monthly_rate_from_annual(-0.12) < 0


def test_monthly_rate_strictly_increasing():
    rates = [-0.05, 0.0, 0.01, 0.05, 0.1, 0.25]
    converted = [monthly_rate_from_annual(r) for r in rates]
    assert all(a < b for a, b in zip(converted, converted[1:]))


def test_periodic_rate_quarterly():
    q = periodic_rate_from_annual(0.08, 4)
    assert math.isclose((1 + q) ** 4, 1.08)
    assert periodic_rate_from_annual(0.08) == monthly_rate_from_annual(0.08)


def test_amort_schedule_balances_down_to_zero():
    principal = 200_000
    rate = monthly_rate_from_annual(0.04)
    rows = amort_schedule(principal, rate, 300)
    assert len(rows) == 300
    assert rows[-1].balance == pytest.approx(0, abs=1e-6)
    assert sum(r.principal for r in rows) == pytest.approx(principal, abs=1e-6)


def test_interest_and_principal_split():
    rate = monthly_rate_from_annual(0.06)
    rows = amort_schedule(160_000, rate, 360)
    assert rows[0].interest == pytest.approx(160_000 * rate, abs=1e-9)
    for row in rows:
        assert row.interest + row.principal == pytest.approx(row.payment, abs=1e-9)
    balances = [r.balance for r in rows]
    assert all(b2 <= b1 for b1, b2 in zip(balances, balances[1:]))
    assert [r.period for r in rows[:3]] == [1, 2, 3]


def test_payment_override_floors_balance_at_zero():
    rows = amort_schedule(1_000, 0.01, 5, payment_amount=600)
    assert rows[1].balance == 0
    assert all(r.balance >= 0 for r in rows)


def test_begin_timing_pays_off_with_annuity_due():
    rate = monthly_rate_from_annual(0.05)
    end_payment = payment(rate, 120, 50_000)
    begin_payment = payment(rate, 120, 50_000, timing="begin")
    assert begin_payment == pytest.approx(end_payment / (1 + rate))

    rows = amort_schedule(50_000, rate, 120, timing="begin")
    assert rows[-1].balance == pytest.approx(0, abs=1e-6)
    assert rows[0].interest == pytest.approx(rate * (50_000 - begin_payment))
    for row in rows:
        assert row.interest + row.principal == pytest.approx(row.payment)


def test_ipmt_ppmt_for_a_period():
    rate = monthly_rate_from_annual(0.06)
    interest1 = interest_portion(rate, 1, 360, 100_000)
    principal1 = principal_portion(rate, 1, 360, 100_000)
    assert interest1 + principal1 == pytest.approx(payment(rate, 360, 100_000), abs=1e-6)
    assert interest_portion(rate, 12, 360, 100_000) < interest1
    assert principal_portion(rate, 12, 360, 100_000) > principal1


def test_ipmt_ppmt_out_of_range():
    rate = monthly_rate_from_annual(0.06)
    assert interest_portion(rate, 0, 360, 100_000) == 0
    assert interest_portion(rate, 361, 360, 100_000) == 0
    assert principal_portion(rate, 0, 360, 100_000) == 0


def test_summarize_yearly_view():
    s = summarize(100_000, 0.05, 240)
    assert len(s.schedule_monthly) == 240
    assert list(s.schedule_yearly["year"]) == list(range(1, 21))
    assert s.schedule_yearly["principal"].sum() == pytest.approx(100_000, abs=1e-6)
    assert s.schedule_yearly.iloc[-1]["end_balance"] == pytest.approx(0, abs=1e-6)
    first_year = s.schedule_monthly.iloc[:12]
    assert s.schedule_yearly.iloc[0]["interest"] == pytest.approx(first_year["interest"].sum())


def test_aggregate_yearly_partial_final_year():
    frame = schedule_frame(amort_schedule(10_000, 0.005, 18))
    yearly = aggregate_yearly(frame)
    assert list(yearly["year"]) == [1, 2]
    assert yearly.iloc[1]["payment"] == pytest.approx(frame["payment"].iloc[12:].sum())


def test_rates_at_or_below_minus_one_map_to_zero():
    assert monthly_rate_from_annual(-1.0) == 0.0
    assert monthly_rate_from_annual(-1.5) == 0.0
    assert periodic_rate_from_annual(-2.0, 4) == 0.0
    # Still unclamped just above -100%
    assert -1 < monthly_rate_from_annual(-0.99) < monthly_rate_from_annual(-0.5) < 0


def test_payment_with_zero_denominator_is_zero():
    assert payment(-1.0, 12, 1000, timing="begin") == 0.0
    assert payment(-2.0, 12, 1000) == 0.0
    rows = amort_schedule(1000, -1.0, 3, timing="begin")
    assert all(isinstance(row.payment, float) for row in rows)


def test_rollup_by_year_sums_flows_and_keeps_last_stock():
    frame = pd.DataFrame({"flow": [1.0] * 14, "stock": list(range(14))})
    rolled = rollup_by_year(frame, pd.Series(range(1, 15)), ["flow"], ["stock"])
    assert list(rolled.index) == [1, 2]
    assert rolled["flow"].tolist() == [12.0, 2.0]
    assert rolled["stock"].tolist() == [11, 13]
