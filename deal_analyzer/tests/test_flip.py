import pytest

from deal_analyzer.core.flip import calculate_flip
from deal_analyzer.core.inputs import FlipInputs
from deal_analyzer.core.timeline import summarize_years
from deal_analyzer.core.utils import monthly_rate_from_annual


def scenario(**overrides):
    params = dict(
        purchase_price=120_000,
        rehab_cost=30_000,
        arv=200_000,
        purchase_closing_cost_rate=0.01,
        annual_appreciation_rate=0,
        property_tax_rate=0.01,
        insurance_per_month=100,
        rehab_months=4,
        months_on_market=2,
        agent_fee_rate=0.06,
        seller_closing_cost_rate=0.02,
        marginal_tax_rate=0.25,
        bridge_interest_rate_annual=0.1,
        bridge_ltv=0.9,
    )
    params.update(overrides)
    return FlipInputs(**params)


def test_hold_costs_and_sale_profit():
    inputs = scenario()
    res = calculate_flip(inputs)
    hold_months = 6
    assert len(res.monthly) == hold_months + 1
    assert res.metrics.hold_months == hold_months

    bridge = 0.9 * 150_000
    interest_total = hold_months * monthly_rate_from_annual(0.1) * bridge
    cash_invested = 150_000 - bridge + 0.01 * 120_000
    taxes_total = hold_months * 0.01 * 120_000 / 12
    insurance_total = hold_months * 100
    total_cash_required = cash_invested + interest_total + taxes_total + insurance_total
    assert res.metrics.total_cash_required == pytest.approx(total_cash_required)

    net_after_payoff = 200_000 * (1 - 0.06 - 0.02) - bridge
    assert res.metrics.profit_before_tax == pytest.approx(net_after_payoff - total_cash_required)
    assert res.metrics.roi == res.metrics.profit_before_tax / res.metrics.total_cash_required


def test_profit_after_tax_only_on_gains():
    gain = calculate_flip(scenario())
    assert gain.metrics.profit_before_tax > 0
    assert gain.metrics.profit_after_tax == pytest.approx(gain.metrics.profit_before_tax * 0.75)

    loss = calculate_flip(scenario(arv=140_000))
    assert loss.metrics.profit_before_tax < 0
    assert loss.metrics.profit_after_tax == loss.metrics.profit_before_tax


def test_sale_event_row():
    res = calculate_flip(scenario())
    sale = res.monthly[-1]
    bridge = 135_000
    assert sale.month == 7
    assert sale.gross_income == 200_000
    assert sale.rent == 0
    assert sale.operating_expenses == pytest.approx(200_000 * 0.08)
    assert sale.debt_service == bridge
    assert sale.cash_flow == pytest.approx(200_000 * 0.92 - bridge)
    assert sale.loan_balance == 0
    assert sale.equity == sale.property_value - sale.loan_balance
    assert sale.cumulative_cash_flow == pytest.approx(res.monthly[-2].cumulative_cash_flow + sale.cash_flow)


def test_phase_tags_switch_at_rehab_end():
    res = calculate_flip(scenario())
    assert [m.phase for m in res.monthly] == ["rehab"] * 4 + ["marketing"] * 3


def test_hold_months_are_interest_only():
    res = calculate_flip(scenario())
    interest = 135_000 * monthly_rate_from_annual(0.1)
    for m in res.monthly[:6]:
        assert m.loan_balance == 135_000
        assert m.debt_service == pytest.approx(interest)
        assert m.cash_flow == pytest.approx(-m.operating_expenses - interest)
    assert res.monthly[0].cumulative_cash_flow == pytest.approx(-(15_000 + 1_200) + res.monthly[0].cash_flow)


def test_sale_price_defaults_to_arv_and_can_be_overridden():
    assert calculate_flip(scenario()).monthly[-1].gross_income == 200_000
    assert calculate_flip(scenario(sale_price=210_000)).monthly[-1].gross_income == 210_000


def test_taxes_follow_appreciating_value():
    flat = calculate_flip(scenario())
    rising = calculate_flip(scenario(annual_appreciation_rate=0.06))
    assert rising.metrics.total_cash_required > flat.metrics.total_cash_required
    assert rising.monthly[5].taxes > rising.monthly[0].taxes


def test_no_annual_rollup_but_monthly_can_be_summarized():
    res = calculate_flip(scenario(rehab_months=10, months_on_market=4))
    assert not hasattr(res, "annual")
    years = summarize_years(res.monthly, cash_invested=res.metrics.total_cash_required, equity_start=0.0)
    assert [y.year for y in years] == [1, 2]
    assert sum(y.cash_flow for y in years) == pytest.approx(sum(m.cash_flow for m in res.monthly))


def test_zero_cash_required_gives_zero_roi():
    res = calculate_flip(
        scenario(bridge_ltv=1.0, purchase_closing_cost_rate=0, bridge_interest_rate_annual=0,
                 property_tax_rate=0, insurance_per_month=0)
    )
    assert res.metrics.total_cash_required == 0
    assert res.metrics.roi == 0


def test_idempotent():
    inputs = scenario(annual_appreciation_rate=0.03)
    assert calculate_flip(inputs) == calculate_flip(inputs)


def test_bridge_rate_below_minus_one_gives_plain_numbers():
    res = calculate_flip(scenario(bridge_interest_rate_annual=-2.0))
    assert all(m.debt_service == 0 for m in res.monthly[:-1])
    assert isinstance(res.metrics.total_cash_required, float)
    assert isinstance(res.metrics.roi, float)
    assert res.metrics.roi > 0
