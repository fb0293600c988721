from __future__ import annotations

from loguru import logger

from .brrrr import bridge_principal
from .inputs import FlipInputs
from .results import PHASE_MARKETING, PHASE_REHAB, FlipMetrics, FlipResult
from .taxes import profit_after_tax
from .timeline import MonthStep, Phase, property_value_for_month, run_phases
from .utils import monthly_rate_from_annual, opt, safe_div


def calculate_flip(inputs: FlipInputs) -> FlipResult:
    """Project a fix-and-flip: interest-only carry through rehab and marketing, then sale.

    The monthly sequence ends with one synthetic sale row (month hold+1)
    carrying the sale price as income, disposition costs as expenses and the
    bridge payoff as debt service. No annual rollup is produced; use
    ``summarize_years`` on ``monthly`` for a yearly view.
    """
    appreciation = monthly_rate_from_annual(opt(inputs.annual_appreciation_rate))
    bridge_rate = monthly_rate_from_annual(opt(inputs.bridge_interest_rate_annual))
    rehab_months = max(0, inputs.rehab_months)
    market_months = max(0, inputs.months_on_market)
    hold_months = rehab_months + market_months
    sale_price = inputs.sale_price if inputs.sale_price is not None else inputs.arv
    start_value = inputs.as_is_value if inputs.as_is_value is not None else inputs.purchase_price
    tax_rate = opt(inputs.property_tax_rate)
    insurance = opt(inputs.insurance_per_month)

    bridge = bridge_principal(inputs.purchase_price, inputs.rehab_cost, inputs.bridge_ltv)
    bridge_interest_monthly = bridge * bridge_rate
    down_payment = max(0.0, inputs.purchase_price + inputs.rehab_cost - bridge)
    cash_at_purchase = down_payment + opt(inputs.purchase_closing_cost_rate) * inputs.purchase_price

    # Sale side is netted from proceeds, never added to cash required
    agent_fees = sale_price * opt(inputs.agent_fee_rate)
    seller_closing_costs = sale_price * opt(inputs.seller_closing_cost_rate)
    net_after_payoff = sale_price - agent_fees - seller_closing_costs - bridge

    def hold_step(month: int, _local: int) -> MonthStep:
        value = property_value_for_month(start_value, appreciation, month)
        taxes = tax_rate * value / 12
        return MonthStep(
            operating_expenses=taxes + insurance,
            debt_service=bridge_interest_monthly,
            interest=bridge_interest_monthly,
            property_value=value,
            loan_balance=bridge,
            taxes=taxes,
            insurance=insurance,
            rehab_spend=inputs.rehab_cost if month == 1 else 0.0,
        )

    def sale_step(_month: int, _local: int) -> MonthStep:
        return MonthStep(
            gross_income=sale_price,
            operating_expenses=agent_fees + seller_closing_costs,
            debt_service=bridge,
            property_value=sale_price,
            loan_balance=0.0,
        )

    phases = [
        Phase(PHASE_REHAB, rehab_months, hold_step),
        Phase(PHASE_MARKETING, market_months, hold_step),
        Phase(PHASE_MARKETING, 1, sale_step),
    ]
    timeline = run_phases(phases, cash_at_purchase)
    hold = timeline.monthly[:hold_months]

    interest_total = hold_months * bridge_interest_monthly
    taxes_total = sum(m.taxes for m in hold)
    insurance_total = hold_months * insurance
    total_cash_required = cash_at_purchase + interest_total + taxes_total + insurance_total

    profit_before_tax = net_after_payoff - total_cash_required
    metrics = FlipMetrics(
        total_cash_required=total_cash_required,
        profit_before_tax=profit_before_tax,
        profit_after_tax=profit_after_tax(profit_before_tax, opt(inputs.marginal_tax_rate)),
        roi=safe_div(profit_before_tax, total_cash_required, 0.0),
        hold_months=hold_months,
    )
    logger.debug(
        "Projected flip",
        hold_months=hold_months,
        total_cash_required=total_cash_required,
        profit_before_tax=profit_before_tax,
    )
    return FlipResult(monthly=timeline.monthly, metrics=metrics)
