from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .amortization import amort_schedule
from .inputs import BRRRRInputs
from .results import PHASE_REHAB, PHASE_STABILIZED, BRRRRMetrics, BRRRRResult
from .timeline import MonthStep, Phase, property_value_for_month, rent_for_month, run_phases, summarize_years
from .utils import monthly_rate_from_annual, opt, safe_div


@dataclass(frozen=True)
class Refinance:
    """The refinance event, resolved analytically at the end of rehab."""

    loan_amount: float
    closing_costs: float
    points: float
    bridge_payoff: float

    @property
    def cash_out(self) -> float:
        return self.loan_amount - self.closing_costs - self.points - self.bridge_payoff


def bridge_principal(purchase_price: float, rehab_cost: float, bridge_ltv: Optional[float]) -> float:
    """Bridge loan sized on purchase plus rehab; fully financed when no LTV is given."""
    ltv = opt(bridge_ltv, 1.0)
    return ltv * (purchase_price + rehab_cost)


def calculate_brrrr(inputs: BRRRRInputs) -> BRRRRResult:
    """Project a BRRRR deal: interest-only rehab, refinance, then amortizing rental."""
    appreciation = monthly_rate_from_annual(opt(inputs.annual_appreciation_rate))
    rent_growth = opt(inputs.annual_rent_increase_rate)
    bridge_rate = monthly_rate_from_annual(opt(inputs.bridge_interest_rate_annual))
    long_term = inputs.long_term_loan
    tax_rate = opt(inputs.property_tax_rate)
    insurance = opt(inputs.insurance_per_month)
    rehab_months = max(0, inputs.rehab_months)

    start_value = inputs.as_is_value if inputs.as_is_value is not None else inputs.purchase_price
    bridge = bridge_principal(inputs.purchase_price, inputs.rehab_cost, inputs.bridge_ltv)
    bridge_interest_monthly = bridge * bridge_rate

    purchase_closing_costs = opt(inputs.purchase_closing_cost_rate) * inputs.purchase_price
    cash_before_refi = max(0.0, inputs.purchase_price + inputs.rehab_cost - bridge) + purchase_closing_costs

    refi_loan = inputs.refi_ltv * inputs.arv
    refi = Refinance(
        loan_amount=refi_loan,
        closing_costs=opt(inputs.refi_closing_cost_rate) * refi_loan,
        points=opt(inputs.refi_points_rate) * refi_loan,
        # Interest-only bridge: payoff equals the principal drawn
        bridge_payoff=bridge,
    )
    cash_left_in_deal = cash_before_refi - refi.cash_out
    cash_required = max(0.0, cash_left_in_deal)

    schedule = amort_schedule(
        principal=refi_loan,
        rate_per_period=monthly_rate_from_annual(long_term.interest_rate_annual),
        total_payments=long_term.loan_term_months,
    )

    def rehab_step(month: int, _local: int) -> MonthStep:
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

    def stabilized_step(month: int, local: int) -> MonthStep:
        # Rent escalates on the global month; value appreciates from ARV on the phase month
        rent = rent_for_month(inputs.monthly_rent, rent_growth, month)
        value = property_value_for_month(inputs.arv, appreciation, local)
        row = schedule[local - 1]
        taxes = tax_rate * value / 12
        vacancy = rent * opt(inputs.vacancy_rate)
        repairs = rent * opt(inputs.repairs_rate)
        capex = rent * opt(inputs.capex_rate)
        management = rent * opt(inputs.management_rate)
        expenses = taxes + insurance + vacancy + repairs + capex + management + opt(inputs.lease_up_fee)
        return MonthStep(
            rent=rent,
            gross_income=rent,
            vacancy=vacancy,
            operating_expenses=expenses,
            debt_service=row.payment,
            interest=row.interest,
            property_value=value,
            loan_balance=row.balance,
            taxes=taxes,
            insurance=insurance,
            rehab_spend=inputs.rehab_cost if month == 1 else 0.0,
        )

    phases = [
        Phase(PHASE_REHAB, rehab_months, rehab_step),
        Phase(PHASE_STABILIZED, len(schedule), stabilized_step),
    ]
    timeline = run_phases(phases, cash_before_refi)
    annual = summarize_years(
        timeline.monthly,
        cash_invested=cash_required,
        equity_start=start_value - bridge,
        interest=timeline.interest,
    )

    year_one_cash_flow = annual[0].cash_flow if annual else 0.0
    metrics = BRRRRMetrics(
        cash_required=cash_required,
        year_one_cash_flow=year_one_cash_flow,
        dscr=annual[0].dscr if annual else None,
        cash_on_cash_return=safe_div(year_one_cash_flow, cash_required, 0.0),
        total_return=annual[-1].total_return if annual else 0.0,
        cash_left_in_deal=cash_left_in_deal,
        refi_proceeds=refi.loan_amount,
        bridge_interest=rehab_months * bridge_interest_monthly,
    )
    logger.debug(
        "Projected BRRRR deal",
        rehab_months=rehab_months,
        months=len(timeline.monthly),
        refi_cash_out=refi.cash_out,
        cash_left_in_deal=cash_left_in_deal,
    )
    return BRRRRResult(monthly=timeline.monthly, annual=annual, metrics=metrics)
