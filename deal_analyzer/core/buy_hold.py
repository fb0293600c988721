from __future__ import annotations

from typing import Tuple

from loguru import logger

from .amortization import amort_schedule
from .inputs import BuyHoldInputs, LoanTerms
from .results import PHASE_STABILIZED, BuyHoldMetrics, BuyHoldResult
from .timeline import MonthStep, Phase, property_value_for_month, rent_for_month, run_phases, summarize_years
from .utils import monthly_rate_from_annual, opt, safe_div


def derive_loan_amount(purchase_price: float, loan: LoanTerms) -> Tuple[float, float]:
    """Return (loan_amount, down_payment).

    Precedence: explicit loan amount, then LTV, then explicit down payment.
    With none of them the purchase is all cash.
    """
    if loan.loan_amount is not None:
        return loan.loan_amount, max(0.0, purchase_price - loan.loan_amount)
    if loan.ltv is not None:
        amount = purchase_price * loan.ltv
        return amount, max(0.0, purchase_price - amount)
    if loan.down_payment is not None:
        return max(0.0, purchase_price - loan.down_payment), loan.down_payment
    return 0.0, purchase_price


def calculate_buy_hold(inputs: BuyHoldInputs) -> BuyHoldResult:
    """Project a buy-and-hold rental over the full loan term."""
    loan = inputs.loan
    loan_amount, down_payment = derive_loan_amount(inputs.purchase_price, loan)

    points = opt(loan.points_rate) * loan_amount
    loan_closing_costs = opt(loan.loan_closing_cost_rate) * loan_amount
    purchase_closing_costs = opt(inputs.purchase_closing_cost_rate) * inputs.purchase_price
    cash_invested = down_payment + inputs.rehab_cost + points + loan_closing_costs + purchase_closing_costs

    start_value = inputs.arv or inputs.purchase_price
    appreciation = monthly_rate_from_annual(opt(inputs.annual_appreciation_rate))
    rent_growth = opt(inputs.annual_rent_increase_rate)
    tax_rate = opt(inputs.property_tax_rate)
    insurance = opt(inputs.insurance_per_month)
    # Charged every month, not only at move-in
    lease_up = opt(inputs.lease_up_fee)
    reserve_rate = opt(inputs.repairs_rate) + opt(inputs.capex_rate) + opt(inputs.management_rate)

    schedule = amort_schedule(
        principal=loan_amount,
        rate_per_period=monthly_rate_from_annual(loan.interest_rate_annual),
        total_payments=loan.loan_term_months,
    )

    def step(month: int, _local: int) -> MonthStep:
        rent = rent_for_month(inputs.monthly_rent, rent_growth, month)
        value = property_value_for_month(start_value, appreciation, month)
        row = schedule[month - 1]
        vacancy = rent * opt(inputs.vacancy_rate)
        taxes = tax_rate * value / 12
        expenses = vacancy + rent * reserve_rate + taxes + insurance + lease_up
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

    timeline = run_phases([Phase(PHASE_STABILIZED, len(schedule), step)], cash_invested)
    annual = summarize_years(
        timeline.monthly,
        cash_invested=cash_invested,
        equity_start=start_value - loan_amount,
        interest=timeline.interest,
    )

    year_one_cash_flow = annual[0].cash_flow if annual else 0.0
    metrics = BuyHoldMetrics(
        cash_required=cash_invested,
        year_one_cash_flow=year_one_cash_flow,
        dscr=annual[0].dscr if annual else None,
        cash_on_cash_return=safe_div(year_one_cash_flow, cash_invested, 0.0),
        total_return=annual[-1].total_return if annual else 0.0,
    )
    logger.debug(
        "Projected buy-and-hold deal",
        months=len(timeline.monthly),
        loan_amount=loan_amount,
        cash_required=cash_invested,
    )
    return BuyHoldResult(monthly=timeline.monthly, annual=annual, metrics=metrics)
