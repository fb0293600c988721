from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .inputs import BRRRRInputs, BuyHoldInputs, FlipInputs, LoanTerms
from .rehab import QualityTier, RehabItem, RehabSelection, total_rehab_cost


@dataclass(frozen=True)
class Assumptions:
    # Closing costs & points
    purchase_closing_cost_rate: float = 0.025
    refi_closing_cost_rate: float = 0.025
    refi_points_rate: float = 0.01

    # Growth
    annual_appreciation_rate: float = 0.03
    annual_rent_increase_rate: float = 0.025

    # Carrying costs
    property_tax_rate: float = 0.0125
    insurance_per_month: float = 135.0

    # Rental reserves (share of rent)
    vacancy_rate: float = 0.06
    repairs_rate: float = 0.08
    capex_rate: float = 0.05
    management_rate: float = 0.08
    lease_up_fee: float = 500.0

    # Financing
    buy_hold_ltv: float = 0.75
    long_term_interest_rate_annual: float = 0.0675
    long_term_loan_term_months: int = 360
    bridge_ltv: float = 0.85
    bridge_interest_rate_annual: float = 0.10
    bridge_term_months: int = 6
    refi_ltv: float = 0.75

    # Exit
    agent_fee_rate: float = 0.06
    seller_closing_cost_rate: float = 0.02
    marginal_tax_rate: float = 0.25

    # Rehab pricing tiers
    quality_multipliers: Dict[str, float] = field(
        default_factory=lambda: {"A": 1.3, "B": 1.0, "C": 0.8}
    )


def buy_hold_inputs(
    purchase_price: float,
    monthly_rent: float,
    arv: Optional[float] = None,
    rehab_cost: float = 0.0,
    assumptions: Optional[Assumptions] = None,
) -> BuyHoldInputs:
    a = assumptions or Assumptions()
    return BuyHoldInputs(
        purchase_price=purchase_price,
        rehab_cost=rehab_cost,
        arv=purchase_price if arv is None else arv,
        purchase_closing_cost_rate=a.purchase_closing_cost_rate,
        annual_appreciation_rate=a.annual_appreciation_rate,
        annual_rent_increase_rate=a.annual_rent_increase_rate,
        property_tax_rate=a.property_tax_rate,
        insurance_per_month=a.insurance_per_month,
        monthly_rent=monthly_rent,
        vacancy_rate=a.vacancy_rate,
        repairs_rate=a.repairs_rate,
        capex_rate=a.capex_rate,
        management_rate=a.management_rate,
        lease_up_fee=a.lease_up_fee,
        loan=LoanTerms(
            loan_term_months=a.long_term_loan_term_months,
            interest_rate_annual=a.long_term_interest_rate_annual,
            ltv=a.buy_hold_ltv,
        ),
    )


def brrrr_inputs(
    purchase_price: float,
    rehab_cost: float,
    arv: float,
    monthly_rent: float,
    rehab_months: Optional[int] = None,
    assumptions: Optional[Assumptions] = None,
) -> BRRRRInputs:
    a = assumptions or Assumptions()
    return BRRRRInputs(
        purchase_price=purchase_price,
        rehab_cost=rehab_cost,
        arv=arv,
        purchase_closing_cost_rate=a.purchase_closing_cost_rate,
        annual_appreciation_rate=a.annual_appreciation_rate,
        annual_rent_increase_rate=a.annual_rent_increase_rate,
        property_tax_rate=a.property_tax_rate,
        insurance_per_month=a.insurance_per_month,
        monthly_rent=monthly_rent,
        vacancy_rate=a.vacancy_rate,
        repairs_rate=a.repairs_rate,
        capex_rate=a.capex_rate,
        management_rate=a.management_rate,
        lease_up_fee=a.lease_up_fee,
        bridge_ltv=a.bridge_ltv,
        bridge_interest_rate_annual=a.bridge_interest_rate_annual,
        bridge_term_months=a.bridge_term_months,
        rehab_months=a.bridge_term_months if rehab_months is None else rehab_months,
        refi_ltv=a.refi_ltv,
        refi_points_rate=a.refi_points_rate,
        refi_closing_cost_rate=a.refi_closing_cost_rate,
        long_term_loan=LoanTerms(
            loan_term_months=a.long_term_loan_term_months,
            interest_rate_annual=a.long_term_interest_rate_annual,
        ),
    )


def flip_inputs(
    purchase_price: float,
    rehab_cost: float,
    arv: float,
    rehab_months: int,
    months_on_market: int,
    sale_price: Optional[float] = None,
    assumptions: Optional[Assumptions] = None,
) -> FlipInputs:
    a = assumptions or Assumptions()
    return FlipInputs(
        purchase_price=purchase_price,
        rehab_cost=rehab_cost,
        arv=arv,
        purchase_closing_cost_rate=a.purchase_closing_cost_rate,
        annual_appreciation_rate=a.annual_appreciation_rate,
        property_tax_rate=a.property_tax_rate,
        insurance_per_month=a.insurance_per_month,
        rehab_months=rehab_months,
        months_on_market=months_on_market,
        sale_price=sale_price,
        agent_fee_rate=a.agent_fee_rate,
        seller_closing_cost_rate=a.seller_closing_cost_rate,
        marginal_tax_rate=a.marginal_tax_rate,
        bridge_interest_rate_annual=a.bridge_interest_rate_annual,
        bridge_ltv=a.bridge_ltv,
    )


def rehab_budget(
    items: Iterable[RehabItem],
    selections: Iterable[RehabSelection],
    quality: QualityTier = "B",
    assumptions: Optional[Assumptions] = None,
) -> float:
    """Rehab total priced with the configured quality multipliers."""
    a = assumptions or Assumptions()
    return total_rehab_cost(items, selections, quality, a.quality_multipliers)
