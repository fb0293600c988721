from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

'''
Deal input records. Rates are decimals (0.07 for 7%), amounts in currency
units, terms in months. Optional rates default to 0 inside the calculators.
'''


class Strategy(str, Enum):
    BUY_HOLD = "BUY_HOLD"
    BRRRR = "BRRRR"
    FLIP = "FLIP"


@dataclass(frozen=True)
class LoanTerms:
    # Principal comes from the first of loan_amount, ltv, down_payment that is set
    loan_term_months: int = 360
    interest_rate_annual: float = 0.0
    loan_amount: Optional[float] = None
    ltv: Optional[float] = None
    down_payment: Optional[float] = None
    points_rate: Optional[float] = None
    loan_closing_cost_rate: Optional[float] = None


@dataclass(frozen=True)
class BuyHoldInputs:
    # Purchase & growth
    purchase_price: float = 0.0
    rehab_cost: float = 0.0
    arv: float = 0.0
    purchase_closing_cost_rate: Optional[float] = None
    annual_appreciation_rate: Optional[float] = None
    annual_rent_increase_rate: Optional[float] = None
    property_tax_rate: Optional[float] = None
    insurance_per_month: Optional[float] = None

    # Rent & operating reserves (rent-proportional)
    monthly_rent: float = 0.0
    vacancy_rate: Optional[float] = None
    repairs_rate: Optional[float] = None
    capex_rate: Optional[float] = None
    management_rate: Optional[float] = None
    lease_up_fee: Optional[float] = None

    loan: LoanTerms = field(default_factory=LoanTerms)

    # Informational only
    rehab_months: Optional[int] = None
    as_is_value: Optional[float] = None

    strategy: Strategy = field(default=Strategy.BUY_HOLD, init=False)


@dataclass(frozen=True)
class BRRRRInputs:
    # Purchase & growth
    purchase_price: float = 0.0
    rehab_cost: float = 0.0
    arv: float = 0.0
    purchase_closing_cost_rate: Optional[float] = None
    annual_appreciation_rate: Optional[float] = None
    annual_rent_increase_rate: Optional[float] = None
    property_tax_rate: Optional[float] = None
    insurance_per_month: Optional[float] = None

    # Rent & operating reserves (rent-proportional)
    monthly_rent: float = 0.0
    vacancy_rate: Optional[float] = None
    repairs_rate: Optional[float] = None
    capex_rate: Optional[float] = None
    management_rate: Optional[float] = None
    lease_up_fee: Optional[float] = None

    # Bridge (interest-only) financing during rehab
    bridge_ltv: Optional[float] = None
    bridge_interest_rate_annual: Optional[float] = None
    bridge_term_months: Optional[int] = None
    rehab_months: int = 0

    # Refinance into the long-term loan
    refi_ltv: float = 0.0
    refi_points_rate: Optional[float] = None
    refi_closing_cost_rate: Optional[float] = None
    long_term_loan: LoanTerms = field(default_factory=LoanTerms)

    as_is_value: Optional[float] = None

    strategy: Strategy = field(default=Strategy.BRRRR, init=False)


@dataclass(frozen=True)
class FlipInputs:
    # Purchase & growth
    purchase_price: float = 0.0
    rehab_cost: float = 0.0
    arv: float = 0.0
    purchase_closing_cost_rate: Optional[float] = None
    annual_appreciation_rate: Optional[float] = None
    annual_rent_increase_rate: Optional[float] = None
    property_tax_rate: Optional[float] = None
    insurance_per_month: Optional[float] = None

    # Timeline
    rehab_months: int = 0
    months_on_market: int = 0

    # Exit
    sale_price: Optional[float] = None
    agent_fee_rate: Optional[float] = None
    seller_closing_cost_rate: Optional[float] = None
    marginal_tax_rate: Optional[float] = None

    # Bridge financing
    bridge_interest_rate_annual: Optional[float] = None
    bridge_ltv: Optional[float] = None

    as_is_value: Optional[float] = None

    strategy: Strategy = field(default=Strategy.FLIP, init=False)


StrategyInputs = Union[BuyHoldInputs, BRRRRInputs, FlipInputs]
