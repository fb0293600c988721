from __future__ import annotations

import math
from typing import List

from loguru import logger

from .inputs import BRRRRInputs, BuyHoldInputs, FlipInputs, StrategyInputs


def validation_warnings(inputs: StrategyInputs) -> List[str]:
    """Human-readable advisories about implausible inputs.

    Purely informational: the calculators accept the same record either way.
    """
    warnings: List[str] = []
    if inputs.purchase_price <= 0:
        warnings.append("Purchase price should be greater than zero.")
    if inputs.arv <= 0:
        warnings.append("ARV should be greater than zero.")
    if inputs.rehab_cost < 0:
        warnings.append("Rehab cost should not be negative.")

    loan = None
    if isinstance(inputs, BuyHoldInputs):
        loan = inputs.loan
    elif isinstance(inputs, BRRRRInputs):
        loan = inputs.long_term_loan
    if loan is not None:
        if loan.loan_term_months <= 0:
            warnings.append("Loan term should be greater than zero months.")
        rate = loan.interest_rate_annual
        if rate is None or not math.isfinite(rate):
            warnings.append("Interest rate looks missing.")

    if isinstance(inputs, (BuyHoldInputs, BRRRRInputs)) and inputs.monthly_rent <= 0:
        warnings.append("Monthly rent should be greater than zero for rental strategies.")

    if isinstance(inputs, BRRRRInputs):
        if inputs.rehab_months < 0:
            warnings.append("Rehab months should not be negative.")
        if inputs.refi_ltv > 1:
            warnings.append("Refinance LTV above 100% is unusual.")

    if isinstance(inputs, FlipInputs) and (inputs.rehab_months < 0 or inputs.months_on_market < 0):
        warnings.append("Rehab and market months should not be negative.")

    if warnings:
        logger.debug("Input warnings", strategy=inputs.strategy.value, count=len(warnings))
    return warnings
