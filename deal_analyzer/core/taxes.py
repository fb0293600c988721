from __future__ import annotations


def flip_income_tax(profit: float, marginal_rate: float) -> float:
    """Tax owed on flip profit at a single flat marginal rate.

    Losses are not tax-adjusted: a non-positive profit owes nothing.
    """
    if marginal_rate <= 0 or profit <= 0:
        return 0.0
    return profit * marginal_rate


def profit_after_tax(profit: float, marginal_rate: float) -> float:
    return profit - flip_income_tax(profit, marginal_rate)
