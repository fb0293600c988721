from __future__ import annotations

from typing import Optional


def monthly_rate_from_annual(annual_rate: float) -> float:
    """Convert an annual rate to its effective monthly equivalent.

    Uses compounding: r_m = (1 + r_a)^(1/12) - 1

    Negative rates above -100% pass through the same formula (no clamping).
    Rates at or below -100% have no real monthly equivalent and map to 0.
    """
    return periodic_rate_from_annual(annual_rate, 12)


def periodic_rate_from_annual(annual_rate: float, periods_per_year: int = 12) -> float:
    """Effective per-period rate for an annual rate compounded over ``periods_per_year``."""
    if annual_rate <= -1.0:
        return 0.0
    return (1.0 + annual_rate) ** (1.0 / periods_per_year) - 1.0


def safe_div(numerator: float, denominator: float, default: Optional[float] = None) -> Optional[float]:
    """Ratio that never raises: returns ``default`` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def opt(value: Optional[float], default: float = 0.0) -> float:
    """Optional input field with a numeric fallback."""
    return default if value is None else float(value)
