from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Final, List, Literal, Optional

import pandas as pd

from .utils import monthly_rate_from_annual, safe_div


MONTHS_IN_YEAR: Final[int] = 12
SCHEDULE_COLUMNS: Final[List[str]] = ["period", "payment", "interest", "principal", "balance"]

PaymentTiming = Literal["end", "begin"]


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment: float
    interest: float
    principal: float
    balance: float


def payment(
    rate_per_period: float,
    number_of_periods: int,
    principal: float,
    future_value: float = 0.0,
    timing: PaymentTiming = "end",
) -> float:
    """Fixed periodic payment for an annuity (Excel PMT, returned positive).

    Parameters
    ----------
    rate_per_period : float
        Interest rate per period as a decimal.
    number_of_periods : int
        Total number of payments. Non-positive counts yield 0.
    principal : float
        Present value of the loan.
    future_value : float
        Balance remaining after the last payment.
    timing : {"end", "begin"}
        Payments made at the end (ordinary annuity) or start (annuity due)
        of each period.
    """
    if number_of_periods <= 0:
        return 0.0
    if rate_per_period == 0:
        return (principal + future_value) / number_of_periods

    type_flag = 1 if timing == "begin" else 0
    factor = (1 + rate_per_period) ** number_of_periods
    numerator = rate_per_period * (principal * factor + future_value)
    denominator = (1 + rate_per_period * type_flag) * (factor - 1)
    # Degenerate rates (e.g. -100% with payments in advance) have no annuity
    return safe_div(numerator, denominator, 0.0)


def amort_schedule(
    principal: float,
    rate_per_period: float,
    total_payments: int,
    payment_amount: Optional[float] = None,
    future_value: float = 0.0,
    timing: PaymentTiming = "end",
) -> List[AmortizationRow]:
    """Generate a constant-payment amortization schedule.

    Notes
    -----
    - The payment is computed once (unless ``payment_amount`` overrides it).
    - Interest is always derived from the current balance; principal is the
      remainder of the payment.
    - The balance is floored at zero, absorbing rounding on the final period.
    - With ``timing="begin"`` the payment lands before interest accrues, so the
      period's interest is charged on the post-payment balance.
    """
    if total_payments <= 0:
        return []

    amount = (
        payment_amount
        if payment_amount is not None
        else payment(rate_per_period, total_payments, principal, future_value, timing)
    )

    rows: List[AmortizationRow] = []
    balance = float(principal)
    for period in range(1, total_payments + 1):
        if timing == "begin":
            interest = rate_per_period * max(balance - amount, 0.0)
        else:
            interest = rate_per_period * balance
        principal_component = amount - interest
        balance = max(balance - principal_component, 0.0)
        rows.append(
            AmortizationRow(
                period=period,
                payment=float(amount),
                interest=float(interest),
                principal=float(principal_component),
                balance=float(balance),
            )
        )
    return rows


def _row_for_period(
    rate_per_period: float,
    period: int,
    number_of_periods: int,
    principal: float,
    future_value: float,
    timing: PaymentTiming,
) -> Optional[AmortizationRow]:
    if period < 1 or period > number_of_periods:
        return None
    schedule = amort_schedule(
        principal,
        rate_per_period,
        number_of_periods,
        future_value=future_value,
        timing=timing,
    )
    return schedule[period - 1]


def interest_portion(
    rate_per_period: float,
    period: int,
    number_of_periods: int,
    principal: float,
    future_value: float = 0.0,
    timing: PaymentTiming = "end",
) -> float:
    """Interest paid in a single 1-based period (IPMT). Out-of-range periods return 0."""
    row = _row_for_period(rate_per_period, period, number_of_periods, principal, future_value, timing)
    return row.interest if row is not None else 0.0


def principal_portion(
    rate_per_period: float,
    period: int,
    number_of_periods: int,
    principal: float,
    future_value: float = 0.0,
    timing: PaymentTiming = "end",
) -> float:
    """Principal repaid in a single 1-based period (PPMT). Out-of-range periods return 0."""
    row = _row_for_period(rate_per_period, period, number_of_periods, principal, future_value, timing)
    return row.principal if row is not None else 0.0


def schedule_frame(schedule: List[AmortizationRow]) -> pd.DataFrame:
    """Tabular view of a schedule. Columns: period, payment, interest, principal, balance"""
    if not schedule:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS, data=[])
    return pd.DataFrame([asdict(row) for row in schedule], columns=SCHEDULE_COLUMNS)


def rollup_by_year(
    frame: pd.DataFrame,
    months: pd.Series,
    sum_columns: List[str],
    last_columns: List[str],
) -> pd.DataFrame:
    """Group 1-based ``months`` into 12-month years, summing flows and keeping end-of-year stocks.

    The result is indexed by year (1-based) and holds ``sum_columns`` then
    ``last_columns``. A trailing partial year is kept.
    """
    years = (months.to_numpy() - 1) // MONTHS_IN_YEAR + 1
    grouped = frame.groupby(years, sort=True)
    rolled = grouped[sum_columns].sum().join(grouped[last_columns].last())
    rolled.index.name = "year"
    return rolled


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization frame by year.

    Returns a DataFrame with columns: year, payment, interest, principal, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "payment", "interest", "principal", "end_balance"],
            data=[],
        )

    yearly = rollup_by_year(schedule, schedule["period"], ["payment", "interest", "principal"], ["balance"])
    return yearly.rename(columns={"balance": "end_balance"}).reset_index()


@dataclass(frozen=True)
class AmortizationSummary:
    payment_monthly: float
    schedule_monthly: pd.DataFrame
    schedule_yearly: pd.DataFrame


def summarize(principal: float, annual_rate: float, term_months: int) -> AmortizationSummary:
    """Convenience wrapper returning the monthly payment and both schedule views.

    The annual rate is converted to its effective monthly equivalent.
    """
    rate = monthly_rate_from_annual(annual_rate)
    monthly = schedule_frame(amort_schedule(principal, rate, term_months))
    return AmortizationSummary(
        payment_monthly=payment(rate, term_months, principal),
        schedule_monthly=monthly,
        schedule_yearly=aggregate_yearly(monthly),
    )
