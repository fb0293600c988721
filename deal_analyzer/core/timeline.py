from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .amortization import MONTHS_IN_YEAR, rollup_by_year
from .results import AnnualSummary, MonthlyResult
from .utils import safe_div


@dataclass(frozen=True)
class MonthStep:
    """Raw figures for one month, before the running totals are applied."""

    rent: float = 0.0
    gross_income: float = 0.0
    vacancy: float = 0.0
    operating_expenses: float = 0.0
    debt_service: float = 0.0
    interest: float = 0.0
    property_value: float = 0.0
    loan_balance: float = 0.0
    taxes: float = 0.0
    insurance: float = 0.0
    rehab_spend: float = 0.0


# (global_month, phase_month) -> MonthStep, both 1-based
StepFn = Callable[[int, int], MonthStep]


@dataclass(frozen=True)
class Phase:
    tag: str
    months: int
    step: StepFn


@dataclass(frozen=True)
class Timeline:
    monthly: Tuple[MonthlyResult, ...]
    interest: Tuple[float, ...]


def rent_for_month(base_rent: float, annual_increase_rate: float, month: int) -> float:
    """Rent steps up once every 12 months; flat within each year."""
    year_index = (month - 1) // MONTHS_IN_YEAR
    return base_rent * (1.0 + annual_increase_rate) ** year_index


def property_value_for_month(start_value: float, monthly_rate: float, month: int) -> float:
    return start_value * (1.0 + monthly_rate) ** (month - 1)


def run_phases(phases: Iterable[Phase], initial_cash_invested: float) -> Timeline:
    """Walk phases in order, numbering months continuously across them.

    Each phase's step function receives both the global month and the month
    within the phase. Cash flow is always NOI minus debt service; the running
    total starts from the negative of the initial cash outlay.
    """
    rows: List[MonthlyResult] = []
    interest: List[float] = []
    cumulative = -float(initial_cash_invested)
    month = 0
    for phase in phases:
        for local in range(1, phase.months + 1):
            month += 1
            s = phase.step(month, local)
            noi = s.gross_income - s.operating_expenses
            cash_flow = noi - s.debt_service
            cumulative += cash_flow
            rows.append(
                MonthlyResult(
                    month=month,
                    rent=s.rent,
                    gross_income=s.gross_income,
                    vacancy=s.vacancy,
                    operating_expenses=s.operating_expenses,
                    noi=noi,
                    debt_service=s.debt_service,
                    cash_flow=cash_flow,
                    cumulative_cash_flow=cumulative,
                    property_value=s.property_value,
                    equity=s.property_value - s.loan_balance,
                    loan_balance=s.loan_balance,
                    taxes=s.taxes,
                    insurance=s.insurance,
                    rehab_spend=s.rehab_spend,
                    phase=phase.tag,
                )
            )
            interest.append(s.interest)
    return Timeline(monthly=tuple(rows), interest=tuple(interest))


def summarize_years(
    monthly: Sequence[MonthlyResult],
    cash_invested: float,
    equity_start: float,
    interest: Optional[Sequence[float]] = None,
) -> Tuple[AnnualSummary, ...]:
    """Roll consecutive 12-month slices into annual summaries.

    - Sum: rent, operating expenses, cash flow, interest, NOI, debt service
    - Last-of-slice: property value, loan balance, equity
    The final slice may be partial. Equity growth is measured against
    ``equity_start`` (equity at the start of the timeline).
    """
    if not monthly:
        return ()

    df = pd.DataFrame(
        {
            "rent": [m.rent for m in monthly],
            "operating_expenses": [m.operating_expenses for m in monthly],
            "cash_flow": [m.cash_flow for m in monthly],
            "noi": [m.noi for m in monthly],
            "debt_service": [m.debt_service for m in monthly],
            "property_value": [m.property_value for m in monthly],
            "loan_balance": [m.loan_balance for m in monthly],
            "equity": [m.equity for m in monthly],
        }
    )
    df["interest"] = list(interest) if interest is not None else 0.0
    # Slices are positional: the first row opens year 1
    months = pd.Series(df.index + 1)
    annual = rollup_by_year(
        df,
        months,
        ["rent", "operating_expenses", "cash_flow", "interest", "noi", "debt_service"],
        ["property_value", "loan_balance", "equity"],
    )

    summaries: List[AnnualSummary] = []
    for year, row in annual.iterrows():
        equity = float(row["equity"])
        cash_flow = float(row["cash_flow"])
        equity_growth = equity - equity_start
        total_return = cash_flow + equity_growth
        summaries.append(
            AnnualSummary(
                year=int(year),
                value=float(row["property_value"]),
                debt=float(row["loan_balance"]),
                equity=equity,
                cash_invested=cash_invested,
                total_cash_invested=cash_invested,
                interest_paid=float(row["interest"]),
                rent=float(row["rent"]),
                expenses=float(row["operating_expenses"]),
                cash_flow=cash_flow,
                equity_growth=equity_growth,
                total_return=total_return,
                annual_return_on_invested_cash=safe_div(total_return, cash_invested, 0.0),
                dscr=safe_div(float(row["noi"]), float(row["debt_service"])),
            )
        )
    return tuple(summaries)
