from __future__ import annotations

from dataclasses import asdict, dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

# Phase tags are descriptive only and carried through for display
PHASE_CURRENT = "current"
PHASE_REHAB = "rehab"
PHASE_STABILIZED = "stabilized"
PHASE_MARKETING = "marketing"


@dataclass(frozen=True)
class MonthlyResult:
    month: int
    rent: float
    gross_income: float
    vacancy: float
    operating_expenses: float
    noi: float
    debt_service: float
    cash_flow: float
    cumulative_cash_flow: float
    property_value: float
    equity: float
    loan_balance: float
    taxes: float = 0.0
    insurance: float = 0.0
    rehab_spend: float = 0.0
    phase: str = PHASE_STABILIZED


@dataclass(frozen=True)
class AnnualSummary:
    year: int
    value: float
    debt: float
    equity: float
    cash_invested: float
    total_cash_invested: float
    interest_paid: float
    rent: float
    expenses: float
    cash_flow: float
    equity_growth: float
    total_return: float
    annual_return_on_invested_cash: Optional[float] = None
    dscr: Optional[float] = None


@dataclass(frozen=True)
class BuyHoldMetrics:
    cash_required: float
    year_one_cash_flow: float
    dscr: Optional[float]
    cash_on_cash_return: float
    total_return: float


@dataclass(frozen=True)
class BRRRRMetrics:
    cash_required: float
    year_one_cash_flow: float
    dscr: Optional[float]
    cash_on_cash_return: float
    total_return: float
    cash_left_in_deal: float
    refi_proceeds: float
    bridge_interest: float


@dataclass(frozen=True)
class FlipMetrics:
    total_cash_required: float
    profit_before_tax: float
    profit_after_tax: float
    roi: float
    hold_months: int


@dataclass(frozen=True)
class BuyHoldResult:
    monthly: Tuple[MonthlyResult, ...]
    annual: Tuple[AnnualSummary, ...]
    metrics: BuyHoldMetrics


@dataclass(frozen=True)
class BRRRRResult:
    monthly: Tuple[MonthlyResult, ...]
    annual: Tuple[AnnualSummary, ...]
    metrics: BRRRRMetrics


@dataclass(frozen=True)
class FlipResult:
    monthly: Tuple[MonthlyResult, ...]
    metrics: FlipMetrics


StrategyResult = Union[BuyHoldResult, BRRRRResult, FlipResult]


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_dict(record: Any) -> Dict[str, Any]:
    """Nested plain dict/list/number/str form of any record (inputs or results).

    Enums become their string values and tuples become lists, so the output
    can be handed to ``json.dumps`` as-is.
    """
    if not is_dataclass(record):
        raise TypeError(f"expected a dataclass record, got {type(record).__name__}")
    return _plain(asdict(record))


def monthly_frame(result: StrategyResult) -> pd.DataFrame:
    """One row per simulated month."""
    columns = [f.name for f in fields(MonthlyResult)]
    return pd.DataFrame([asdict(m) for m in result.monthly], columns=columns)


def annual_frame(result: StrategyResult) -> pd.DataFrame:
    """One row per year. Flip results carry no annual rollup and give an empty frame."""
    columns = [f.name for f in fields(AnnualSummary)]
    annual = getattr(result, "annual", ())
    return pd.DataFrame([asdict(a) for a in annual], columns=columns)
