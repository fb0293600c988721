from loguru import logger

from .amortization import (
	AmortizationRow,
	aggregate_yearly,
	amort_schedule,
	interest_portion,
	payment,
	principal_portion,
	schedule_frame,
	summarize,
)
from .assumptions import Assumptions, brrrr_inputs, buy_hold_inputs, flip_inputs, rehab_budget
from .brrrr import calculate_brrrr
from .buy_hold import calculate_buy_hold
from .config import load_assumptions, load_rehab_catalog
from .flip import calculate_flip
from .inputs import BRRRRInputs, BuyHoldInputs, FlipInputs, LoanTerms, Strategy
from .rehab import RehabItem, RehabSelection, resolve_unit_price, total_rehab_cost
from .results import annual_frame, monthly_frame, to_dict
from .scenarios import run_scenario, snapshot
from .timeline import summarize_years
from .utils import monthly_rate_from_annual, periodic_rate_from_annual, safe_div
from .validation import validation_warnings

# Library stays silent unless the host application opts in
logger.disable("deal_analyzer")

__all__ = [
	"AmortizationRow",
	"aggregate_yearly",
	"amort_schedule",
	"interest_portion",
	"payment",
	"principal_portion",
	"schedule_frame",
	"summarize",
	"Assumptions",
	"brrrr_inputs",
	"buy_hold_inputs",
	"flip_inputs",
	"rehab_budget",
	"calculate_brrrr",
	"calculate_buy_hold",
	"calculate_flip",
	"load_assumptions",
	"load_rehab_catalog",
	"BRRRRInputs",
	"BuyHoldInputs",
	"FlipInputs",
	"LoanTerms",
	"Strategy",
	"RehabItem",
	"RehabSelection",
	"resolve_unit_price",
	"total_rehab_cost",
	"annual_frame",
	"monthly_frame",
	"to_dict",
	"run_scenario",
	"snapshot",
	"summarize_years",
	"monthly_rate_from_annual",
	"periodic_rate_from_annual",
	"safe_div",
	"validation_warnings",
]
