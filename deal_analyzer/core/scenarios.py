from __future__ import annotations

from typing import Any, Dict

from .brrrr import calculate_brrrr
from .buy_hold import calculate_buy_hold
from .flip import calculate_flip
from .inputs import BRRRRInputs, BuyHoldInputs, FlipInputs, Strategy, StrategyInputs
from .results import FlipResult, StrategyResult, to_dict


def run_scenario(inputs: StrategyInputs) -> StrategyResult:
    """Dispatch an input record to its strategy's calculator."""
    strategy = getattr(inputs, "strategy", None)
    if strategy is Strategy.BUY_HOLD and isinstance(inputs, BuyHoldInputs):
        return calculate_buy_hold(inputs)
    if strategy is Strategy.BRRRR and isinstance(inputs, BRRRRInputs):
        return calculate_brrrr(inputs)
    if strategy is Strategy.FLIP and isinstance(inputs, FlipInputs):
        return calculate_flip(inputs)
    raise TypeError(f"unsupported input record: {type(inputs).__name__}")


def snapshot(inputs: StrategyInputs) -> Dict[str, Any]:
    """Input and summary payloads as plain values, the form saved analyses keep."""
    result = run_scenario(inputs)
    summary: Dict[str, Any] = {"metrics": to_dict(result.metrics)}
    if not isinstance(result, FlipResult):
        summary["annual"] = [to_dict(a) for a in result.annual]
    return {"input_payload": to_dict(inputs), "summary_payload": summary}
