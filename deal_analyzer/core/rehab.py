from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Mapping, Optional

QualityTier = Literal["A", "B", "C"]
UnitType = Literal["fixed", "quantity"]

DEFAULT_QUALITY_MULTIPLIERS: Dict[str, float] = {"A": 1.3, "B": 1.0, "C": 0.8}


@dataclass(frozen=True)
class RehabItem:
    """A catalog line item.

    Priced either by a flat ``unit_price`` or by ``base_prices`` keyed by the
    two named tiers "B" (standard) and "C" (budget).
    """

    id: str
    label: str
    unit_type: UnitType = "fixed"
    unit_price: Optional[float] = None
    base_prices: Mapping[str, float] = field(default_factory=dict)
    default_quantity: Optional[float] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class RehabSelection:
    id: str
    selected: bool = False
    quantity: Optional[float] = None
    override_unit_price: Optional[float] = None


def resolve_unit_price(
    item: RehabItem,
    quality: QualityTier = "B",
    multipliers: Optional[Mapping[str, float]] = None,
    override: Optional[float] = None,
) -> float:
    """Unit price of ``item`` at a quality tier.

    An explicit override always wins. Otherwise the tier is read from the
    B/C base-price map, deriving a missing tier from the other one:
    A is B scaled by the A multiplier (or C scaled by it when only C exists),
    B from C undoes the C multiplier, C from B applies it. Items without a
    base-price map scale their flat unit price by the tier multiplier.
    """
    if override is not None:
        return float(override)

    mult = dict(DEFAULT_QUALITY_MULTIPLIERS)
    if multipliers:
        mult.update(multipliers)

    base_b = item.base_prices.get("B")
    base_c = item.base_prices.get("C")
    if base_b is not None or base_c is not None:
        if quality == "A":
            if base_b is not None:
                return base_b * mult["A"]
            return base_c * mult["A"]
        if quality == "B":
            if base_b is not None:
                return float(base_b)
            return base_c / (mult["C"] or 1.0)
        if base_c is not None:
            return float(base_c)
        return base_b * mult["C"]

    return (item.unit_price or 0.0) * mult.get(quality, 1.0)


def total_rehab_cost(
    items: Iterable[RehabItem],
    selections: Iterable[RehabSelection],
    quality: QualityTier = "B",
    multipliers: Optional[Mapping[str, float]] = None,
) -> float:
    """Price the selected catalog items and sum them.

    Items without a selected selection contribute nothing, whatever quantity
    or override the selection carries. Quantity falls back to the item's
    default quantity, then 1.
    """
    by_id = {s.id: s for s in selections}
    total = 0.0
    for item in items:
        sel = by_id.get(item.id)
        if sel is None or not sel.selected:
            continue
        unit_price = resolve_unit_price(item, quality, multipliers, sel.override_unit_price)
        if sel.quantity is not None:
            qty = sel.quantity
        elif item.default_quantity is not None:
            qty = item.default_quantity
        else:
            qty = 1.0
        total += unit_price * qty
    return total
